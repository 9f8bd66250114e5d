"""
Shared fixtures.

Every test gets its own SQLite file and asset directory under ``tmp_path``
and an app built from those settings, so nothing leaks between tests.
"""

import pytest
from fastapi.testclient import TestClient

from baatcheet.core.config import Settings
from baatcheet.main import create_app

# Smallest PNG header; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        ASSETS_DIR=str(tmp_path / "assets"),
        SECRET_KEY="test-secret-key",
        BACKEND_CORS_ORIGINS="http://localhost:3000/",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        MAX_UPLOAD_SIZE=1024,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(app):
    return app.state.storage


def register(client, email="alice@example.com", password="secret123", **fields):
    data = {
        "first_name": "Alice",
        "last_name": "Smith",
        "email": email,
        "password": password,
    }
    data.update(fields)
    response = client.post("/auth/register", data=data)
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email="alice@example.com", password="secret123"):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    user = register(client)
    return {"user": user, "token": login(client)}


@pytest.fixture
def bob(client):
    user = register(client, email="bob@example.com", first_name="Bob", last_name="Jones")
    return {"user": user, "token": login(client, email="bob@example.com")}

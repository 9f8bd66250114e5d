from fastapi import Depends, Request

from baatcheet.core import security
from baatcheet.core.config import Settings
from baatcheet.core.exceptions import AuthError
from baatcheet.core.storage import LocalAssetStorage
from baatcheet.db.session import get_db  # noqa: F401  re-exported for routers


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with"""
    return request.app.state.settings


def get_storage(request: Request) -> LocalAssetStorage:
    """Asset storage from app state"""
    return request.app.state.storage


def verify_token(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """
    Verify the bearer token from the Authorization header.

    On success the user id is stored on ``request.state.user_id`` and
    returned; otherwise AuthError stops the request before the route runs.
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Invalid authorization header")

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthError("Invalid authorization header")

    user_id = security.decode_access_token(token, settings)
    request.state.user_id = user_id
    return user_id

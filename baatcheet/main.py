from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from baatcheet.core.config import Settings, settings as default_settings
from baatcheet.core.exceptions import AuthError, BaatcheetError, ForbiddenError, StoreError, ValidationError
from baatcheet.core.storage import LocalAssetStorage
from baatcheet.db.init_db import create_all_tables
from baatcheet.db.session import create_db_engine, create_session_factory
from baatcheet.middleware.request_logging import RequestLoggingMiddleware
from baatcheet.middleware.security_headers import SecurityHeadersMiddleware
from baatcheet.modules.auth.api.router import router as auth_router
from baatcheet.modules.user_management.api.router import router as user_router
from baatcheet.modules.posts.api.router import router as posts_router

logger = logging.getLogger("baatcheet")


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Map application exceptions to JSON error responses"""

    @app.exception_handler(BaatcheetError)
    async def handle_app_error(request: Request, exc: BaatcheetError):
        content = {"error": exc.error_code, "message": exc.message}
        headers = None

        if isinstance(exc, ValidationError):
            logger.warning(f"Validation error on {request.url.path}: {exc.message}")
            content["details"] = exc.context
        elif isinstance(exc, AuthError):
            logger.warning(f"Auth error on {request.url.path}: {exc.message}")
            headers = {"WWW-Authenticate": "Bearer"}
        elif isinstance(exc, ForbiddenError):
            logger.warning(f"Forbidden on {request.url.path}: {exc.message} | Context: {exc.context}")
        elif isinstance(exc, StoreError):
            # Details stay in the log
            logger.error(f"Store error on {request.url.path}: {exc.message} | Context: {exc.context}")
            content["message"] = StoreError.public_message

        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error(f"Unhandled database error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=StoreError.status_code,
            content={"error": StoreError.error_code, "message": StoreError.public_message},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for one configuration.

    Every piece of process-wide state (database engine, asset directory,
    token secret, CORS list) comes from ``settings`` and hangs off
    ``app.state``, so tests can build as many apps as they like.
    """
    settings = settings or default_settings
    setup_logging(settings)

    engine = create_db_engine(settings.DATABASE_URL)
    storage = LocalAssetStorage(
        settings.ASSETS_DIR,
        max_size=settings.MAX_UPLOAD_SIZE,
        allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
    )
    storage.ensure_directory()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
        create_all_tables(engine)
        yield
        engine.dispose()
        logger.info("Shutdown complete")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Social networking API: users, friends, posts and likes",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.storage = storage

    # Middleware runs in reverse order of addition: CORS first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    app.mount(settings.ASSETS_URL_PATH, StaticFiles(directory=str(storage.directory)), name="assets")

    app.include_router(auth_router, prefix="/auth", tags=["authentication"])
    app.include_router(user_router, prefix="/users", tags=["users"])
    app.include_router(posts_router, prefix="/posts", tags=["posts"])

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to Baatcheet",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app

# src/mingle/main.py
"""Main entry point for the Mingle application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from mingle.api.v1 import (
    comments_router,
    feed_router,
    follows_router,
    posts_router,
    profiles_router,
    search_router,
    users_router,
)
from mingle.core.exceptions import MingleError
from mingle.core.settings import Settings, get_settings
from mingle.db.session import build_engine, build_session_factory, create_tables
from mingle.services.storage import build_image_stores

logger = logging.getLogger(__name__)

POST_IMAGES_URL = "/post/Images"
PROFILE_IMAGES_URL = "/profile/Images"


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" marker from the location.
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MingleError)
    async def handle_domain_error(request: Request, exc: MingleError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Server error"},
        )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application from explicit settings.

    Args:
        app_settings: Settings to use; the environment is read when omitted.

    Returns:
        A configured FastAPI application whose engine, session factory and
        image stores live on ``app.state``.
    """
    settings = app_settings or get_settings()
    _configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Social networking API: profiles, follows, posts, likes and comments",
        version=settings.app_version,
        debug=settings.debug,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.image_stores = build_image_stores(settings)
    if settings.auto_create_tables:
        create_tables(engine)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    _register_exception_handlers(app)

    # Include API routers
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(profiles_router, prefix="/api/v1")
    app.include_router(posts_router, prefix="/api/v1")
    app.include_router(comments_router, prefix="/api/v1")
    app.include_router(follows_router, prefix="/api/v1")
    app.include_router(feed_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")

    # Uploaded images are served back from their storage directories
    app.mount(
        POST_IMAGES_URL,
        StaticFiles(directory=app.state.image_stores.posts.directory),
        name="post-images",
    )
    app.mount(
        PROFILE_IMAGES_URL,
        StaticFiles(directory=app.state.image_stores.profiles.directory),
        name="profile-images",
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    logger.info("Mingle API configured against %s", engine.url.render_as_string(hide_password=True))
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mingle.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug,
    )

# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import auth_router, health_router, notes_router
from .config import Settings, get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import RedisClient
from .database import Database
from .middleware.errors import register_exception_handlers
from .middleware.rate_limit import InMemoryRateLimitStore, RateLimiter, RedisRateLimitStore
from .security.jwt import TokenService
from .security.password_policy import PasswordPolicy

logger = get_logger("main")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and the services it shares across requests."""
    settings = settings or get_settings()
    setup_logging(settings)

    database = Database.from_settings(settings)
    redis_client = None
    if settings.rate_limit_backend == "redis":
        redis_client = RedisClient.from_settings(settings)
        store = RedisRateLimitStore(redis_client)
    else:
        store = InMemoryRateLimitStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(
            "Starting NoteKeep application",
            extra={
                "version": settings.app_version,
                "environment": settings.environment,
                "debug": settings.debug,
            },
        )

        if redis_client is not None:
            await redis_client.connect()

        if settings.create_tables_on_startup:
            try:
                await database.create_tables()
            except Exception as e:
                logger.error("Failed to create database tables", exc_info=e)
                raise

        yield

        logger.info("Shutting down NoteKeep application")
        if redis_client is not None:
            await redis_client.disconnect()
        await database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Personal notes API with JWT authentication",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.redis_client = redis_client
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_policy = PasswordPolicy.from_settings(settings)
    app.state.rate_limiter = RateLimiter.from_settings(settings, store)

    register_exception_handlers(app, debug=settings.debug)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(notes_router, prefix=settings.api_prefix)
    app.include_router(health_router, prefix=settings.api_prefix)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": settings.app_name, "version": settings.app_version, "docs": "/docs"}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "notekeep.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()

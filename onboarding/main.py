# Standard library imports
from contextlib import asynccontextmanager
from typing import Optional
import logging

# External package imports
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import auth_router, health_check_router
from .core.config import Settings, get_settings
from .core.logging_config import configure_logging
from .di.container import DIContainer
from .domain.repositories.user_repository import UserRepository
from .infrastructure.db.mongo_connection import close_connection

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Creates the unique email index before the first request is served and
    closes the MongoDB client on shutdown.
    """
    container: DIContainer = app.state.container
    user_repository = container.get(UserRepository)

    ensure_indexes = getattr(user_repository, "ensure_indexes", None)
    if ensure_indexes is not None:
        try:
            await ensure_indexes()
            logger.info("User indexes ensured")
        except Exception as e:
            # Without the unique index duplicate emails could slip through
            logger.error(f"Failed to ensure user indexes: {e}", exc_info=True)
            raise

    yield

    close_connection()
    logger.info("Application shutdown complete")


def create_application(
    settings: Optional[Settings] = None,
    container: Optional[DIContainer] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading (only when no settings are passed in)
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Args:
        settings: Explicit settings; read from the environment when omitted
        container: Explicit DI container; built from settings when omitted

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        # Load environment variables from .env file in the working directory
        load_dotenv()
        settings = container.settings if container is not None else get_settings()

    configure_logging(settings.log_level)

    # Create FastAPI app
    application = FastAPI(
        title="User Onboarding API",
        version="1.0.0",
        description="Registers users with a hashed password and an optional profile picture",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.container = container or DIContainer(settings)

    # Add CORS middleware
    allow_all = settings.cors_origins == ["*"]
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(auth_router, prefix="/auth")
    application.include_router(health_check_router, prefix="/health_check")

    return application


def run() -> None:
    """Serve the application with uvicorn on the configured PORT."""
    load_dotenv()
    settings = get_settings()
    uvicorn.run(
        "onboarding.main:create_application",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
    )


if __name__ == "__main__":
    run()

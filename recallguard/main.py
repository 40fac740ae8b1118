"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from recallguard import __version__
from recallguard.api.v1.router import api_router
from recallguard.common.request_id import RequestIDMiddleware
from recallguard.core.config import settings
from recallguard.core.errors import (
    general_exception_handler,
    http_exception_handler,
    scheduling_exception_handler,
    validation_exception_handler,
)
from recallguard.core.logging import get_logger, setup_logging
from recallguard.core.seed_notes import seed_demo_notes
from recallguard.db.base import Base
from recallguard.db.engine import engine
from recallguard.learning_engine.srs.errors import SchedulingError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()

    # Create tables (in production, use migrations)
    if settings.ENV == "dev":
        import recallguard.models  # noqa: F401

        Base.metadata.create_all(bind=engine)

    seed_demo_notes()

    logger.info(
        "Application started",
        extra={"env": settings.ENV, "llm_enabled": settings.llm_enabled},
    )
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=__version__,
        description="Spaced-repetition recall API: notes in, daily questions out",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url="/redoc" if settings.ENV != "prod" else None,
        lifespan=lifespan,
    )

    # Add middleware (order matters - last added is outermost)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SchedulingError, scheduling_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - API information."""
        return {
            "message": settings.PROJECT_NAME,
            "version": __version__,
            "docs_url": "/docs" if settings.ENV != "prod" else None,
        }

    return app


app = create_app()

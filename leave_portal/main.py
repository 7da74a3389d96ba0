from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leave_portal.api.v1.router import router as api_v1_router
from leave_portal.config.logging import get_logger, setup_logging
from leave_portal.config.settings import settings
from leave_portal.core.middleware import register_exception_handlers, register_middlewares
from leave_portal.db.init_db import init_db

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema creation is for dev/demo only; production databases are migrated.
    if not settings.is_production():
        init_db()
    logger.info(f"{settings.APP_NAME} started", extra={"environment": settings.ENVIRONMENT})
    yield
    logger.info(f"{settings.APP_NAME} stopped")


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    wildcard = not settings.CORS_ORIGINS or settings.CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if wildcard else settings.CORS_ORIGINS,
        # Browsers refuse credentials with a wildcard origin
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("leave_portal.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from stockroom.api.api import api_router
from stockroom.core.config import DEFAULT_SECRET_KEY, Settings, settings as default_settings
from stockroom.core.exception_handlers import setup_exception_handlers
from stockroom.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from stockroom.core.rate_limit import RateLimitMiddleware
from stockroom.repositories.store import Store, build_store
from stockroom.seed import seed_demo_data

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler()
        ]
    )


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Build the application with its own settings and storage."""
    settings = settings or default_settings
    configure_logging(settings)

    if settings.SECRET_KEY == DEFAULT_SECRET_KEY and not settings.is_development:
        logger.warning(f"SECRET_KEY is the built-in default in {settings.ENVIRONMENT}; set it in the environment")

    if store is None:
        store = build_store(settings)
        if settings.SEED_DEMO_DATA:
            seed_demo_data(store, settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Stockroom: inventory management API",
        version="1.0.0",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
    )
    app.state.settings = settings
    app.state.store = store

    # Rate limit API calls per client IP
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        path_prefix=f"{settings.API_PREFIX}/",
    )

    if settings.is_development:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)

    # Added last so it wraps everything above
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    @app.get("/")
    def root():
        """Root endpoint that returns a welcome message."""
        return {
            "message": f"Welcome to the {settings.PROJECT_NAME} API. See {settings.API_PREFIX}/health for status.",
            "docs_url": "/docs",
        }

    @app.get(f"{settings.API_PREFIX}/health")
    def health_check():
        """Health check endpoint for monitoring and load balancers."""
        return {
            "status": "OK",
            "message": "Inventory Management API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.ENVIRONMENT,
        }

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT}, {settings.STORAGE_BACKEND} storage)")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("stockroom.main:app", host="0.0.0.0", port=8000)

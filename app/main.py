from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.v1 import api_router
from app.features.health.routes.health import router as health_router
from app.middlewares.rate_limit import RateLimitMiddleware
from app.platform.config import get_settings
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import get_logger

logger = get_logger(__name__)


def create_app(rate_limits: Optional[Dict[str, int]] = None) -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Rule-based SEO auditor for raw page markup",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Scores a page's markup against ten weighted SEO categories.",
            "version": settings.APP_VERSION,
            "docs_url": "/docs",
            "api_base": settings.API_V1_PREFIX,
        }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RateLimitMiddleware, limits=rate_limits)

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started ({settings.ENVIRONMENT})")
    return app


app = create_app()

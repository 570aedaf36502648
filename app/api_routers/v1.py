from fastapi import APIRouter

from app.features.seo_audit.routes.audit import router as seo_audit_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(seo_audit_router)

from fastapi import APIRouter

from .admin_panel import router as admin_panel_api_router
from .catalog import router as catalog_router
from .client_portal import router as client_portal_api_router

# Main API router that will be included in app/__init__.py
api_router = APIRouter()

# Public catalog reads under /api
api_router.include_router(catalog_router)

# Back office under /api/admin
api_router.include_router(admin_panel_api_router, prefix="/admin", tags=["Admin Panel API"])

# Per-user cart and inquiry list under /api/portal
api_router.include_router(client_portal_api_router, prefix="/portal", tags=["Client Portal API"])

__all__ = ["api_router"]

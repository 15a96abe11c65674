from fastapi import APIRouter

from . import data, maintenance, menus

router = APIRouter()

router.include_router(data.router)
router.include_router(menus.router)
router.include_router(maintenance.router)

__all__ = ["router"]

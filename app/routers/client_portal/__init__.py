from fastapi import APIRouter

from . import account, cart, inquiry

router = APIRouter()

router.include_router(account.router)
router.include_router(cart.router)
router.include_router(inquiry.router)

__all__ = ["router"]

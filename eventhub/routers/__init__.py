"""Storefront API Router.

Combines all sub-routers into a single router with prefix /api.
"""

from fastapi import APIRouter

from .admin import router as admin_router
from .auth import router as auth_router
from .cart import router as cart_router
from .checkout import router as checkout_router
from .storefront import router as storefront_router

router = APIRouter(prefix="/api")

router.include_router(storefront_router)
router.include_router(auth_router)
router.include_router(cart_router)
router.include_router(checkout_router)
router.include_router(admin_router)

__all__ = ["router"]

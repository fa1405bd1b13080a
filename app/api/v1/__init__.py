"""
API v1 Router
"""

from fastapi import APIRouter

from app.api.v1 import image_guard, meta

router = APIRouter()

# Include all endpoint routers
router.include_router(image_guard.router)
router.include_router(meta.router)

__all__ = ["router"]

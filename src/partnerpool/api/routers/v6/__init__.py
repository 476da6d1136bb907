"""API v6 routers."""

from fastapi import APIRouter

from .business_partners import router as business_partners_router

router = APIRouter(prefix="/v6")

router.include_router(business_partners_router)

__all__ = ["router", "business_partners_router"]

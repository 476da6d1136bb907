"""API v7 routers."""

from fastapi import APIRouter

from .addresses import router as addresses_router
from .business_partners import router as business_partners_router
from .legal_entities import router as legal_entities_router
from .sites import router as sites_router

router = APIRouter(prefix="/v7")

router.include_router(business_partners_router)
router.include_router(legal_entities_router)
router.include_router(addresses_router)
router.include_router(sites_router)

__all__ = [
    "router",
    "addresses_router",
    "business_partners_router",
    "legal_entities_router",
    "sites_router",
]

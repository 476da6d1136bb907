"""API routers."""

from .health import router as health_router
from .v6 import router as v6_router
from .v7 import router as v7_router

__all__ = ["health_router", "v6_router", "v7_router"]

"""API routers for the REST API."""

from carcass.web.routers.export import router as export_router
from carcass.web.routers.price import router as price_router
from carcass.web.routers.segments import router as segments_router
from carcass.web.routers.validate import router as validate_router

__all__ = [
    "export_router",
    "price_router",
    "segments_router",
    "validate_router",
]

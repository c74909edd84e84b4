"""API routers for the REST API."""

from tileplan.web.routers.estimate import router as estimate_router
from tileplan.web.routers.validate import router as validate_router

__all__ = [
    "estimate_router",
    "validate_router",
]

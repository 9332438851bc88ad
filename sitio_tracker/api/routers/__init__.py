"""
sitio_tracker/api/routers package marker.
"""

from sitio_tracker.api.routers.planning import router as planning_router
from sitio_tracker.api.routers.sitio_import import router as sitio_import_router

__all__ = [
    "planning_router",
    "sitio_import_router",
]

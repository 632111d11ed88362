"""
label_import/api/routers package marker.
"""

from label_import.api.routers.labels import router as labels_router
from label_import.api.routers.projects import router as projects_router

__all__ = [
    "labels_router",
    "projects_router",
]

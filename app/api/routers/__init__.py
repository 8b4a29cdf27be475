"""
app/api/routers package marker.
"""

from app.api.routers.bulk_import import router as bulk_import_router
from app.api.routers.dashboard import router as dashboard_router
from app.api.routers.reports import router as reports_router

__all__ = [
    "bulk_import_router",
    "dashboard_router",
    "reports_router",
]

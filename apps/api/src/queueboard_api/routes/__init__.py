"""API routes for queueboard."""

from queueboard_api.routes.dashboard import router as dashboard_router
from queueboard_api.routes.prometheus import router as prometheus_router
from queueboard_api.routes.queues import router as queues_router

__all__ = [
    "dashboard_router",
    "prometheus_router",
    "queues_router",
]

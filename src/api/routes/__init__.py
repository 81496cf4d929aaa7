"""API route exports."""

from api.routes.analyze import router as analyze_router
from api.routes.health import router as health_router

__all__ = ["analyze_router", "health_router"]

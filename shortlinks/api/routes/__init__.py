"""API routes package."""

from .health import router as health_router
from .users import router as users_router
from .links import router as links_router

__all__ = ["health_router", "users_router", "links_router"]

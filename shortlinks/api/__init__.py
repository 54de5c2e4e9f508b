"""API package for the Short Links Service."""

from .routes import health_router, users_router, links_router

__all__ = ["health_router", "users_router", "links_router"]

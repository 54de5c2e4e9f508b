"""Short Links Service - URL shortening with ownership, expiry and analytics."""

__version__ = "0.2.0"

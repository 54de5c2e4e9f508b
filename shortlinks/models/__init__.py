"""Models package for the Short Links Service."""

from .link import ShortLink, LinkCreate, LinkBatchCreate, LinkUpdate
from .user import Tier, Principal, User, UserCreate

__all__ = [
    "ShortLink",
    "LinkCreate",
    "LinkBatchCreate",
    "LinkUpdate",
    "Tier",
    "Principal",
    "User",
    "UserCreate",
]

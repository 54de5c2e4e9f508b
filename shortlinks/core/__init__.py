"""Core package - configuration, errors, blacklist and database utilities."""

from .config import settings, get_settings
from .exceptions import (
    ShortenerError,
    InvalidInput,
    NotFound,
    Forbidden,
    AccessDenied,
    CodeConflict,
    StoreError,
    StoreUnavailable,
    UniqueViolation,
)
from .blacklist import Blacklist, blacklist, get_blacklist
from .database import Database, db, get_db, get_test_db

__all__ = [
    "settings",
    "get_settings",
    "ShortenerError",
    "InvalidInput",
    "NotFound",
    "Forbidden",
    "AccessDenied",
    "CodeConflict",
    "StoreError",
    "StoreUnavailable",
    "UniqueViolation",
    "Blacklist",
    "blacklist",
    "get_blacklist",
    "Database",
    "db",
    "get_db",
    "get_test_db",
]

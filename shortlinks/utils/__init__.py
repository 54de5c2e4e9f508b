"""Utils package for the Short Links Service."""

from .shortener import (
    generate_short_code,
    validate_short_code,
    is_reserved_code,
    parse_expiry,
    is_expired,
    create_short_url,
)

__all__ = [
    "generate_short_code",
    "validate_short_code",
    "is_reserved_code",
    "parse_expiry",
    "is_expired",
    "create_short_url",
]

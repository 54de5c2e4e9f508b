"""Short code and timestamp utilities.

This module handles the generation and validation of short codes and the
parsing/formatting of the timestamps stored next to them.
"""

import random
import string
import re
from datetime import datetime, timezone
from typing import Optional, Union
import logging

from pydantic import TypeAdapter, ValidationError

from ..core.config import settings
from ..core.exceptions import InvalidInput
from ..core.timestamps import utcnow

logger = logging.getLogger(__name__)


# Characters allowed in short codes
ALPHABET = string.ascii_letters + string.digits

SHORT_CODE_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")

# Paths served by fixed routes; a short code equal to one could never redirect
RESERVED_CODES = frozenset({"analytics", "docs", "health", "links", "redoc", "shorten", "users"})

_DATETIME_ADAPTER = TypeAdapter(datetime)


def generate_short_code(length: Optional[int] = None) -> str:
    """Generate a random short code.

    Uniqueness is not guaranteed here; the store's unique constraint on
    ``code`` is the authority.

    Args:
        length: Length of the generated code. Defaults to settings value.

    Returns:
        Random short code string.
    """
    length = length or settings.default_short_code_length
    return "".join(random.choices(ALPHABET, k=length))


def validate_short_code(code: Optional[str]) -> bool:
    """Validate short code format.

    Args:
        code: Short code to validate.

    Returns:
        True if valid, False otherwise.
    """
    if not code:
        return False
    if len(code) < settings.min_short_code_length or len(code) > settings.max_short_code_length:
        return False
    if not SHORT_CODE_PATTERN.match(code):
        return False
    if is_reserved_code(code):
        return False
    return True


def is_reserved_code(code: str) -> bool:
    return code in RESERVED_CODES


def parse_expiry(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an expiry value supplied by a caller.

    Args:
        value: ISO-8601 string (``Z`` suffix allowed), datetime or None.

    Returns:
        Aware UTC datetime, or None when no expiry was supplied.

    Raises:
        InvalidInput: If the value cannot be parsed.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = _DATETIME_ADAPTER.validate_python(value.strip())
        except (ValidationError, AttributeError) as e:
            logger.warning(f"Rejected expiry value {value!r}: {e}")
            raise InvalidInput(f"Invalid expiry date: {value}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Check if a link has expired.

    A link expiring exactly at ``now`` is already expired.
    """
    if expires_at is None:
        return False
    now = now or utcnow()
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= now


def create_short_url(base_url: str, short_code: str) -> str:
    """Create full short URL from base URL and short code.

    Args:
        base_url: Base URL of the service.
        short_code: Short code.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{short_code}"

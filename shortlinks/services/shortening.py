"""Shortening engine: decides whether to reuse a mapping or create one."""

import logging
from datetime import datetime
from typing import Optional, Union

from ..core.config import settings
from ..core.database import Database
from ..core.exceptions import CodeConflict, Forbidden, InvalidInput, UniqueViolation
from ..core.timestamps import to_db_timestamp
from ..models.user import Principal
from ..utils.shortener import (
    generate_short_code,
    is_reserved_code,
    parse_expiry,
    validate_short_code,
)

logger = logging.getLogger(__name__)


class ShorteningEngine:
    """Creates short links."""

    def __init__(
        self,
        db: Database,
        max_collision_retries: Optional[int] = None,
        dedup: Optional[bool] = None,
        allow_anonymous: Optional[bool] = None,
    ):
        """Initialize the engine.

        Args:
            db: Record store.
            max_collision_retries: Attempts at a fresh generated code. Defaults to settings.
            dedup: Whether to reuse an existing link for the same URL and owner.
            allow_anonymous: Whether callers without a principal may shorten.
        """
        self.db = db
        self.max_collision_retries = (
            max_collision_retries
            if max_collision_retries is not None
            else settings.max_collision_retries
        )
        self.dedup = settings.dedup_urls if dedup is None else dedup
        self.allow_anonymous = (
            settings.allow_anonymous if allow_anonymous is None else allow_anonymous
        )

    def shorten(
        self,
        url: str,
        owner: Optional[Principal] = None,
        custom_code: Optional[str] = None,
        expiry: Union[str, datetime, None] = None,
        password: Optional[str] = None,
    ) -> str:
        """Shorten a URL.

        Args:
            url: The original long URL.
            owner: Calling principal, or None for anonymous callers.
            custom_code: Code to use verbatim instead of a generated one.
            expiry: Optional expiry as ISO-8601 string or datetime.
            password: Optional password required at resolution.

        Returns:
            The short code.

        Raises:
            InvalidInput: Empty URL, malformed custom code or expiry.
            CodeConflict: Custom code already used, or no free generated code.
            Forbidden: Anonymous caller while anonymous shortening is disabled.
        """
        url = (url or "").strip()
        if not url:
            raise InvalidInput("URL is required")
        if owner is None and not self.allow_anonymous:
            raise Forbidden("Authentication is required to shorten URLs")

        expires_at = parse_expiry(expiry)
        password = password or None
        owner_id = owner.id if owner else None
        stored_expiry = to_db_timestamp(expires_at) if expires_at else None

        if custom_code:
            return self.create_custom(url, custom_code, owner_id, stored_expiry, password)

        if self.dedup and expires_at is None and password is None:
            existing = self.db.find_by_url(url, owner_id)
            if existing:
                logger.info(f"Reusing short URL {existing['code']} for owner {owner_id}")
                return existing["code"]

        return self.create_generated(url, owner_id, stored_expiry, password)

    def create_custom(
        self,
        url: str,
        custom_code: str,
        owner_id: Optional[int] = None,
        expires_at: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str:
        """Insert a link under a caller-supplied code."""
        if is_reserved_code(custom_code):
            raise InvalidInput(f"Short code '{custom_code}' is reserved")
        if not validate_short_code(custom_code):
            raise InvalidInput(
                f"Custom code must be {settings.min_short_code_length}-"
                f"{settings.max_short_code_length} alphanumeric characters"
            )
        if self.db.code_exists(custom_code):
            raise CodeConflict(f"Short code '{custom_code}' already exists")
        try:
            self.db.insert(custom_code, url, owner_id, expires_at, password)
        except UniqueViolation as e:
            raise CodeConflict(f"Short code '{custom_code}' already exists") from e
        return custom_code

    def create_generated(
        self,
        url: str,
        owner_id: Optional[int] = None,
        expires_at: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str:
        """Insert a link under a freshly generated code.

        A collision is retried with a new code up to ``max_collision_retries``
        times.
        """
        for attempt in range(1, self.max_collision_retries + 1):
            code = generate_short_code()
            if is_reserved_code(code):
                continue
            try:
                self.db.insert(code, url, owner_id, expires_at, password)
                return code
            except UniqueViolation:
                logger.warning(
                    f"Generated code {code} collided "
                    f"(attempt {attempt}/{self.max_collision_retries})"
                )
        raise CodeConflict("Failed to generate unique short code")

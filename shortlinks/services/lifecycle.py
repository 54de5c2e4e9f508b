"""Lifecycle manager: owner-scoped delete, update, list and inspection."""

import logging
from datetime import datetime
from typing import Optional, Union

from ..core.database import Database
from ..core.exceptions import Forbidden, InvalidInput, NotFound
from ..core.timestamps import to_db_timestamp
from ..models.link import ShortLink
from ..models.user import Principal
from ..utils.shortener import parse_expiry
from .policy import can_manage

logger = logging.getLogger(__name__)


class LifecycleManager:
    """Manages links on behalf of their owners."""

    def __init__(self, db: Database):
        self.db = db

    def _owned_link(self, code: str, requester: Optional[Principal]) -> ShortLink:
        """Fetch a non-deleted link the requester owns.

        Expired links are returned so their owner can extend them.
        """
        row = self.db.find_by_code(code)
        if row is None:
            raise NotFound()
        link = ShortLink(**row)
        if link.is_deleted:
            raise NotFound()

        requester_id = requester.id if requester else None
        if not can_manage(link.owner_id, requester_id):
            logger.warning(f"User {requester_id} denied access to {code}")
            raise Forbidden()
        return link

    def soft_delete(self, code: str, requester: Optional[Principal]) -> None:
        """Mark a link deleted. A second call raises ``NotFound``."""
        self._owned_link(code, requester)
        if not self.db.soft_delete(code):
            raise NotFound()

    def update(
        self,
        code: str,
        requester: Optional[Principal],
        expiry: Union[str, datetime, None],
        password: Optional[str] = None,
    ) -> ShortLink:
        """Set a new expiry and, optionally, a new password.

        An absent or empty password keeps the current one.

        Raises:
            NotFound: Code absent or deleted.
            Forbidden: Requester is not the owner.
            InvalidInput: Expiry missing or malformed.
        """
        self._owned_link(code, requester)
        expires_at = parse_expiry(expiry)
        if expires_at is None:
            raise InvalidInput("Expiry date is required")

        if not self.db.update_expiry_password(code, to_db_timestamp(expires_at), password or None):
            raise NotFound()
        return ShortLink(**self.db.find_by_code(code))

    def info(self, code: str, requester: Optional[Principal]) -> ShortLink:
        return self._owned_link(code, requester)

    def list(self, requester: Optional[Principal]) -> list[ShortLink]:
        """All live links owned by the requester, newest first."""
        if requester is None:
            raise Forbidden("Authentication is required to list links")
        return [ShortLink(**row) for row in self.db.list_by_owner(requester.id)]

"""Resolution engine: validates a code at redirect time and counts the visit."""

import hmac
import logging
from typing import Optional

from ..core.database import Database
from ..core.exceptions import AccessDenied, NotFound
from ..models.link import ShortLink
from ..core.timestamps import utcnow
from ..utils.shortener import is_expired

logger = logging.getLogger(__name__)


def _password_matches(supplied: Optional[str], expected: str) -> bool:
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


class ResolutionEngine:
    """Resolves short codes to their original URLs."""

    def __init__(self, db: Database):
        self.db = db

    def resolve(self, code: str, password: Optional[str] = None) -> str:
        """Resolve a code and record the visit.

        Missing, soft-deleted and expired links all raise the same
        ``NotFound``. A password failure records nothing.

        Args:
            code: The short code.
            password: Password supplied by the visitor.

        Returns:
            The original URL.

        Raises:
            NotFound: Code absent, deleted or expired.
            AccessDenied: Link is protected and the password is missing or wrong.
        """
        row = self.db.find_by_code(code)
        if row is None:
            raise NotFound()

        link = ShortLink(**row)
        if link.is_deleted or is_expired(link.expires_at, utcnow()):
            raise NotFound()

        if link.is_protected and not _password_matches(password, link.password):
            logger.warning(f"Password check failed for {code}")
            raise AccessDenied()

        # Deleted between the lookup and the increment.
        if not self.db.increment_visit(code):
            raise NotFound()

        return link.original_url

"""Read-only view of recent activity."""

from typing import Optional

from ..core.config import settings
from ..core.database import Database
from ..core.exceptions import InvalidInput
from ..models.link import ShortLink


class AnalyticsReader:
    def __init__(self, db: Database):
        self.db = db

    def recent(self, limit: Optional[int] = None) -> list[ShortLink]:
        """Most recently created live links, newest first."""
        limit = settings.default_recent_limit if limit is None else limit
        if limit < 1 or limit > settings.max_recent_limit:
            raise InvalidInput(f"limit must be between 1 and {settings.max_recent_limit}")
        return [ShortLink(**row) for row in self.db.recent(limit)]

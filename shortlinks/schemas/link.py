"""Response schemas for the Short Links Service."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from ..models.link import ShortLink
from ..models.user import Tier, User
from ..utils.shortener import create_short_url


class ShortenResponse(BaseModel):
    """Response model for created short URL."""

    original_url: str
    short_code: str
    short_url: str


class BatchShortenResponse(BaseModel):
    """Response model for bulk creation."""

    short_codes: list[str]
    short_urls: list[str]


class LinkInfoResponse(BaseModel):
    """Response model for link info. The password itself is never returned.

    ``original_url`` is None when the target of a protected link is withheld.
    """

    original_url: Optional[str] = None
    short_code: str
    short_url: str
    owner_id: Optional[int] = None
    created_at: datetime
    expires_at: Optional[datetime] = None
    visit_count: int
    last_accessed_at: Optional[datetime] = None
    password_protected: bool

    @classmethod
    def from_link(
        cls, link: ShortLink, base_url: str, reveal_protected: bool = True
    ) -> "LinkInfoResponse":
        """Build the response; ``reveal_protected=False`` hides protected targets."""
        hidden = link.is_protected and not reveal_protected
        return cls(
            original_url=None if hidden else link.original_url,
            short_code=link.code,
            short_url=create_short_url(base_url, link.code),
            owner_id=link.owner_id,
            created_at=link.created_at,
            expires_at=link.expires_at,
            visit_count=link.visit_count,
            last_accessed_at=link.last_accessed_at,
            password_protected=link.is_protected,
        )


class AnalyticsResponse(BaseModel):
    """Response model for recent activity."""

    records: list[LinkInfoResponse]


class LinkDeleteResponse(BaseModel):
    """Response model for link deletion."""

    message: str
    short_code: str


class UserResponse(BaseModel):
    """Response model for a created user, including its API key."""

    id: int
    name: str
    tier: Tier
    api_key: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump())


class ErrorResponse(BaseModel):
    """Model for error responses."""

    detail: str
    error_code: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str

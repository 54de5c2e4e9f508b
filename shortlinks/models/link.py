"""Pydantic models for short links."""

from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, Field


class ShortLink(BaseModel):
    """A stored short link, as read back from the record store."""

    id: Optional[int] = None
    code: str
    original_url: str
    owner_id: Optional[int] = None
    created_at: datetime
    expires_at: Optional[datetime] = None
    password: Optional[str] = None
    visit_count: int = 0
    last_accessed_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_protected(self) -> bool:
        return bool(self.password)


class LinkCreate(BaseModel):
    """Model for creating a short URL."""

    url: str = Field(..., description="The original long URL to shorten")
    custom_code: Optional[str] = Field(None, description="Custom short code")
    expiry_date: Optional[Union[datetime, str]] = Field(
        None, description="Expiration timestamp (ISO-8601)"
    )
    password: Optional[str] = Field(
        None, description="Password required to follow the link"
    )


class LinkBatchCreate(BaseModel):
    """Model for bulk creation of short URLs."""

    urls: list[str] = Field(..., description="Original URLs to shorten")


class LinkUpdate(BaseModel):
    """Model for updating expiry and password of a short URL."""

    expiry_date: Optional[Union[datetime, str]] = Field(
        None, description="New expiration timestamp (required)"
    )
    password: Optional[str] = Field(
        None, description="New password; omit to keep the current one"
    )

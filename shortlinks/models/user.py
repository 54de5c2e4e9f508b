"""Pydantic models for users and the principals resolved from them."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Tier(str, Enum):
    """Account class gating feature access."""

    HOBBY = "hobby"
    ENTERPRISE = "enterprise"


class Principal(BaseModel):
    """The caller an API key resolves to."""

    id: int
    tier: Tier


class User(BaseModel):
    """A stored user record."""

    id: int
    name: str
    api_key: str
    tier: Tier
    created_at: Optional[datetime] = None

    def to_principal(self) -> Principal:
        return Principal(id=self.id, tier=self.tier)


class UserCreate(BaseModel):
    """Model for registering a user."""

    name: str = Field(..., min_length=1, max_length=100)
    tier: Tier = Tier.HOBBY

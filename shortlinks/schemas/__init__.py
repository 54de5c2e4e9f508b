"""Schemas package for the Short Links Service."""

from .link import (
    ShortenResponse,
    BatchShortenResponse,
    LinkInfoResponse,
    AnalyticsResponse,
    LinkDeleteResponse,
    UserResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ShortenResponse",
    "BatchShortenResponse",
    "LinkInfoResponse",
    "AnalyticsResponse",
    "LinkDeleteResponse",
    "UserResponse",
    "ErrorResponse",
    "HealthResponse",
]

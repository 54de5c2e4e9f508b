"""Error taxonomy shared by the store, the engines and the HTTP layer.

Every failure that reaches a caller is one of the ``ShortenerError``
subclasses below. The HTTP layer renders them as
``{"detail": ..., "error_code": ...}`` using the class attributes.
"""

from typing import Optional


class ShortenerError(Exception):
    """Base class for caller-visible errors."""

    status_code: int = 500
    error_code: str = "internal_error"
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInput(ShortenerError):
    status_code = 400
    error_code = "invalid_input"
    default_detail = "Invalid input"


class NotFound(ShortenerError):
    """Code absent, soft-deleted or expired. The three cases look the same."""

    status_code = 404
    error_code = "not_found"
    default_detail = "Short URL not found"


class Forbidden(ShortenerError):
    """Principal-level denial: wrong tier, not the owner, or anonymous."""

    status_code = 403
    error_code = "forbidden"
    default_detail = "You do not have permission to perform this action"


class AccessDenied(ShortenerError):
    """Link-level denial: missing or wrong password."""

    status_code = 401
    error_code = "access_denied"
    default_detail = "Password required or incorrect"


class CodeConflict(ShortenerError):
    status_code = 409
    error_code = "code_conflict"
    default_detail = "Short code already exists"


class StoreError(ShortenerError):
    """Base class for failures raised by the record store."""


class StoreUnavailable(StoreError):
    status_code = 503
    error_code = "store_unavailable"
    default_detail = "Record store unavailable"


class UniqueViolation(StoreError):
    """Insert hit the unique constraint on ``code``.

    Engines translate this into ``CodeConflict`` (or retry); it should never
    reach the HTTP layer on its own.
    """

    status_code = 409
    error_code = "code_conflict"
    default_detail = "Short code already exists"

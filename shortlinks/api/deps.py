"""FastAPI dependencies: principal resolution and engine wiring."""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Header

from ..core.blacklist import Blacklist, get_blacklist
from ..core.config import settings
from ..core.database import Database, get_db
from ..core.exceptions import Forbidden
from ..models.user import Principal, User
from ..services import (
    AnalyticsReader,
    LifecycleManager,
    ResolutionEngine,
    ShorteningEngine,
    TierPolicyGate,
)

logger = logging.getLogger(__name__)


def get_current_principal(
    x_api_key: Optional[str] = Header(None),
    db: Database = Depends(get_db),
    blacklist: Blacklist = Depends(get_blacklist),
) -> Optional[Principal]:
    """Resolve the ``X-API-Key`` header to a principal.

    Missing or unknown keys resolve to None (anonymous caller).

    Raises:
        Forbidden: The key is blacklisted.
    """
    if not x_api_key:
        return None
    if x_api_key in blacklist:
        logger.warning("Rejected request with blacklisted API key")
        raise Forbidden("API key is blocked")

    row = db.find_user_by_api_key(x_api_key)
    if row is None:
        logger.info("Unknown API key, treating caller as anonymous")
        return None
    return User(**row).to_principal()


def require_principal(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    if principal is None:
        raise Forbidden("Authentication is required")
    return principal


def require_admin(x_admin_token: Optional[str] = Header(None)) -> None:
    """Gate administrative endpoints behind ``settings.admin_token``."""
    expected = settings.admin_token
    if not expected or not x_admin_token:
        raise Forbidden("Admin token required")
    if not hmac.compare_digest(x_admin_token.encode("utf-8"), expected.encode("utf-8")):
        raise Forbidden("Admin token required")


def get_shortening_engine(db: Database = Depends(get_db)) -> ShorteningEngine:
    return ShorteningEngine(db)


def get_resolution_engine(db: Database = Depends(get_db)) -> ResolutionEngine:
    return ResolutionEngine(db)


def get_lifecycle_manager(db: Database = Depends(get_db)) -> LifecycleManager:
    return LifecycleManager(db)


def get_policy_gate(db: Database = Depends(get_db)) -> TierPolicyGate:
    return TierPolicyGate(db)


def get_analytics_reader(db: Database = Depends(get_db)) -> AnalyticsReader:
    return AnalyticsReader(db)

"""Tier and ownership policy.

The decision functions are pure so they can be tested without a store.
``TierPolicyGate`` adds the tier lookup and the batch creation that the
gate protects.
"""

import logging
from typing import Optional, Union

from ..core.config import settings
from ..core.database import Database
from ..core.exceptions import Forbidden, InvalidInput
from ..models.user import Principal, Tier, User
from .shortening import ShorteningEngine

logger = logging.getLogger(__name__)

BULK_TIERS = frozenset({Tier.ENTERPRISE})


def can_bulk_create(tier: Union[Tier, str, None]) -> bool:
    """Only enterprise accounts may create links in bulk."""
    if tier is None:
        return False
    try:
        return Tier(tier) in BULK_TIERS
    except ValueError:
        return False


def can_manage(owner_id: Optional[int], requester_id: Optional[int]) -> bool:
    """A link can be changed only by the principal that created it.

    Anonymous requesters own nothing, including anonymous links.
    """
    return requester_id is not None and owner_id == requester_id


class TierPolicyGate:
    """Authorizes and performs bulk creation."""

    def __init__(self, db: Database, engine: Optional[ShorteningEngine] = None):
        self.db = db
        self.engine = engine or ShorteningEngine(db)

    def authorize_bulk(self, requester: Optional[Principal]) -> Principal:
        """Check that the requester may create links in bulk.

        The tier is read from the store, not taken from the principal.

        Raises:
            Forbidden: Anonymous, unknown or non-enterprise requester.
        """
        if requester is None:
            raise Forbidden("Bulk creation requires an enterprise account")

        row = self.db.find_user_by_id(requester.id)
        if row is None:
            logger.warning(f"Bulk creation denied for unknown user {requester.id}")
            raise Forbidden("Bulk creation requires an enterprise account")

        user = User(**row)
        if not can_bulk_create(user.tier):
            logger.warning(f"Bulk creation denied for user {user.id} ({user.tier.value})")
            raise Forbidden("Bulk creation requires an enterprise account")
        return user.to_principal()

    def shorten_batch(self, urls: list[str], owner: Principal) -> list[str]:
        """Create one short link per URL, all owned by ``owner``.

        Every entry is validated before anything is written. Custom codes and
        dedup never apply here.

        Raises:
            InvalidInput: Empty batch, oversized batch or any empty URL.
        """
        if not urls:
            raise InvalidInput("At least one URL is required")
        if len(urls) > settings.max_batch_size:
            raise InvalidInput(f"A batch may contain at most {settings.max_batch_size} URLs")

        cleaned = []
        for index, url in enumerate(urls):
            url = (url or "").strip()
            if not url:
                raise InvalidInput(f"URL at position {index} is empty")
            cleaned.append(url)

        codes = [self.engine.create_generated(url, owner_id=owner.id) for url in cleaned]
        logger.info(f"User {owner.id} created {len(codes)} short URLs in bulk")
        return codes

"""Services package - the short link engines."""

from .shortening import ShorteningEngine
from .resolution import ResolutionEngine
from .lifecycle import LifecycleManager
from .policy import TierPolicyGate, can_bulk_create, can_manage
from .analytics import AnalyticsReader

__all__ = [
    "ShorteningEngine",
    "ResolutionEngine",
    "LifecycleManager",
    "TierPolicyGate",
    "can_bulk_create",
    "can_manage",
    "AnalyticsReader",
]

"""Shared fixtures for the Short Links Service tests."""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shortlinks.main import app
from shortlinks.core.blacklist import Blacklist, get_blacklist
from shortlinks.core.database import get_db, get_test_db
from shortlinks.models.user import Principal
from shortlinks.services import (
    AnalyticsReader,
    LifecycleManager,
    ResolutionEngine,
    ShorteningEngine,
    TierPolicyGate,
)


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = get_test_db()
    yield db
    db.close()


@pytest.fixture
def test_blacklist():
    return Blacklist(keys=["blocked-key"])


@pytest.fixture
def hobby_user(test_db):
    return test_db.create_user("hobbyist", "hobby-key", "hobby")


@pytest.fixture
def enterprise_user(test_db):
    return test_db.create_user("acme", "enterprise-key", "enterprise")


@pytest.fixture
def hobby(hobby_user):
    return Principal(id=hobby_user["id"], tier=hobby_user["tier"])


@pytest.fixture
def enterprise(enterprise_user):
    return Principal(id=enterprise_user["id"], tier=enterprise_user["tier"])


@pytest.fixture
def shortener(test_db):
    return ShorteningEngine(test_db, max_collision_retries=3, dedup=True, allow_anonymous=True)


@pytest.fixture
def resolver(test_db):
    return ResolutionEngine(test_db)


@pytest.fixture
def lifecycle(test_db):
    return LifecycleManager(test_db)


@pytest.fixture
def gate(test_db, shortener):
    return TierPolicyGate(test_db, shortener)


@pytest.fixture
def analytics(test_db):
    return AnalyticsReader(test_db)


@pytest.fixture
def client(test_db, test_blacklist):
    """Create a test client backed by the in-memory database."""
    app.dependency_overrides[get_db] = lambda: test_db
    app.dependency_overrides[get_blacklist] = lambda: test_blacklist

    # Skip the real lifespan, which would open the global database
    original_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()


@pytest.fixture
def count_links(test_db):
    """Number of rows in short_links, deleted ones included."""
    def _count() -> int:
        return test_db.execute("SELECT COUNT(*) AS n FROM short_links", fetch=True)[0]["n"]
    return _count

"""Database module for the Short Links Service.

This module owns every read and write against the persisted short link and
user records, and provides dependency injection for FastAPI endpoints.

Rows are returned as plain dicts. "Live" means not soft-deleted and not
expired; raw lookups by code see every row.
"""

import sqlite3
import logging
import threading
from typing import Any, Optional

from .config import settings
from .exceptions import StoreUnavailable, UniqueViolation
from .timestamps import to_db_timestamp, utcnow

logger = logging.getLogger(__name__)

LIVE_CONDITION = "deleted_at IS NULL AND (expires_at IS NULL OR expires_at > ?)"


class Database:
    """Database class for managing the SQLite connection and operations."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        if db_path:
            self.db_path = db_path
        else:
            self.db_path = settings.database_url
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The single connection is shared between threads; every statement runs
        under ``self._lock``.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            try:
                connection = sqlite3.connect(
                    self.db_path,
                    check_same_thread=False,
                )
                connection.row_factory = sqlite3.Row
                connection.execute("PRAGMA foreign_keys = ON")
            except sqlite3.Error as e:
                logger.error(f"Could not open database {self.db_path}: {e}")
                raise StoreUnavailable(f"Could not open database: {e}") from e
            self._connection = connection
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize database tables.

        ``code`` carries a plain UNIQUE constraint, not a partial index, so
        soft-deleted codes can never be reused.
        """
        create_tables_sql = """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            api_key TEXT NOT NULL UNIQUE,
            tier TEXT NOT NULL DEFAULT 'hobby'
                CHECK (tier IN ('hobby', 'enterprise')),
            created_at TEXT NOT NULL
        );
        CREATE TABLE IF NOT EXISTS short_links (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            code TEXT NOT NULL UNIQUE,
            original_url TEXT NOT NULL,
            owner_id INTEGER REFERENCES users(id),
            created_at TEXT NOT NULL,
            expires_at TEXT,
            password TEXT,
            visit_count INTEGER NOT NULL DEFAULT 0,
            last_accessed_at TEXT,
            deleted_at TEXT
        );
        CREATE INDEX IF NOT EXISTS idx_short_links_owner ON short_links(owner_id);
        CREATE INDEX IF NOT EXISTS idx_short_links_url ON short_links(original_url);
        CREATE INDEX IF NOT EXISTS idx_short_links_created_at ON short_links(created_at);
        """
        with self._lock:
            conn = self._get_connection()
            try:
                conn.executescript(create_tables_sql)
                conn.commit()
                logger.info("Database initialized successfully")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise StoreUnavailable(f"Database initialization failed: {e}") from e

    def _run(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a write statement and commit it.

        Returns:
            The cursor, for ``rowcount`` and ``lastrowid``.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.execute(query, params)
                conn.commit()
                return cursor
            except sqlite3.IntegrityError:
                conn.rollback()
                raise
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Query execution failed: {e}")
                raise StoreUnavailable(f"Query execution failed: {e}") from e

    def execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list[dict[str, Any]]]:
        """Execute a SQL query.

        Args:
            query: SQL query string.
            params: Query parameters.
            fetch: Whether to fetch results.

        Returns:
            Query results if fetch=True, None otherwise.
        """
        if not fetch:
            self._run(query, params)
            return None
        with self._lock:
            conn = self._get_connection()
            try:
                results = conn.execute(query, params).fetchall()
                return [dict(row) for row in results]
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise StoreUnavailable(f"Query execution failed: {e}") from e

    def _fetch_one(self, query: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        results = self.execute(query, params, fetch=True)
        return results[0] if results else None

    # Short links

    def find_by_code(self, code: str) -> Optional[dict[str, Any]]:
        """Get a short link record by code, including deleted and expired ones.

        Args:
            code: The short code.

        Returns:
            Record or None if no row holds the code.
        """
        return self._fetch_one("SELECT * FROM short_links WHERE code = ?", (code,))

    def find_by_url(
        self, original_url: str, owner_id: Optional[int] = None
    ) -> Optional[dict[str, Any]]:
        """Find a live, unprotected, non-expiring record for a URL and owner.

        ``owner_id=None`` matches links created anonymously.

        Args:
            original_url: The original long URL.
            owner_id: Owner to scope the lookup to.

        Returns:
            The oldest matching record or None.
        """
        query = f"""
        SELECT * FROM short_links
        WHERE original_url = ? AND owner_id IS ?
          AND password IS NULL AND expires_at IS NULL
          AND {LIVE_CONDITION}
        ORDER BY id ASC LIMIT 1
        """
        now = to_db_timestamp(utcnow())
        return self._fetch_one(query, (original_url, owner_id, now))

    def insert(
        self,
        code: str,
        original_url: str,
        owner_id: Optional[int] = None,
        expires_at: Optional[str] = None,
        password: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create a new short link.

        Args:
            code: The short code.
            original_url: The original long URL.
            owner_id: Owning user id, or None for anonymous links.
            expires_at: Optional expiration timestamp (stored format).
            password: Optional password, stored verbatim.
            created_at: Creation timestamp; defaults to now.

        Returns:
            Created record.

        Raises:
            UniqueViolation: If ``code`` is already taken by any row.
        """
        query = """
        INSERT INTO short_links (code, original_url, owner_id, created_at, expires_at, password)
        VALUES (?, ?, ?, ?, ?, ?)
        """
        created_at = created_at or to_db_timestamp(utcnow())
        try:
            self._run(query, (code, original_url, owner_id, created_at, expires_at, password))
        except sqlite3.IntegrityError as e:
            if "UNIQUE" not in str(e):
                logger.error(f"Insert of {code} rejected: {e}")
                raise StoreUnavailable(f"Insert rejected: {e}") from e
            logger.info(f"Short code collision on insert: {code}")
            raise UniqueViolation(f"Short code '{code}' already exists") from e
        logger.info(f"Created short URL: {code}")
        return self.find_by_code(code)

    def increment_visit(self, code: str) -> bool:
        """Atomically record a visit on a non-deleted link.

        Args:
            code: The short code.

        Returns:
            True if a row was updated.
        """
        query = """
        UPDATE short_links
        SET visit_count = visit_count + 1, last_accessed_at = ?
        WHERE code = ? AND deleted_at IS NULL
        """
        cursor = self._run(query, (to_db_timestamp(utcnow()), code))
        return cursor.rowcount > 0

    def soft_delete(self, code: str) -> bool:
        """Soft delete a link by stamping ``deleted_at``.

        Already-deleted rows are left untouched.

        Args:
            code: The short code.

        Returns:
            True if deleted, False if not found or already deleted.
        """
        query = "UPDATE short_links SET deleted_at = ? WHERE code = ? AND deleted_at IS NULL"
        cursor = self._run(query, (to_db_timestamp(utcnow()), code))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted short URL: {code}")
        return deleted

    def update_expiry_password(
        self, code: str, expires_at: str, password: Optional[str] = None
    ) -> bool:
        """Set the expiry of a link and, when given, its password.

        Args:
            code: The short code.
            expires_at: New expiration timestamp (stored format).
            password: New password; None keeps the current one.

        Returns:
            True if a non-deleted row was updated.
        """
        if password is None:
            query = "UPDATE short_links SET expires_at = ? WHERE code = ? AND deleted_at IS NULL"
            params: tuple = (expires_at, code)
        else:
            query = """
            UPDATE short_links SET expires_at = ?, password = ?
            WHERE code = ? AND deleted_at IS NULL
            """
            params = (expires_at, password, code)
        cursor = self._run(query, params)
        updated = cursor.rowcount > 0
        if updated:
            logger.info(f"Updated short URL: {code}")
        return updated

    def list_by_owner(self, owner_id: int) -> list[dict[str, Any]]:
        """Get all live links of an owner, newest first."""
        query = f"""
        SELECT * FROM short_links
        WHERE owner_id = ? AND {LIVE_CONDITION}
        ORDER BY created_at DESC, id DESC
        """
        return self.execute(query, (owner_id, to_db_timestamp(utcnow())), fetch=True) or []

    def recent(self, limit: int = 10) -> list[dict[str, Any]]:
        """Get the most recently created live links."""
        query = f"""
        SELECT * FROM short_links
        WHERE {LIVE_CONDITION}
        ORDER BY created_at DESC, id DESC
        LIMIT ?
        """
        return self.execute(query, (to_db_timestamp(utcnow()), limit), fetch=True) or []

    def code_exists(self, code: str) -> bool:
        """Check if any row, deleted or not, holds a short code."""
        results = self.execute("SELECT 1 FROM short_links WHERE code = ?", (code,), fetch=True)
        return bool(results)

    # Users

    def create_user(self, name: str, api_key: str, tier: str = "hobby") -> dict[str, Any]:
        """Create a user.

        Raises:
            UniqueViolation: If the API key is already registered.
        """
        query = "INSERT INTO users (name, api_key, tier, created_at) VALUES (?, ?, ?, ?)"
        try:
            cursor = self._run(query, (name, api_key, tier, to_db_timestamp(utcnow())))
        except sqlite3.IntegrityError as e:
            raise UniqueViolation("API key already registered") from e
        logger.info(f"Created user {cursor.lastrowid} ({tier})")
        return self.find_user_by_id(cursor.lastrowid)

    def find_user_by_id(self, user_id: int) -> Optional[dict[str, Any]]:
        return self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))

    def find_user_by_api_key(self, api_key: str) -> Optional[dict[str, Any]]:
        return self._fetch_one("SELECT * FROM users WHERE api_key = ?", (api_key,))


# Global database instance
db = Database()


def get_db() -> Database:
    """Get database instance for dependency injection.

    Returns:
        Database instance.
    """
    return db


def get_test_db() -> Database:
    """Get a fresh in-memory database for testing.

    Returns:
        In-memory Database instance.
    """
    test_db = Database(":memory:")
    test_db.init_db()
    return test_db

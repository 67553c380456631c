"""Database helpers for the venues table."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import psycopg2
from psycopg2 import pool

from venue_seeder.core.config import get_settings
from venue_seeder.models import Venue

logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.SimpleConnectionPool] = None


class StorageError(RuntimeError):
    """Raised when the venue store is unreachable or a statement fails."""


def init_pool(minconn: int = 1, maxconn: int = 5, database_url: Optional[str] = None) -> pool.SimpleConnectionPool:
    """Initialise and return the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        dsn = database_url or get_settings().database_url
        if not dsn:
            raise StorageError("DATABASE_URL is required for database connections")
        try:
            _connection_pool = pool.SimpleConnectionPool(
                minconn,
                maxconn,
                dsn=dsn,
                connect_timeout=10,
            )
        except psycopg2.Error as exc:
            raise StorageError(f"Could not connect to database: {exc}") from exc
        logger.info("Database connection pool initialised")
    return _connection_pool


@contextmanager
def get_connection():
    """Context manager yielding a pooled connection."""
    pg_pool = init_pool()
    try:
        conn = pg_pool.getconn()
    except psycopg2.Error as exc:
        raise StorageError(f"Could not acquire database connection: {exc}") from exc
    try:
        yield conn
    finally:
        pg_pool.putconn(conn, close=bool(conn.closed))


def _rollback(conn) -> None:
    """Roll back unless the server already dropped the connection."""
    if conn.closed:
        return
    try:
        conn.rollback()
    except psycopg2.Error as exc:
        logger.warning("Rollback failed: %s", exc)


def _fetch(sql: str, params: Any = None) -> List[tuple]:
    with get_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchall()
        except psycopg2.Error as exc:
            _rollback(conn)
            raise StorageError(str(exc)) from exc


_EXISTS = "SELECT id FROM venues WHERE name = %(name)s AND district = %(district)s LIMIT 1"

_INSERT = """
INSERT INTO venues (
    name,
    category,
    district,
    description,
    map_url,
    rating
) VALUES (
    %(name)s,
    %(category)s,
    %(district)s,
    %(description)s,
    %(map_url)s,
    %(rating)s
);
"""

_COUNT = "SELECT COUNT(*) FROM venues"
_BY_CATEGORY = "SELECT category, COUNT(*) AS count FROM venues GROUP BY category ORDER BY count DESC"
_BY_DISTRICT = "SELECT district, COUNT(*) AS count FROM venues GROUP BY district ORDER BY count DESC"

_VENUE_COLUMNS = ("id", "name", "category", "district", "description", "map_url", "rating")


def venue_exists(name: str, district: str) -> bool:
    """Point lookup on the (name, district) dedupe key."""
    rows = _fetch(_EXISTS, {"name": name, "district": district})
    return bool(rows)


def insert_venue(venue: Venue) -> None:
    """Insert a new venue row. Callers check ``venue_exists`` first."""
    params = venue.to_row()
    if not params["name"] or not params["district"]:
        raise ValueError("name and district are required for insert")

    with get_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(_INSERT, params)
            conn.commit()
        except psycopg2.Error as exc:
            _rollback(conn)
            raise StorageError(str(exc)) from exc
    logger.debug("Inserted venue %s (%s)", venue.name, venue.district)


def count_venues() -> int:
    rows = _fetch(_COUNT)
    return int(rows[0][0]) if rows else 0


def venue_stats() -> Dict[str, Any]:
    """Full-table counts by category and by district, computed on demand."""
    return {
        "total": count_venues(),
        "byCategory": [{"category": row[0], "count": int(row[1])} for row in _fetch(_BY_CATEGORY)],
        "byDistrict": [{"district": row[0], "count": int(row[1])} for row in _fetch(_BY_DISTRICT)],
    }


def list_venues(limit: int = 10, district: Optional[str] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
    """Most recently inserted venues, optionally filtered by district and category."""
    sql = f"SELECT {', '.join(_VENUE_COLUMNS)} FROM venues WHERE 1=1"
    params: Dict[str, Any] = {"limit": limit}
    if district:
        sql += " AND district = %(district)s"
        params["district"] = district
    if category:
        sql += " AND category = %(category)s"
        params["category"] = category
    sql += " ORDER BY id DESC LIMIT %(limit)s"

    return [dict(zip(_VENUE_COLUMNS, row)) for row in _fetch(sql, params)]

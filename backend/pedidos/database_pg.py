# =============================================================================
# PEDIDOS v1.0 - DATABASE MANAGER (PostgreSQL)
# =============================================================================
# Connection pool, named-parameter query executor, transaction scope
# =============================================================================

import re
import threading
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any, List, Iterator, Sequence, Tuple

import psycopg2
from psycopg2 import pool, extensions
from psycopg2.extras import RealDictCursor

from .config import config


logger = logging.getLogger("pedidos.database")


# =============================================================================
# CONNECTION POOL
# =============================================================================

_pool: Optional[pool.ThreadedConnectionPool] = None
_pool_lock = threading.Lock()


def init_pool():
    """Initialize the PostgreSQL connection pool (once, thread-safe)."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            return

        _pool = pool.ThreadedConnectionPool(
            minconn=config.PG_POOL_MIN,
            maxconn=config.PG_POOL_MAX,
            host=config.PG_HOST,
            port=config.PG_PORT,
            database=config.PG_DATABASE,
            user=config.PG_USER,
            password=config.PG_PASSWORD
        )
    logger.info("PostgreSQL pool: %s:%s/%s", config.PG_HOST, config.PG_PORT, config.PG_DATABASE)


def close_pool():
    """Close the connection pool."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.closeall()
            _pool = None


# =============================================================================
# NAMED, TYPED PARAMETERS
# =============================================================================

class SqlType(str, Enum):
    """Declared type of a statement parameter."""
    INT = "int"
    DECIMAL = "decimal"
    NVARCHAR = "nvarchar"

    def coerce(self, value: Any) -> Any:
        """Convert a Python value to the declared type. None stays NULL."""
        if value is None:
            return None
        if self is SqlType.INT:
            if isinstance(value, bool):
                raise ValueError(f"Boolean is not a valid INT value: {value!r}")
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(f"Non-integral value for INT parameter: {value!r}")
            return int(value)
        if self is SqlType.DECIMAL:
            return Decimal(str(value))
        return str(value)


@dataclass(frozen=True)
class QueryParam:
    name: str
    type: SqlType
    value: Any = None


_PLACEHOLDER = re.compile(r"@(\w+)")


def convert_sql(sql: str, params: Sequence[QueryParam] = ()) -> Tuple[str, Dict[str, Any]]:
    """
    Convert a statement with @name placeholders to psycopg2 pyformat.

    - @name -> %(name)s
    - literal % -> %%

    Returns:
        (pg_sql, values) ready for cursor.execute

    Raises:
        ValueError: placeholder without a matching parameter
    """
    values = {p.name: p.type.coerce(p.value) for p in params}

    def replace(match):
        name = match.group(1)
        if name not in values:
            raise ValueError(f"Missing value for parameter @{name}")
        return f"%({name})s"

    pg_sql = _PLACEHOLDER.sub(replace, sql.replace('%', '%%'))
    return pg_sql, values


# =============================================================================
# CONNECTION WRAPPER
# =============================================================================

class PostgreSQLConnection:
    """
    Wrapper around a pooled psycopg2 connection.

    Rows are returned as plain dicts. Statements run inside the implicit
    psycopg2 transaction until commit() or rollback().
    """

    def __init__(self, conn):
        self._conn = conn

    def execute_query(self, sql: str, params: Sequence[QueryParam] = ()) -> List[Dict[str, Any]]:
        """
        Execute a parameterized statement.

        Returns:
            List of rows as dicts; empty list for statements without a result set
        """
        pg_sql, values = convert_sql(sql, params)
        with self._conn.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute(pg_sql, values)
            if cursor.description is None:
                return []
            return [dict(row) for row in cursor.fetchall()]

    def commit(self):
        self._conn.commit()

    def rollback(self):
        self._conn.rollback()

    def release(self):
        """
        Give the connection back to the pool, discarding any open transaction.

        A broken connection is still returned, closed, so its pool slot is freed.
        """
        try:
            if self._conn.get_transaction_status() != extensions.TRANSACTION_STATUS_IDLE:
                self._conn.rollback()
        except psycopg2.Error as e:
            logger.warning("Rollback on release failed: %s", e)
        finally:
            if _pool is not None:
                _pool.putconn(self._conn, close=self._conn.closed != 0)


# =============================================================================
# REQUEST SCOPE AND TRANSACTIONS
# =============================================================================

def get_connection() -> Iterator[PostgreSQLConnection]:
    """FastAPI dependency: one pooled connection per request."""
    init_pool()

    raw_conn = _pool.getconn()
    raw_conn.autocommit = False
    db = PostgreSQLConnection(raw_conn)
    try:
        yield db
    finally:
        db.release()


@contextmanager
def transaction(db):
    """Commit on success, rollback on any exception."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def ping() -> bool:
    """True if the database answers a trivial query."""
    try:
        for db in get_connection():
            db.execute_query("SELECT 1 AS ok")
        return True
    except psycopg2.Error as e:
        logger.warning("Database ping failed: %s", e)
        return False

"""PostgreSQL connection handle.

The pool lives on an explicitly constructed ``Database`` object. The app
factory opens it at startup and closes it at shutdown; repositories receive
it through their constructor instead of reaching for a module global.
"""
import logging
import threading
from contextlib import contextmanager

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

from core.errors import StoreError

logger = logging.getLogger('dealersite.database')

MAX_CHECKOUT_RETRIES = 3


class Database:
    """Owns a ``ThreadedConnectionPool`` shared by every request thread."""

    def __init__(self, dsn, minconn=2, maxconn=8, sslmode='disable'):
        self.dsn = dsn
        self.minconn = minconn
        self.maxconn = maxconn
        self.sslmode = sslmode
        self._pool = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config):
        return cls(
            config.database_url,
            minconn=config.pool_min_conn,
            maxconn=config.pool_max_conn,
            sslmode=config.db_sslmode,
        )

    @property
    def is_open(self):
        return self._pool is not None and not self._pool.closed

    def open(self):
        """Create the pool. Safe to call more than once."""
        with self._lock:
            if self.is_open:
                return self
            try:
                self._pool = pool.ThreadedConnectionPool(
                    minconn=self.minconn,
                    maxconn=self.maxconn,
                    dsn=self.dsn,
                    sslmode=self.sslmode,
                    keepalives=1,
                    keepalives_idle=30,
                    keepalives_interval=10,
                    keepalives_count=5,
                    connect_timeout=5,
                )
            except psycopg2.Error as e:
                raise StoreError(str(e)) from e
            logger.info(f'Connection pool created: min={self.minconn}, max={self.maxconn}')
        return self

    def close(self):
        """Close every pooled connection. Further checkouts raise StoreError."""
        with self._lock:
            if self._pool is not None and not self._pool.closed:
                self._pool.closeall()
                logger.info('Connection pool closed')
            self._pool = None

    def get_conn(self):
        """Check a connection out of the pool.

        Validates connection health before returning. Stale connections
        (closed by the server while idle) are discarded and replaced, up to
        MAX_CHECKOUT_RETRIES times.
        """
        if not self.is_open:
            raise StoreError('Database pool is not open')

        last_error = None
        for attempt in range(MAX_CHECKOUT_RETRIES):
            try:
                conn = self._pool.getconn()
            except psycopg2.Error as e:
                raise StoreError(str(e)) from e

            try:
                with conn.cursor() as cur:
                    cur.execute('SELECT 1')
                conn.rollback()
                return conn
            except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
                last_error = e
                logger.warning(f'Stale connection discarded (attempt {attempt + 1}/{MAX_CHECKOUT_RETRIES}): {e}')
                self._pool.putconn(conn, close=True)

        raise StoreError(f'Failed to get valid connection after {MAX_CHECKOUT_RETRIES} attempts: {last_error}')

    def release(self, conn):
        """Return a connection to the pool, closing it if it is broken."""
        if conn is None or self._pool is None or self._pool.closed:
            return
        if conn.closed:
            self._pool.putconn(conn, close=True)
            return
        self._pool.putconn(conn)

    @contextmanager
    def connection(self):
        """Context manager for database connections - auto-releases to pool."""
        conn = self.get_conn()
        try:
            yield conn
        finally:
            self.release(conn)

    @contextmanager
    def transaction(self):
        """Context manager for atomic multi-statement work.

        Usage:
            with db.transaction() as conn:
                cursor = get_cursor(conn)
                cursor.execute('INSERT INTO ...')
            # Auto-commits on success, auto-rollbacks on exception
        """
        conn = self.get_conn()
        try:
            yield conn
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.warning(f'Transaction rolled back: {e}')
            raise
        finally:
            self.release(conn)

    def ping(self):
        """Return True if a trivial query succeeds."""
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute('SELECT 1')
            return True
        except (StoreError, psycopg2.Error) as e:
            logger.error(f'Database ping failed: {e}')
            return False


def get_cursor(conn):
    """Get cursor with dict row factory."""
    return conn.cursor(cursor_factory=RealDictCursor)


def dict_from_row(row):
    """Convert a database row to a plain dict with ISO-formatted dates."""
    if row is None:
        return None
    result = dict(row)
    for key, value in result.items():
        if hasattr(value, 'isoformat'):
            result[key] = value.isoformat()
    return result


def init_db(db):
    """Create the schema if the ``websites`` table does not exist yet."""
    with db.transaction() as conn:
        cursor = get_cursor(conn)
        cursor.execute("""
            SELECT EXISTS (
                SELECT FROM information_schema.tables
                WHERE table_schema = 'public' AND table_name = 'websites'
            )
        """)
        if cursor.fetchone()['exists']:
            logger.info('Database schema already initialized, skipping init_db()')
            return False

        from migrations.init_schema import create_schema
        create_schema(conn, cursor)
        logger.info('Database schema initialized successfully')
        return True

"""Base Repository - connection handling shared by every repository.

Provides query_one(), query_all() and execute() that check a connection out
of the injected ``Database``, run one statement and hand it back.
psycopg2 errors surface as ``StoreError``.

Usage:
    class ThingRepository(BaseRepository):
        def get(self, thing_id):
            return self.query_one('SELECT * FROM things WHERE id = %s', (thing_id,))

        def create(self, name):
            return self.execute(
                'INSERT INTO things (name) VALUES (%s) RETURNING *',
                (name,), returning=True
            )
"""
import psycopg2

from core.errors import StoreError
from database import get_cursor, dict_from_row


class BaseRepository:

    def __init__(self, db):
        self.db = db

    def query_one(self, sql, params=None):
        """Execute a SELECT and return a single row as dict, or None."""
        conn = self.db.get_conn()
        try:
            cursor = get_cursor(conn)
            cursor.execute(sql, params or ())
            row = cursor.fetchone()
            return dict_from_row(row) if row else None
        except psycopg2.Error as e:
            raise StoreError(str(e)) from e
        finally:
            self.db.release(conn)

    def query_all(self, sql, params=None):
        """Execute a SELECT and return all rows as list of dicts."""
        conn = self.db.get_conn()
        try:
            cursor = get_cursor(conn)
            cursor.execute(sql, params or ())
            return [dict_from_row(r) for r in cursor.fetchall()]
        except psycopg2.Error as e:
            raise StoreError(str(e)) from e
        finally:
            self.db.release(conn)

    def execute(self, sql, params=None, returning=False):
        """Execute an INSERT/UPDATE/DELETE with auto-commit.

        Args:
            sql: SQL statement
            params: Query parameters
            returning: If True, fetchone() and return dict. If False, return rowcount.

        Returns:
            dict (or None when no row matched) if returning=True, else int (rowcount)
        """
        conn = self.db.get_conn()
        try:
            cursor = get_cursor(conn)
            cursor.execute(sql, params or ())
            if returning:
                result = cursor.fetchone()
                conn.commit()
                return dict_from_row(result) if result else None
            conn.commit()
            return cursor.rowcount
        except psycopg2.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        finally:
            self.db.release(conn)

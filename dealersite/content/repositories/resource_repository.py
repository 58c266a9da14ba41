"""Resource Repository - generic CRUD over one content table.

Table and column names come from a ``ResourceKind`` (fixed at import time),
never from the request; only values travel as parameters.
"""
from psycopg2.extras import Json

from core.base_repository import BaseRepository
from core.query_builder import FilterBuilder, AssignmentBuilder


class ResourceRepository(BaseRepository):

    def __init__(self, db, kind):
        super().__init__(db)
        self.kind = kind

    def _adapt(self, column, value):
        if column in self.kind.json_fields and value is not None:
            return Json(value)
        return value

    def list(self, filters=None):
        """SELECT rows matching ``filters`` (a FilterBuilder), ordered by id."""
        where, params = (filters or FilterBuilder()).where()
        return self.query_all(f'SELECT * FROM {self.kind.table}{where} ORDER BY id', params)

    def get_by_id(self, record_id):
        return self.query_one(f'SELECT * FROM {self.kind.table} WHERE id = %s', (record_id,))

    def create(self, values):
        """INSERT every writable column and return the stored row."""
        columns = self.kind.columns
        placeholders = ', '.join(['%s'] * len(columns))
        params = tuple(self._adapt(c, values.get(c)) for c in columns)
        return self.execute(
            f'''INSERT INTO {self.kind.table} ({', '.join(columns)})
                VALUES ({placeholders}) RETURNING *''',
            params, returning=True
        )

    def update(self, record_id, values, image_url=None):
        """UPDATE by id in one statement; None when no row matched.

        ``image_url`` replaces the stored path when given. When it is None
        the column keeps its current value (COALESCE), so an edit without a
        new upload never clears an image.
        """
        assignments = AssignmentBuilder()
        for column in self.kind.required + self.kind.optional:
            assignments.set(column, self._adapt(column, values.get(column)))
        if self.kind.has_image:
            assignments.set('image_url', image_url, expression='COALESCE(%s, image_url)')
        clause, params = assignments.build('id', record_id)
        return self.execute(
            f'UPDATE {self.kind.table} SET {clause} RETURNING *',
            params, returning=True
        )

    def delete(self, record_id):
        """DELETE by id; returns the removed row or None."""
        return self.execute(
            f'DELETE FROM {self.kind.table} WHERE id = %s RETURNING *',
            (record_id,), returning=True
        )

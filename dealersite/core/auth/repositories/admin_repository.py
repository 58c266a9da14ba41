"""Admin Repository - credential store for microsite administrators.

Only ``get_by_username`` returns the password hash; every other method
selects or returns ``id, username, website_id``.
"""
from typing import Optional, Dict, Any, List
from werkzeug.security import generate_password_hash

from core.base_repository import BaseRepository
from core.query_builder import AssignmentBuilder

PUBLIC_COLUMNS = 'id, username, website_id'


class AdminRepository(BaseRepository):
    """Repository for admin data access operations."""

    def get_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """Full row including ``password_hash``; for authentication only."""
        return self.query_one(
            'SELECT id, username, password_hash, website_id FROM admins WHERE username = %s',
            (username,)
        )

    def get_all(self) -> List[Dict[str, Any]]:
        return self.query_all(f'SELECT {PUBLIC_COLUMNS} FROM admins ORDER BY id')

    def create(self, username: str, password: str, website_id) -> Dict[str, Any]:
        password_hash = generate_password_hash(password)
        return self.execute(
            f'''INSERT INTO admins (username, password_hash, website_id)
                VALUES (%s, %s, %s) RETURNING {PUBLIC_COLUMNS}''',
            (username, password_hash, website_id), returning=True
        )

    def update(self, admin_id: int, username: str, website_id,
               password: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Update an admin. The stored hash is replaced only when ``password`` is given."""
        assignments = AssignmentBuilder().set('username', username).set('website_id', website_id)
        if password:
            assignments.set('password_hash', generate_password_hash(password))
        clause, params = assignments.build('id', admin_id)
        return self.execute(
            f'UPDATE admins SET {clause} RETURNING {PUBLIC_COLUMNS}',
            params, returning=True
        )

    def delete(self, admin_id: int) -> bool:
        row = self.execute('DELETE FROM admins WHERE id = %s RETURNING id', (admin_id,), returning=True)
        return row is not None

"""Admin management - CRUD over the credential store."""
from core.errors import ValidationError, NotFound
from core.utils.logging_config import get_logger

logger = get_logger('dealersite.auth.admins')

CREATE_REQUIRED_MESSAGE = 'Username, password, dan website ID diperlukan'
UPDATE_REQUIRED_MESSAGE = 'Username dan website ID diperlukan'
NOT_FOUND_MESSAGE = 'Admin tidak ditemukan'
DELETED_MESSAGE = 'Admin berhasil dihapus'


class AdminService:

    def __init__(self, admin_repo):
        self.admin_repo = admin_repo

    def list(self):
        return self.admin_repo.get_all()

    def create(self, data):
        username = data.get('username')
        password = data.get('password')
        website_id = data.get('website_id')
        if not username or not password or not website_id:
            raise ValidationError(CREATE_REQUIRED_MESSAGE)

        admin = self.admin_repo.create(username, password, website_id)
        logger.info(f'Admin {admin["id"]} created for website {website_id}')
        return admin

    def update(self, admin_id, data):
        username = data.get('username')
        website_id = data.get('website_id')
        if not username or not website_id:
            raise ValidationError(UPDATE_REQUIRED_MESSAGE)

        admin = self.admin_repo.update(admin_id, username, website_id, password=data.get('password') or None)
        if not admin:
            raise NotFound(NOT_FOUND_MESSAGE)
        logger.info(f'Admin {admin_id} updated (password changed: {bool(data.get("password"))})')
        return admin

    def delete(self, admin_id):
        if not self.admin_repo.delete(admin_id):
            raise NotFound(NOT_FOUND_MESSAGE)
        logger.info(f'Admin {admin_id} deleted')
        return {'message': DELETED_MESSAGE}

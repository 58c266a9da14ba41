from .auth_service import AuthService, TOKEN_TTL_SECONDS
from .admin_service import AdminService

__all__ = ['AuthService', 'AdminService', 'TOKEN_TTL_SECONDS']

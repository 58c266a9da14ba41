"""Auth Service - login and bearer-token verification.

Tokens are HS256 JWTs carrying ``{id, username, website_id}`` plus ``iat``
and ``exp`` (24 hours), so admin frontends can read ``website_id`` from the
payload. Password hashes are werkzeug hashes; older admin rows still carry
bcrypt hashes (``$2a$...``) and verify with bcrypt.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

import bcrypt
import jwt
from werkzeug.security import check_password_hash

from core.errors import AuthMissing, AuthInvalid, InvalidCredential, NotFound
from core.utils.logging_config import get_logger

logger = get_logger('dealersite.auth')

TOKEN_TTL_SECONDS = 24 * 60 * 60
TOKEN_ALGORITHM = 'HS256'
BEARER_PREFIX = 'Bearer '
CLAIM_KEYS = ('id', 'username', 'website_id')
BCRYPT_PREFIXES = ('$2a$', '$2b$', '$2y$')


def verify_password(password_hash: Optional[str], password: str) -> bool:
    """Check ``password`` against a werkzeug or bcrypt hash.

    A hash in a format neither library reads counts as a mismatch.
    """
    if not password_hash:
        return False
    try:
        if password_hash.startswith(BCRYPT_PREFIXES):
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
        return check_password_hash(password_hash, password)
    except ValueError as e:
        logger.warning(f'Unreadable password hash: {e}')
        return False


class AuthService:
    """Issues and verifies signed admin session tokens."""

    def __init__(self, admin_repo, secret_key: str, max_age: int = TOKEN_TTL_SECONDS):
        self.admin_repo = admin_repo
        self.secret_key = secret_key
        self.max_age = max_age

    def authenticate(self, username: str, password: str) -> str:
        """Check credentials and return a fresh token.

        Args:
            username: Exact (case-sensitive) admin username
            password: Plain-text password

        Returns:
            Encoded JWT

        Raises:
            NotFound: no admin with that username
            InvalidCredential: password does not match the stored hash
        """
        admin = self.admin_repo.get_by_username(username)
        if not admin:
            logger.info(f'Login failed: unknown username {username!r}')
            raise NotFound('Username tidak ditemukan')

        if not verify_password(admin.get('password_hash'), password):
            logger.info(f'Login failed: wrong password for admin {admin["id"]}')
            raise InvalidCredential('Password salah')

        logger.info(f'Admin {admin["id"]} logged in')
        return self.issue_token(admin)

    def issue_token(self, admin: Dict[str, Any], now: Optional[datetime] = None) -> str:
        """Sign the admin claims; ``now`` sets the issue time (defaults to the clock)."""
        now = now or datetime.now(timezone.utc)
        payload = {key: admin.get(key) for key in CLAIM_KEYS}
        payload['iat'] = now
        payload['exp'] = now + timedelta(seconds=self.max_age)
        return jwt.encode(payload, self.secret_key, algorithm=TOKEN_ALGORITHM)

    def decode(self, token: str) -> Dict[str, Any]:
        """Return the admin claims in ``token`` or raise AuthInvalid."""
        try:
            payload = jwt.decode(
                token, self.secret_key,
                algorithms=[TOKEN_ALGORITHM],
                options={'require': ['exp']},
            )
        except jwt.ExpiredSignatureError:
            logger.info('Token rejected: expired')
            raise AuthInvalid()
        except jwt.InvalidTokenError as e:
            logger.info(f'Token rejected: {type(e).__name__}')
            raise AuthInvalid()
        if 'id' not in payload:
            raise AuthInvalid()
        return {key: payload.get(key) for key in CLAIM_KEYS}

    def verify(self, authorization: Optional[str]) -> Dict[str, Any]:
        """Validate an ``Authorization`` header value.

        Raises:
            AuthMissing: header absent or not a Bearer credential
            AuthInvalid: bad signature, malformed or expired token
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthMissing()
        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            raise AuthMissing()
        return self.decode(token)

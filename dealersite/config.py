"""Process configuration read from environment variables."""
import os
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

logger = logging.getLogger('dealersite.config')

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

DEV_SECRET = 'dev-secret-key-for-local-only'


@dataclass(frozen=True)
class Config:
    """Immutable settings handed to the app factory."""
    database_url: str
    db_sslmode: str = 'disable'
    pool_min_conn: int = 2
    pool_max_conn: int = 8
    secret_key: str = DEV_SECRET
    frontend_url: str = 'http://localhost:5173'
    upload_dir: str = os.path.join(BASE_DIR, 'uploads')
    port: int = 5000
    log_level: str = 'INFO'
    init_db: bool = False
    debug: bool = False


def _flag(value: Optional[str]) -> bool:
    return (value or '').strip().lower() == 'true'


def build_database_url(env) -> str:
    """Return DATABASE_URL, or assemble one from the DB_* parts."""
    url = env.get('DATABASE_URL')
    if url:
        return url

    missing = [k for k in ('DB_USER', 'DB_HOST', 'DB_NAME') if not env.get(k)]
    if missing:
        raise ValueError(
            f"Database settings missing: {', '.join(missing)}. "
            "Set DATABASE_URL or the DB_USER/DB_HOST/DB_NAME variables."
        )

    user = quote(env['DB_USER'], safe='')
    password = env.get('DB_PASSWORD')
    auth = f"{user}:{quote(password, safe='')}" if password else user
    port = env.get('DB_PORT') or '5432'
    return f"postgresql://{auth}@{env['DB_HOST']}:{port}/{env['DB_NAME']}"


def load_config(env=None) -> Config:
    """Build a Config from ``env`` (defaults to ``os.environ``).

    JWT_SECRET is required unless FLASK_DEBUG=true, in which case a fixed
    development secret is used and a warning is logged.
    """
    env = os.environ if env is None else env
    debug = _flag(env.get('FLASK_DEBUG'))

    secret = env.get('JWT_SECRET')
    if not secret:
        if debug:
            secret = DEV_SECRET
            logger.warning('Using development token secret, set JWT_SECRET for production')
        else:
            raise RuntimeError('JWT_SECRET environment variable is required')

    return Config(
        database_url=build_database_url(env),
        db_sslmode='require' if _flag(env.get('DB_SSL')) else 'disable',
        pool_min_conn=int(env.get('DB_POOL_MIN_CONN', '2')),
        pool_max_conn=int(env.get('DB_POOL_MAX_CONN', '8')),
        secret_key=secret,
        frontend_url=env.get('FRONTEND_URL') or 'http://localhost:5173',
        upload_dir=env.get('UPLOAD_DIR') or os.path.join(BASE_DIR, 'uploads'),
        port=int(env.get('PORT', '5000')),
        log_level=env.get('LOG_LEVEL', 'INFO'),
        init_db=_flag(env.get('INIT_DB')),
        debug=debug,
    )

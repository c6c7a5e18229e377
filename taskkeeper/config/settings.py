# taskkeeper/config/settings.py
# Runtime configuration read from the environment

import logging
import os
import secrets
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = [
    "http://localhost:3000",   # Local development frontend
    "http://localhost:5173",   # Vite dev server
    "http://127.0.0.1:3000",   # Alternative localhost
]


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings.

    Every value can be passed explicitly, which is what the tests do; anything
    left out falls back to the environment and then to a development default.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        session_algorithm: Optional[str] = None,
        database_url: Optional[str] = None,
        db_sslmode: Optional[str] = None,
        session_cookie_name: Optional[str] = None,
        session_ttl_minutes: Optional[int] = None,
        session_cookie_secure: Optional[bool] = None,
        session_sweep_minutes: Optional[int] = None,
        cors_origins: Optional[List[str]] = None,
        log_level: Optional[str] = None,
    ):
        self.secret_key = secret_key or os.getenv("SECRET_KEY")
        self.secret_key_generated = False
        if not self.secret_key:
            self.secret_key = secrets.token_urlsafe(32)
            self.secret_key_generated = True

        self.session_algorithm = session_algorithm or os.getenv("SESSION_ALGORITHM", "HS256")
        self.database_url = database_url if database_url is not None else os.getenv("DATABASE_URL")
        self.db_sslmode = db_sslmode if db_sslmode is not None else os.getenv("DB_SSLMODE")

        self.session_cookie_name = session_cookie_name or os.getenv("SESSION_COOKIE_NAME", "sid")
        self.session_ttl_minutes = (
            session_ttl_minutes if session_ttl_minutes is not None
            else int(os.getenv("SESSION_TTL_MINUTES", 24 * 60))
        )
        if session_cookie_secure is None:
            session_cookie_secure = _as_bool(os.getenv("SESSION_COOKIE_SECURE"))
        self.session_cookie_secure = session_cookie_secure
        self.session_sweep_minutes = (
            session_sweep_minutes if session_sweep_minutes is not None
            else int(os.getenv("SESSION_SWEEP_MINUTES", 15))
        )

        if cors_origins is None:
            raw = os.getenv("CORS_ORIGINS")
            cors_origins = [o.strip() for o in raw.split(",") if o.strip()] if raw else list(DEFAULT_ORIGINS)
        self.cors_origins = cors_origins

        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    @property
    def uses_database(self) -> bool:
        return bool(self.database_url)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        settings = cls()
        if settings.secret_key_generated:
            logger.warning("SECRET_KEY is not set; sessions will not survive a restart")
        return settings


def configure_logging(level: str = "INFO"):
    """Install the root log format once per process"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

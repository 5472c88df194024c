"""
Application settings loaded from environment variables.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

DEFAULT_JWT_SECRET = "change-me-jwt-secret-key"


class Settings(BaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3001
    host: str = "0.0.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["https://front-end-cadastro-login-twj.vercel.app"]

    # ── Database ─────────────────────────────────────────────────────────
    database_url: Optional[str] = None   # full URL, wins over the parts below
    db_driver: str = "postgresql+asyncpg"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "app"
    db_user: str = "app"
    db_password: str = ""
    db_ssl: bool = False                 # TLS without certificate verification

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET   # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 3600         # 1 hour
    bcrypt_rounds: int = 10

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    def sqlalchemy_url(self) -> Union[str, URL]:
        """Return ``database_url`` if set, otherwise assemble it from the parts."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

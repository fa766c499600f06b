# File: app/core/config.py

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, field_validator

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = "RWA Portal API"
    VERSION: str = "1.0.0"

    api_prefix: str = "/api"
    environment: str = "development"
    port: int = 5001
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    # Database
    database_url: str = "sqlite:///./rwa_portal.db"

    # Security / auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 24h
    bcrypt_rounds: int = 12

    # Request guards
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60
    max_body_bytes: int = 10 * 1024 * 1024
    # Only honour X-Forwarded-For behind a proxy that overwrites it
    trust_proxy_headers: bool = False

    # Pre-built SPA bundle
    frontend_dist_dir: str = "dist"

    # Optional admin account created on startup
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    admin_name: str = "Administrator"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or "development"
        return v

    @property
    def is_production(self) -> bool:
        return self.environment in ("prod", "production")

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """
        Build settings from environment variables.

        Only variables that are actually set override the defaults above.
        """
        env = os.environ if environ is None else environ
        mapping = {
            "ENV": "environment",
            "PORT": "port",
            "LOG_LEVEL": "log_level",
            "CORS_ORIGINS": "cors_origins",
            "DATABASE_URL": "database_url",
            "JWT_SECRET": "jwt_secret",
            "JWT_EXPIRES_MINUTES": "access_token_expire_minutes",
            "BCRYPT_ROUNDS": "bcrypt_rounds",
            "RATE_LIMIT_MAX_REQUESTS": "rate_limit_max_requests",
            "RATE_LIMIT_WINDOW_SECONDS": "rate_limit_window_seconds",
            "MAX_BODY_BYTES": "max_body_bytes",
            "TRUST_PROXY_HEADERS": "trust_proxy_headers",
            "FRONTEND_DIST_DIR": "frontend_dist_dir",
            "ADMIN_EMAIL": "admin_email",
            "ADMIN_PASSWORD": "admin_password",
            "ADMIN_NAME": "admin_name",
        }
        values = {}
        for var, field in mapping.items():
            raw = env.get(var)
            if raw is not None and raw.strip() != "":
                values[field] = raw.strip()
        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()

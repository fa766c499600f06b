# File: app/core/security.py

"""
Security helpers for the RWA Portal API.

- PasswordHasher: bcrypt hashing through passlib
- TokenCodec: signed, time-limited JWT access tokens through PyJWT

Both are built from Settings at startup and hung on ``app.state``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext

from app.core.config import Settings
from app.core.errors import AuthenticationError

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self.context.hash(_truncate(password))

    def verify(self, password: str, hashed: str) -> bool:
        return self.context.verify(_truncate(password), hashed)

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification (unknown-account logins)."""
        self.context.dummy_verify()


class TokenCodec:
    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    @property
    def expires_in(self) -> int:
        return self.expire_minutes * 60

    def create_access_token(
        self,
        subject: str,
        extra: Optional[dict] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        to_encode: dict[str, Any] = dict(extra or {})
        to_encode.update({"sub": subject, "iat": now, "exp": expire})
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """
        Verify signature and expiry and return the payload.

        Raises:
            AuthenticationError: "Token expired" or "Invalid token"
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")
        if not payload.get("sub"):
            raise AuthenticationError("Invalid token")
        return payload

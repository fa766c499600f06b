# File: app/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import AuthenticationError, ForbiddenError
from app.core.security import PasswordHasher, TokenCodec
from app.models.user import User
from app.services import auth_service

# auto_error=False so a missing header reaches our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")
    return auth_service.resolve_token(db, codec, credentials.credentials)


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user

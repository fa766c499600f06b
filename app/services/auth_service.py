# File: app/services/auth_service.py

"""
Authentication service.

  - User registration
  - Credential verification and token issuance
  - Token -> user resolution for protected routes
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AuthenticationError, ConflictError
from app.core.security import PasswordHasher, TokenCodec
from app.models.user import User
from app.services.validation import validate_credentials, validate_registration

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar_one_or_none()


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def register_user(
    db: Session,
    hasher: PasswordHasher,
    *,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> User:
    """
    Create a user with a salted password hash.

    Raises:
        BadRequestError: on the first failing field check
        ConflictError: if the email is already registered
    """
    data = validate_registration(name, email, password).unwrap()

    if get_user_by_email(db, data.email) is not None:
        raise ConflictError("Email already registered")

    user = User(
        name=data.name,
        email=data.email,
        password_hash=hasher.hash(data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(
    db: Session,
    hasher: PasswordHasher,
    *,
    email: Optional[str],
    password: Optional[str],
) -> User:
    """
    Look up a user by email and verify the password.

    Unknown email and wrong password raise the same AuthenticationError.
    """
    creds = validate_credentials(email, password).unwrap()

    user = get_user_by_email(db, creds.email)
    if user is None:
        hasher.dummy_verify()
        logger.info("Login failed: unknown account")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not hasher.verify(creds.password, user.password_hash):
        logger.info("Login failed: bad password for user %s", user.id)
        raise AuthenticationError(INVALID_CREDENTIALS)

    return user


def issue_token(codec: TokenCodec, user: User) -> str:
    return codec.create_access_token(user.id, extra={"email": user.email})


def resolve_token(db: Session, codec: TokenCodec, token: str) -> User:
    """
    Verify a bearer token and load the user it names.

    Raises:
        AuthenticationError: missing/invalid/expired token or unknown user
    """
    payload = codec.decode(token)
    user = get_user_by_id(db, payload["sub"])
    if user is None:
        logger.info("Valid token for missing user %s", payload["sub"])
        raise AuthenticationError("Invalid token")
    return user

"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

import logging

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.security import PasswordHasher
from app.models.base import Base
from app.models import asset, user  # noqa: F401
from app.models.user import KycStatus, User

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)


def seed_initial_data(db: Session, settings: Settings, hasher: PasswordHasher) -> User | None:
    """
    Create the admin account named by ADMIN_EMAIL / ADMIN_PASSWORD, if configured.

    An existing account with that email is promoted instead of recreated.
    """
    if not settings.admin_email or not settings.admin_password:
        return None

    email = settings.admin_email.strip().lower()
    admin = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if admin is None:
        admin = User(
            name=settings.admin_name,
            email=email,
            password_hash=hasher.hash(settings.admin_password),
            kyc_status=KycStatus.approved,
            is_admin=True,
        )
        db.add(admin)
        logger.info("Created admin account %s", email)
    elif not admin.is_admin:
        admin.is_admin = True
        logger.info("Promoted %s to admin", email)

    db.commit()
    db.refresh(admin)
    return admin

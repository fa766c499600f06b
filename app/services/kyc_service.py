# File: app/services/kyc_service.py

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.base import utcnow
from app.models.user import KycStatus, User
from app.services.validation import validate_kyc_documents, validate_kyc_status

logger = logging.getLogger(__name__)


def submit_kyc(db: Session, user: User, documents: Optional[List[str]]) -> User:
    """
    Store the caller's identity document references and queue them for review.

    A rejected submission may be resubmitted; an approved one may not.
    """
    docs = validate_kyc_documents(documents).unwrap()
    if user.kyc_status == KycStatus.approved:
        raise ConflictError("KYC already approved")

    user.kyc_documents = docs
    user.kyc_submitted_at = utcnow()
    user.kyc_status = KycStatus.pending
    db.commit()
    db.refresh(user)

    logger.info("KYC submitted by user %s (%d documents)", user.id, len(docs))
    return user


def set_kyc_status(db: Session, user_id: str, status: Any) -> User:
    new_status = validate_kyc_status(status).unwrap()
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    user.kyc_status = new_status
    db.commit()
    db.refresh(user)

    logger.info("KYC status for user %s set to %s", user.id, new_status.value)
    return user

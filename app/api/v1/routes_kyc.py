# File: app/api/v1/routes_kyc.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.user import KycRead, KycStatusResponse, KycSubmitRequest, KycSubmitResponse
from app.services import kyc_service

router = APIRouter()


def _kyc_view(user: User) -> KycRead:
    return KycRead(
        status=user.kyc_status,
        submitted_at=user.kyc_submitted_at,
        documents=user.kyc_documents or [],
    )


@router.post("/submit", response_model=KycSubmitResponse, summary="Submit KYC documents")
def submit_kyc(
    payload: KycSubmitRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = kyc_service.submit_kyc(db, user, payload.documents)
    return KycSubmitResponse(message="KYC submitted successfully", kyc=_kyc_view(user))


@router.get("/status", response_model=KycStatusResponse, summary="KYC status")
def kyc_status(user: User = Depends(get_current_user)):
    return KycStatusResponse(**_kyc_view(user).model_dump())

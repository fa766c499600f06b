# File: app/api/v1/routes_admin.py

"""
Admin review endpoints. Every route requires an admin bearer token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.schemas.asset import AssetListResponse, AssetRead, AssetResponse, RejectRequest
from app.schemas.user import KycReviewRequest, UserRead, UserResponse
from app.services import asset_service, kyc_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/assets/pending", response_model=AssetListResponse, summary="Assets awaiting review")
def pending_assets(db: Session = Depends(get_db)):
    items = [AssetRead.model_validate(a) for a in asset_service.list_pending_assets(db)]
    return AssetListResponse(assets=items, total=len(items))


@router.post("/assets/{asset_id}/approve", response_model=AssetResponse, summary="Approve a pending asset")
def approve_asset(asset_id: str, db: Session = Depends(get_db)):
    asset = asset_service.approve_asset(db, asset_id)
    return AssetResponse(message="Asset approved", asset=AssetRead.model_validate(asset))


@router.post("/assets/{asset_id}/reject", response_model=AssetResponse, summary="Reject a pending asset")
def reject_asset(asset_id: str, payload: RejectRequest, db: Session = Depends(get_db)):
    asset = asset_service.reject_asset(db, asset_id, payload.reason)
    return AssetResponse(message="Asset rejected", asset=AssetRead.model_validate(asset))


@router.post("/users/{user_id}/kyc", response_model=UserResponse, summary="Set a user's KYC status")
def review_kyc(user_id: str, payload: KycReviewRequest, db: Session = Depends(get_db)):
    user = kyc_service.set_kyc_status(db, user_id, payload.status)
    return UserResponse(message=f"KYC status set to {user.kyc_status.value}", user=UserRead.model_validate(user))

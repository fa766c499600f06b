# File: app/api/v1/routes_assets.py

"""
Asset endpoints.

Everything here is owner-scoped except the public marketplace and summary
views. Static paths are declared before ``/{asset_id}`` so they win.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.asset import (
    AssetListResponse,
    AssetRead,
    AssetResponse,
    AssetSummary,
    AssetSummaryResponse,
    ListingUpdateRequest,
    MintRequest,
    PledgeRequest,
)
from app.schemas.market import Listing, ListingsResponse
from app.services import asset_service, market_service

router = APIRouter()


@router.post(
    "/pledge",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Pledge an asset for review",
)
def pledge_asset(
    payload: PledgeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    asset = asset_service.pledge_asset(
        db,
        user,
        asset_type=payload.asset_type,
        description=payload.description,
        estimated_value=payload.estimated_value,
        documents=payload.documents,
    )
    return AssetResponse(message="Asset pledged successfully", asset=AssetRead.model_validate(asset))


@router.get("/mine", response_model=AssetListResponse, summary="List my assets")
def my_assets(
    status_filter: Optional[str] = Query(None, alias="status"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    assets = asset_service.list_owner_assets(db, user, status_filter)
    items = [AssetRead.model_validate(a) for a in assets]
    return AssetListResponse(assets=items, total=len(items))


@router.get("/marketplace", response_model=ListingsResponse, summary="Public marketplace listings")
def marketplace(db: Session = Depends(get_db)):
    listings = [Listing(**item) for item in market_service.list_listings(db)]
    return ListingsResponse(listings=listings, total=len(listings))


@router.get("/summary", response_model=AssetSummaryResponse, summary="Public tokenized-asset summary")
def summary(db: Session = Depends(get_db)):
    return AssetSummaryResponse(summary=AssetSummary(**asset_service.public_summary(db)))


@router.get("/{asset_id}", response_model=AssetResponse, summary="Get one of my assets")
def get_asset(
    asset_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    asset = asset_service.get_owned_asset(db, user, asset_id)
    return AssetResponse(asset=AssetRead.model_validate(asset))


@router.post("/{asset_id}/mint", response_model=AssetResponse, summary="Mint a token for an approved asset")
def mint_asset(
    asset_id: str,
    payload: Optional[MintRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    options = (payload or MintRequest()).model_dump()
    asset = asset_service.mint_asset(db, user, asset_id, **options)
    return AssetResponse(message="Tokens minted successfully", asset=AssetRead.model_validate(asset))


@router.patch("/{asset_id}/listing", response_model=AssetResponse, summary="List or unlist a tokenized asset")
def update_listing(
    asset_id: str,
    payload: ListingUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    asset = asset_service.set_listing(db, user, asset_id, payload.is_listed)
    message = "Asset listed on marketplace" if asset.is_listed else "Asset removed from marketplace"
    return AssetResponse(message=message, asset=AssetRead.model_validate(asset))

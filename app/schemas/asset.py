# File: app/schemas/asset.py

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field, StrictBool, StrictInt

from app.models.asset import AssetStatus, AssetType
from app.schemas.common import CamelModel, field_message
from app.services.validation import MAX_AMOUNT, MAX_TOKEN_SUPPLY, TOKEN_NAME_MAX_LENGTH


# -----------------------------
# Field types
# -----------------------------

# Presence is checked by the services so that missing fields share one message.
EstimatedValue = Annotated[
    float,
    Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False),
    field_message(
        "Estimated value must be a non-negative number",
        less_than_equal="Estimated value is too large",
    ),
]
Documents = Annotated[List[str], field_message("Documents must be a list of strings")]
TokenSupply = Annotated[
    StrictInt,
    Field(ge=1, le=MAX_TOKEN_SUPPLY),
    field_message(
        "Token supply must be a whole number of at least 1",
        less_than_equal=f"Token supply must not exceed {MAX_TOKEN_SUPPLY:,}",
    ),
]

FractionalFlag = Annotated[StrictBool, field_message("fractional must be a boolean")]
ListedFlag = Annotated[StrictBool, field_message("isListed must be a boolean")]


# -----------------------------
# Requests
# -----------------------------

class PledgeRequest(CamelModel):
    asset_type: Optional[Annotated[AssetType, field_message("Invalid asset type")]] = None
    description: Optional[Annotated[str, field_message("Description must be a string")]] = None
    estimated_value: Optional[EstimatedValue] = None
    documents: Optional[Documents] = None


class MintRequest(CamelModel):
    token_name: Optional[
        Annotated[
            str,
            Field(max_length=TOKEN_NAME_MAX_LENGTH),
            field_message(f"Token name must be a string of at most {TOKEN_NAME_MAX_LENGTH} characters"),
        ]
    ] = None
    token_symbol: Optional[Annotated[str, field_message("Token symbol must be 2-11 letters or digits")]] = None
    token_supply: Optional[TokenSupply] = None
    token_type: Optional[Annotated[str, field_message("Token type must be a string")]] = None
    fractional: Optional[FractionalFlag] = None
    is_listed: Optional[ListedFlag] = None


class ListingUpdateRequest(CamelModel):
    is_listed: Optional[ListedFlag] = None


class RejectRequest(CamelModel):
    reason: Optional[Annotated[str, field_message("A rejection reason is required")]] = None


# -----------------------------
# Responses
# -----------------------------

class AssetRead(CamelModel):
    id: str
    owner_id: str
    asset_type: AssetType
    description: str
    estimated_value: float
    documents: List[str] = []
    status: AssetStatus
    rejection_reason: Optional[str] = None
    token_id: Optional[str] = None
    token_name: Optional[str] = None
    token_symbol: Optional[str] = None
    token_type: Optional[str] = None
    token_supply: Optional[int] = None
    token_price: Optional[float] = None
    is_listed: bool = False
    reviewed_at: Optional[datetime] = None
    tokenized_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AssetResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    asset: AssetRead


class AssetListResponse(CamelModel):
    success: bool = True
    assets: List[AssetRead] = []
    total: int = 0


class AssetSummary(CamelModel):
    total_assets: int
    real_estate_count: int
    commodities_count: int
    total_value: float
    total_value_millions: float


class AssetSummaryResponse(CamelModel):
    success: bool = True
    summary: AssetSummary

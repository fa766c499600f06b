# File: app/schemas/market.py

"""
Marketplace, liquidity and activity payloads.

Trade and liquidity responses carry placeholder values only; nothing is
settled or recorded.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field

from app.models.asset import AssetType
from app.schemas.common import CamelModel, field_message
from app.services.validation import MAX_AMOUNT

Amount = Annotated[
    float,
    Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False),
    field_message("Amount must be a positive number", less_than_equal="Amount is too large"),
]
Price = Annotated[
    float,
    Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False),
    field_message("Price must be a non-negative number", less_than_equal="Price is too large"),
]
TokenId = Annotated[str, field_message("tokenId must be a string")]
PoolId = Annotated[str, field_message("poolId must be a string")]


# -----------------------------
# Marketplace
# -----------------------------

class Listing(CamelModel):
    asset_id: str
    token_id: str
    token_name: Optional[str] = None
    token_symbol: Optional[str] = None
    token_type: Optional[str] = None
    asset_type: AssetType
    description: str
    price: float
    total_supply: int
    estimated_value: float
    owner_name: Optional[str] = None
    available: bool = True


class ListingsResponse(CamelModel):
    success: bool = True
    listings: List[Listing] = []
    total: int = 0


class BuyRequest(CamelModel):
    token_id: Optional[TokenId] = None
    amount: Optional[Amount] = None


class SellRequest(CamelModel):
    token_id: Optional[TokenId] = None
    amount: Optional[Amount] = None
    price: Optional[Price] = None


class TradeResponse(CamelModel):
    success: bool = True
    message: str
    transaction_id: Optional[str] = None
    order_id: Optional[str] = None
    token_id: str
    amount: float
    price: float
    total: float


# -----------------------------
# Liquidity
# -----------------------------

class Pool(CamelModel):
    id: str
    name: str
    pair: str
    tvl: float
    apy: float


class PoolsResponse(CamelModel):
    success: bool = True
    pools: List[Pool] = []


class LiquidityRequest(CamelModel):
    pool_id: Optional[PoolId] = None
    amount: Optional[Amount] = None


class LiquidityResponse(CamelModel):
    success: bool = True
    message: str
    pool_id: str
    amount: float
    lp_tokens: Optional[float] = None


# -----------------------------
# Activity
# -----------------------------

class Activity(CamelModel):
    id: str
    type: str
    description: str
    timestamp: datetime
    asset_id: Optional[str] = None


class ActivityResponse(CamelModel):
    success: bool = True
    activities: List[Activity] = []

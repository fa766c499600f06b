# File: app/services/market_service.py

"""
Marketplace and liquidity operations.

There is no ledger behind these calls. Buy/sell and provide/withdraw check
their inputs against real listings and pools, then answer with placeholder
receipts; balances, orders and pool reserves are never stored.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.models.asset import Asset
from app.models.user import User
from app.services import asset_service
from app.services.validation import validate_amount

logger = logging.getLogger(__name__)

LIQUIDITY_POOLS: List[dict] = [
    {"id": "rwa-eth", "name": "RWA-ETH Pool", "pair": "RWA/ETH", "tvl": 2_000_000.0, "apy": 12.5},
    {"id": "rwa-usdc", "name": "RWA-USDC Pool", "pair": "RWA/USDC", "tvl": 3_500_000.0, "apy": 8.2},
    {"id": "re-usdc", "name": "Real Estate-USDC Pool", "pair": "RE/USDC", "tvl": 1_250_000.0, "apy": 10.4},
    {"id": "gold-usdc", "name": "Gold-USDC Pool", "pair": "GOLD/USDC", "tvl": 900_000.0, "apy": 6.7},
]


def listing_from_asset(asset: Asset) -> dict:
    return {
        "asset_id": asset.id,
        "token_id": asset.token_id,
        "token_name": asset.token_name,
        "token_symbol": asset.token_symbol,
        "token_type": asset.token_type,
        "asset_type": asset.asset_type,
        "description": asset.description,
        "price": asset.token_price or 0.0,
        "total_supply": asset.token_supply or 0,
        "estimated_value": asset.estimated_value,
        "owner_name": asset.owner.name if asset.owner is not None else None,
        "available": True,
    }


def list_listings(db: Session) -> List[dict]:
    return [listing_from_asset(asset) for asset in asset_service.list_marketplace(db)]


def _check_supply(asset: Asset, amount: float) -> None:
    if amount > (asset.token_supply or 0):
        raise BadRequestError("Amount exceeds token supply")


def buy_token(db: Session, buyer: User, token_id: Optional[str], amount: Optional[float]) -> dict:
    order = validate_amount(token_id, amount).unwrap()
    asset = asset_service.get_listed_by_token(db, order.key)
    _check_supply(asset, order.amount)

    price = asset.token_price or 0.0
    receipt = {
        "message": "Token purchased successfully",
        "transaction_id": f"tx_{uuid.uuid4().hex}",
        "token_id": asset.token_id,
        "amount": order.amount,
        "price": price,
        "total": round(order.amount * price, 6),
    }
    logger.info("User %s bought %s of %s (simulated)", buyer.id, order.amount, asset.token_id)
    return receipt


def sell_token(db: Session, seller: User, token_id: Optional[str], amount: Optional[float], price: Optional[float]) -> dict:
    order = validate_amount(token_id, amount, price=price, require_price=True).unwrap()
    asset = asset_service.get_owned_token(db, seller, order.key)
    _check_supply(asset, order.amount)

    receipt = {
        "message": "Sell order placed successfully",
        "order_id": f"ord_{uuid.uuid4().hex}",
        "token_id": asset.token_id,
        "amount": order.amount,
        "price": order.price,
        "total": round(order.amount * order.price, 6),
    }
    logger.info("User %s offered %s of %s (simulated)", seller.id, order.amount, asset.token_id)
    return receipt


# -----------------------------
# Liquidity
# -----------------------------

def list_pools() -> List[dict]:
    return [dict(pool) for pool in LIQUIDITY_POOLS]


def get_pool(pool_id: str) -> dict:
    for pool in LIQUIDITY_POOLS:
        if pool["id"] == pool_id:
            return pool
    raise NotFoundError("Pool not found")


def provide_liquidity(user: User, pool_id: Optional[str], amount: Optional[float]) -> dict:
    request = validate_amount(pool_id, amount, key_label="poolId").unwrap()
    pool = get_pool(request.key)

    logger.info("User %s provided %s to %s (simulated)", user.id, request.amount, pool["id"])
    return {
        "message": "Liquidity provided successfully",
        "pool_id": pool["id"],
        "amount": request.amount,
        "lp_tokens": request.amount,
    }


def withdraw_liquidity(user: User, pool_id: Optional[str], amount: Optional[float]) -> dict:
    request = validate_amount(pool_id, amount, key_label="poolId").unwrap()
    pool = get_pool(request.key)

    logger.info("User %s withdrew %s from %s (simulated)", user.id, request.amount, pool["id"])
    return {
        "message": "Liquidity withdrawn successfully",
        "pool_id": pool["id"],
        "amount": request.amount,
    }

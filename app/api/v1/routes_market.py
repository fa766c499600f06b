# File: app/api/v1/routes_market.py

"""
Marketplace and liquidity endpoints.

Trades and liquidity moves are simulated: inputs are checked against real
listings and pools, but no balances are recorded.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.market import (
    BuyRequest,
    LiquidityRequest,
    LiquidityResponse,
    Listing,
    ListingsResponse,
    Pool,
    PoolsResponse,
    SellRequest,
    TradeResponse,
)
from app.services import market_service

marketplace_router = APIRouter()
liquidity_router = APIRouter()


# -----------------------------
# Marketplace
# -----------------------------

@marketplace_router.get("/listings", response_model=ListingsResponse, summary="Tokens listed for sale")
def listings(db: Session = Depends(get_db)):
    items = [Listing(**item) for item in market_service.list_listings(db)]
    return ListingsResponse(listings=items, total=len(items))


@marketplace_router.post("/buy", response_model=TradeResponse, summary="Buy listed tokens (simulated)")
def buy(
    payload: BuyRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TradeResponse(**market_service.buy_token(db, user, payload.token_id, payload.amount))


@marketplace_router.post("/sell", response_model=TradeResponse, summary="Offer owned tokens (simulated)")
def sell(
    payload: SellRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TradeResponse(
        **market_service.sell_token(db, user, payload.token_id, payload.amount, payload.price)
    )


# -----------------------------
# Liquidity
# -----------------------------

@liquidity_router.get("/pools", response_model=PoolsResponse, summary="Liquidity pools")
def pools():
    return PoolsResponse(pools=[Pool(**pool) for pool in market_service.list_pools()])


@liquidity_router.post("/provide", response_model=LiquidityResponse, summary="Provide liquidity (simulated)")
def provide(payload: LiquidityRequest, user: User = Depends(get_current_user)):
    return LiquidityResponse(**market_service.provide_liquidity(user, payload.pool_id, payload.amount))


@liquidity_router.post("/withdraw", response_model=LiquidityResponse, summary="Withdraw liquidity (simulated)")
def withdraw(payload: LiquidityRequest, user: User = Depends(get_current_user)):
    return LiquidityResponse(**market_service.withdraw_liquidity(user, payload.pool_id, payload.amount))

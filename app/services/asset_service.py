# File: app/services/asset_service.py

"""
Asset lifecycle service.

Owners pledge assets and mint tokens for approved ones; admins approve or
reject pending pledges. Every owner-facing lookup is scoped by owner id, so
another user's asset is indistinguishable from a missing one.

Token economics are simulated: the id is random, the price is simply the
estimated value divided by the supply.
"""

import logging
import secrets
from typing import Any, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.models.asset import Asset, AssetStatus, AssetType
from app.models.base import utcnow
from app.models.user import User
from app.services.validation import (
    validate_listing_flag,
    validate_mint,
    validate_pledge,
    validate_reason,
)

logger = logging.getLogger(__name__)

DEFAULT_SYMBOLS = {
    AssetType.real_estate: "RE",
    AssetType.commodities: "CMDTY",
    AssetType.art: "ART",
    AssetType.precious_metals: "GOLD",
    AssetType.bonds: "BOND",
    AssetType.other: "AST",
}

FRACTIONAL_SUPPLY = 1_000_000

# Allowed status transitions; tokenized and rejected are terminal
TRANSITIONS = {
    AssetStatus.pending: {AssetStatus.approved, AssetStatus.rejected},
    AssetStatus.approved: {AssetStatus.tokenized},
    AssetStatus.rejected: set(),
    AssetStatus.tokenized: set(),
}


def generate_token_id() -> str:
    return "0x" + secrets.token_hex(20)


def default_token_name(asset_type: AssetType) -> str:
    return f"{asset_type.value.replace('_', ' ').title()} Token"


def _transition(db: Session, asset: Asset, target: AssetStatus, message: str, **values: Any) -> Asset:
    """
    Move ``asset`` to ``target`` with one conditional UPDATE.

    The row changes only while its stored status still allows the move, so
    when two requests race for the same transition exactly one succeeds and
    the other fails with ``message``.
    """
    sources = [source for source, targets in TRANSITIONS.items() if target in targets]
    result = db.execute(
        update(Asset)
        .where(Asset.id == asset.id, Asset.status.in_(sources))
        .values(status=target, **values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        raise BadRequestError(message)
    db.commit()
    db.refresh(asset)
    return asset


# -----------------------------
# Owner operations
# -----------------------------

def pledge_asset(
    db: Session,
    owner: User,
    *,
    asset_type: Optional[AssetType],
    description: Optional[str],
    estimated_value: Optional[float],
    documents: Optional[List[str]] = None,
) -> Asset:
    pledge = validate_pledge(asset_type, description, estimated_value, documents).unwrap()

    asset = Asset(
        owner_id=owner.id,
        asset_type=pledge.asset_type,
        description=pledge.description,
        estimated_value=pledge.estimated_value,
        documents=pledge.documents,
        status=AssetStatus.pending,
    )
    db.add(asset)
    db.commit()
    db.refresh(asset)

    logger.info("Asset %s pledged by user %s", asset.id, owner.id)
    return asset


def list_owner_assets(db: Session, owner: User, status: Optional[str] = None) -> List[Asset]:
    stmt = select(Asset).where(Asset.owner_id == owner.id)
    if status:
        try:
            stmt = stmt.where(Asset.status == AssetStatus(status))
        except ValueError:
            raise BadRequestError("Invalid status filter")
    stmt = stmt.order_by(Asset.created_at.desc())
    return list(db.execute(stmt).scalars())


def get_owned_asset(db: Session, owner: User, asset_id: str) -> Asset:
    asset = db.execute(
        select(Asset).where(Asset.id == asset_id, Asset.owner_id == owner.id)
    ).scalar_one_or_none()
    if asset is None:
        raise NotFoundError("Asset not found")
    return asset


def mint_asset(db: Session, owner: User, asset_id: str, **options: Any) -> Asset:
    """
    Tokenize an approved asset.

    Fills in token id, name, symbol, type, supply and price, then moves the
    asset to ``tokenized``. A second mint fails because the asset is no
    longer approved.
    """
    asset = get_owned_asset(db, owner, asset_id)
    opts = validate_mint(**options).unwrap()

    supply = opts.token_supply or (FRACTIONAL_SUPPLY if opts.fractional else 1)
    try:
        _transition(
            db,
            asset,
            AssetStatus.tokenized,
            "Only approved assets can be minted",
            token_id=generate_token_id(),
            token_name=opts.token_name or default_token_name(asset.asset_type),
            token_symbol=opts.token_symbol or DEFAULT_SYMBOLS[asset.asset_type],
            token_type=opts.token_type,
            token_supply=supply,
            token_price=round(asset.estimated_value / supply, 6),
            is_listed=opts.is_listed,
            tokenized_at=utcnow(),
        )
    except IntegrityError:
        db.rollback()
        raise ConflictError("Token id already exists, please retry")

    logger.info("Asset %s minted as %s (%s)", asset.id, asset.token_symbol, asset.token_id)
    return asset


def set_listing(db: Session, owner: User, asset_id: str, is_listed: Optional[bool]) -> Asset:
    listed = validate_listing_flag(is_listed).unwrap()
    asset = get_owned_asset(db, owner, asset_id)
    if asset.status != AssetStatus.tokenized:
        raise BadRequestError("Only tokenized assets can be listed")

    asset.is_listed = listed
    db.commit()
    db.refresh(asset)

    logger.info("Asset %s listing set to %s", asset.id, listed)
    return asset


# -----------------------------
# Public reads
# -----------------------------

def list_marketplace(db: Session) -> List[Asset]:
    stmt = (
        select(Asset)
        .options(joinedload(Asset.owner))
        .where(Asset.status == AssetStatus.tokenized, Asset.is_listed.is_(True))
        .order_by(Asset.tokenized_at.desc())
    )
    return list(db.execute(stmt).scalars())


def get_listed_by_token(db: Session, token_id: str) -> Asset:
    asset = db.execute(
        select(Asset).where(
            Asset.token_id == token_id,
            Asset.status == AssetStatus.tokenized,
            Asset.is_listed.is_(True),
        )
    ).scalar_one_or_none()
    if asset is None:
        raise NotFoundError("Token not found on the marketplace")
    return asset


def get_owned_token(db: Session, owner: User, token_id: str) -> Asset:
    asset = db.execute(
        select(Asset).where(
            Asset.token_id == token_id,
            Asset.owner_id == owner.id,
            Asset.status == AssetStatus.tokenized,
        )
    ).scalar_one_or_none()
    if asset is None:
        raise NotFoundError("Token not found")
    return asset


def public_summary(db: Session) -> dict:
    rows = db.execute(
        select(Asset.asset_type, func.count(Asset.id), func.coalesce(func.sum(Asset.estimated_value), 0.0))
        .where(Asset.status == AssetStatus.tokenized)
        .group_by(Asset.asset_type)
    ).all()

    counts = {kind: count for kind, count, _ in rows}
    total_value = float(sum(value for _, _, value in rows))
    return {
        "total_assets": sum(counts.values()),
        "real_estate_count": counts.get(AssetType.real_estate, 0),
        "commodities_count": counts.get(AssetType.commodities, 0) + counts.get(AssetType.precious_metals, 0),
        "total_value": total_value,
        "total_value_millions": round(total_value / 1_000_000, 1),
    }


# -----------------------------
# Admin review
# -----------------------------

def list_pending_assets(db: Session) -> List[Asset]:
    stmt = select(Asset).where(Asset.status == AssetStatus.pending).order_by(Asset.created_at.asc())
    return list(db.execute(stmt).scalars())


def _get_asset(db: Session, asset_id: str) -> Asset:
    asset = db.get(Asset, asset_id)
    if asset is None:
        raise NotFoundError("Asset not found")
    return asset


def approve_asset(db: Session, asset_id: str) -> Asset:
    asset = _get_asset(db, asset_id)
    _transition(db, asset, AssetStatus.approved, "Only pending assets can be approved", reviewed_at=utcnow())

    logger.info("Asset %s approved", asset.id)
    return asset


def reject_asset(db: Session, asset_id: str, reason: Optional[str]) -> Asset:
    text = validate_reason(reason).unwrap()
    asset = _get_asset(db, asset_id)
    _transition(
        db,
        asset,
        AssetStatus.rejected,
        "Only pending assets can be rejected",
        rejection_reason=text,
        reviewed_at=utcnow(),
    )

    logger.info("Asset %s rejected", asset.id)
    return asset

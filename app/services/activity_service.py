# File: app/services/activity_service.py

"""
Activity feed.

There is no event table; the feed is rebuilt on each call from the
timestamps already stored on the caller's assets and KYC submission.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.asset import Asset, AssetStatus
from app.models.user import User

DEFAULT_LIMIT = 50


def _aware(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def _label(asset: Asset) -> str:
    return asset.asset_type.value.replace("_", " ")


def activities_for_user(db: Session, user: User, limit: int = DEFAULT_LIMIT) -> List[dict]:
    assets = db.execute(select(Asset).where(Asset.owner_id == user.id)).scalars()

    events: List[dict] = []
    for asset in assets:
        events.append({
            "id": f"{asset.id}:pledged",
            "type": "asset_pledged",
            "description": f"Pledged {_label(asset)} asset valued at {asset.estimated_value:,.2f}",
            "timestamp": _aware(asset.created_at),
            "asset_id": asset.id,
        })
        if asset.reviewed_at is not None:
            rejected = asset.status == AssetStatus.rejected
            events.append({
                "id": f"{asset.id}:{'rejected' if rejected else 'approved'}",
                "type": "asset_rejected" if rejected else "asset_approved",
                "description": (
                    f"{_label(asset).capitalize()} asset rejected: {asset.rejection_reason}"
                    if rejected
                    else f"{_label(asset).capitalize()} asset approved for tokenization"
                ),
                "timestamp": _aware(asset.reviewed_at),
                "asset_id": asset.id,
            })
        if asset.tokenized_at is not None:
            events.append({
                "id": f"{asset.id}:tokenized",
                "type": "asset_tokenized",
                "description": f"Minted {asset.token_supply:,} {asset.token_symbol} tokens",
                "timestamp": _aware(asset.tokenized_at),
                "asset_id": asset.id,
            })

    if user.kyc_submitted_at is not None:
        events.append({
            "id": f"{user.id}:kyc",
            "type": "kyc_submitted",
            "description": f"KYC submitted with {len(user.kyc_documents or [])} document(s)",
            "timestamp": _aware(user.kyc_submitted_at),
            "asset_id": None,
        })

    events.sort(key=lambda e: e["timestamp"], reverse=True)
    return events[:limit]

# File: app/models/asset.py

"""
Asset model.

An asset is pledged by its owner, reviewed by an admin and, once approved,
minted into a simulated token. Lifecycle:

    pending -> approved -> tokenized
    pending -> rejected
"""

import enum
from datetime import datetime

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, new_id


class AssetType(str, enum.Enum):
    real_estate = "real_estate"
    commodities = "commodities"
    art = "art"
    precious_metals = "precious_metals"
    bonds = "bonds"
    other = "other"


class AssetStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    tokenized = "tokenized"


class Asset(TimestampMixin, Base):
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("estimated_value >= 0", name="ck_assets_estimated_value"),
        CheckConstraint("token_supply IS NULL OR token_supply >= 1", name="ck_assets_token_supply"),
        CheckConstraint("token_price IS NULL OR token_price >= 0", name="ck_assets_token_price"),
        Index("ix_assets_owner_status", "owner_id", "status"),
        Index("ix_assets_listed_status", "is_listed", "status"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    asset_type: Mapped[AssetType] = mapped_column(
        Enum(AssetType, name="asset_type", native_enum=False),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    estimated_value: Mapped[float] = mapped_column(Float, nullable=False)
    documents: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    status: Mapped[AssetStatus] = mapped_column(
        Enum(AssetStatus, name="asset_status", native_enum=False),
        default=AssetStatus.pending,
        nullable=False,
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Filled in exactly once, by the mint transition
    token_id: Mapped[str | None] = mapped_column(String(42), unique=True, index=True, nullable=True)
    token_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    token_symbol: Mapped[str | None] = mapped_column(String(11), nullable=True)
    token_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    token_supply: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    token_price: Mapped[float | None] = mapped_column(Float, nullable=True)

    is_listed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    tokenized_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", back_populates="assets")

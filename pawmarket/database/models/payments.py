"""Payment orders and listing usage slots."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ListingType(str, Enum):
    ADOPTION = "adoption"
    BREEDER = "breeder"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class UsageStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    gateway: Mapped[str] = mapped_column(String(20), default="razorpay")
    gateway_order_id: Mapped[str | None] = mapped_column(
        String(100), unique=True, nullable=True
    )
    gateway_payment_id: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    gateway_signature: Mapped[str | None] = mapped_column(String(255), nullable=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="INR")
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("18"))
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    payment_type: Mapped[str] = mapped_column(String(30), default="listing_fee")
    listing_type: Mapped[ListingType] = mapped_column(String(20), nullable=False)
    listing_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    pricing_tier: Mapped[str] = mapped_column(String(20), nullable=False)
    receipt: Mapped[str | None] = mapped_column(String(40), nullable=True)

    status: Mapped[PaymentStatus] = mapped_column(
        String(20), default=PaymentStatus.PENDING, nullable=False
    )
    failure_reason: Mapped[str | None] = mapped_column(String, nullable=True)
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class ListingUsage(Base):
    __tablename__ = "listing_usage"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    listing_type: Mapped[ListingType] = mapped_column(String(20), nullable=False)
    listing_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    pricing_tier: Mapped[str] = mapped_column(String(20), nullable=False)
    is_free_tier: Mapped[bool] = mapped_column(Boolean, default=False)
    payment_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("payments.id", ondelete="SET NULL"), nullable=True
    )
    valid_from: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    valid_until: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    status: Mapped[UsageStatus] = mapped_column(
        String(20), default=UsageStatus.ACTIVE, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

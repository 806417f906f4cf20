"""Breeder application, profile and listing models."""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    INFO_REQUESTED = "info_requested"


class BreederListingStatus(str, Enum):
    DRAFT = "draft"
    PENDING_PAYMENT = "pending_payment"
    ACTIVE = "active"
    REJECTED = "rejected"
    SOLD = "sold"
    INACTIVE = "inactive"


breeder_profile_breeds = Table(
    "breeder_profile_breeds",
    Base.metadata,
    Column(
        "breeder_profile_id",
        Uuid,
        ForeignKey("breeder_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "breed_id",
        Uuid,
        ForeignKey("breeds.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class BreederApplication(Base):
    __tablename__ = "breeder_applications"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    business_name: Mapped[str] = mapped_column(String(200), nullable=False)
    kennel_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    years_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    business_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    business_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String, nullable=True)

    city_id: Mapped[UUID] = mapped_column(ForeignKey("cities.id"), nullable=False)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)

    breed_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    document_urls: Mapped[dict] = mapped_column(JSON, default=dict)
    agree_to_ethical_standards: Mapped[bool] = mapped_column(Boolean, default=False)

    status: Mapped[ApplicationStatus] = mapped_column(
        String(20), default=ApplicationStatus.PENDING, nullable=False
    )
    submitted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_by_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    review_notes: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    # Set when a rejected application is replaced by a resubmission
    superseded_at: Mapped[datetime | None] = mapped_column(
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

    user = relationship("User", foreign_keys=[user_id], lazy="joined")
    city = relationship("City", lazy="joined")
    events = relationship(
        "BreederApplicationEvent",
        back_populates="application",
        order_by="BreederApplicationEvent.created_at",
        lazy="selectin",
    )


class BreederApplicationEvent(Base):
    __tablename__ = "breeder_application_events"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id: Mapped[UUID] = mapped_column(
        ForeignKey("breeder_applications.id", ondelete="CASCADE"), nullable=False
    )
    from_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    to_status: Mapped[str] = mapped_column(String(20), nullable=False)
    actor_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    note: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    application = relationship("BreederApplication", back_populates="events")


class BreederProfile(Base):
    __tablename__ = "breeder_profiles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    business_name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), unique=True, nullable=False)
    kennel_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    years_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)

    business_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    business_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String, nullable=True)

    city_id: Mapped[UUID] = mapped_column(ForeignKey("cities.id"), nullable=False)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    pincode: Mapped[str | None] = mapped_column(String(10), nullable=True)

    logo_url: Mapped[str | None] = mapped_column(String, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    gallery_urls: Mapped[list[str]] = mapped_column(JSON, default=list)

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    verification_badge: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Counters are incremented in place and may lag under concurrent writes
    view_count: Mapped[int] = mapped_column(Integer, default=0)
    active_listings_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="breeder_profile", lazy="joined")
    city = relationship("City", lazy="joined")
    breeds = relationship(
        "Breed", secondary=breeder_profile_breeds, lazy="selectin"
    )
    listings = relationship("BreederListing", back_populates="breeder_profile")


class BreederListing(Base):
    __tablename__ = "breeder_listings"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    breeder_profile_id: Mapped[UUID] = mapped_column(
        ForeignKey("breeder_profiles.id", ondelete="CASCADE"), nullable=False
    )
    pet_id: Mapped[UUID] = mapped_column(ForeignKey("pets.id"), nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(250), unique=True, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_negotiable: Mapped[bool] = mapped_column(Boolean, default=False)
    available_count: Mapped[int] = mapped_column(Integer, default=1)
    expected_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    includes: Mapped[list[str]] = mapped_column(JSON, default=list)
    pricing_tier: Mapped[str] = mapped_column(String(20), default="free")

    status: Mapped[BreederListingStatus] = mapped_column(
        String(20), default=BreederListingStatus.DRAFT, nullable=False
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    featured_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    view_count: Mapped[int] = mapped_column(Integer, default=0)
    inquiry_count: Mapped[int] = mapped_column(Integer, default=0)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    breeder_profile = relationship(
        "BreederProfile", back_populates="listings", lazy="joined"
    )
    pet = relationship("Pet", lazy="joined")

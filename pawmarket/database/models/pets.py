"""Pet and pet image models."""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Pet(Base):
    __tablename__ = "pets"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    pet_type_id: Mapped[UUID] = mapped_column(
        ForeignKey("pet_types.id"), nullable=False
    )
    # NULL for mixed or unknown breed
    breed_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("breeds.id"), nullable=True
    )
    city_id: Mapped[UUID] = mapped_column(ForeignKey("cities.id"), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), default="male")
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    age_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    age_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    size_category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    is_neutered: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_vaccinated: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    vaccination_details: Mapped[str | None] = mapped_column(String, nullable=True)
    temperament: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    fun_facts: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    rescue_story: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    pet_type = relationship("PetType", lazy="joined")
    breed = relationship("Breed", lazy="joined")
    city = relationship("City", lazy="joined")
    images = relationship(
        "PetImage",
        back_populates="pet",
        cascade="all, delete-orphan",
        order_by="PetImage.display_order",
        lazy="selectin",
    )

    @property
    def primary_image_url(self) -> str | None:
        for image in self.images:
            if image.is_primary:
                return image.url
        return self.images[0].url if self.images else None


class PetImage(Base):
    __tablename__ = "pet_images"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    pet_id: Mapped[UUID] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(String, nullable=False)
    thumb_url: Mapped[str | None] = mapped_column(String, nullable=True)
    alt_text: Mapped[str | None] = mapped_column(String, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    pet = relationship("Pet", back_populates="images")

"""Adoption listings owned by individual users."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select, update

from pawmarket.api.core.exceptions.base import (
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
)
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import (
    AdoptionListing,
    AdoptionListingStatus,
    Breed,
    City,
    ListingType,
    Pet,
    PetType,
    User,
)
from pawmarket.modules.catalog.service import CatalogService
from pawmarket.modules.payment.pricing import FREE_TIER, get_tier_price
from pawmarket.modules.pets.factory import PET_FIELDS, build_pet, build_pet_images
from pawmarket.utils.slugs import short_token, slugify

LISTING_FIELDS = (
    "title",
    "adoption_fee",
    "fee_includes",
    "adopter_requirements",
    "home_check_required",
)

EDITABLE_STATUSES = {
    AdoptionListingStatus.DRAFT,
    AdoptionListingStatus.REJECTED,
    AdoptionListingStatus.ACTIVE,
}
SUBMITTABLE_STATUSES = {AdoptionListingStatus.DRAFT, AdoptionListingStatus.REJECTED}


@dataclass
class OwnerContact:
    phone: str | None
    phone_verified: bool
    email: str
    preferred_channel: str


def build_listing_slug(
    title: str, pet_type: PetType, breed: Breed | None, pet_name: str, city: City
) -> str:
    parts = [
        slugify(title, fallback=""),
        slugify(pet_type.name, fallback="pet"),
        breed.slug if breed else "mixed",
        slugify(pet_name, fallback=""),
        city.slug,
    ]
    base = "-".join(part for part in parts if part)[:200].rstrip("-")
    return f"{base}-{short_token(6)}"


class AdoptionService(BaseService):
    async def _load(self, *criteria) -> AdoptionListing | None:
        result = await self.db.execute(
            select(AdoptionListing)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        return result.scalars().unique().first()

    async def count_active_listings(self, user_id: UUID) -> int:
        count = await self.db.scalar(
            select(func.count(AdoptionListing.id)).where(
                AdoptionListing.user_id == user_id,
                AdoptionListing.status == AdoptionListingStatus.ACTIVE,
            )
        )
        return count or 0

    async def create_listing(self, user_id: UUID, data: dict) -> AdoptionListing:
        """Create the pet, its images and the listing in one commit.

        The listing goes live straight away only on a zero-fee tier while the
        owner has nothing else active; otherwise it waits for payment.
        """
        pet_data = data["pet"]
        catalog = CatalogService(self.db)
        pet_type = await catalog.require_pet_type(pet_data["pet_type_id"])
        breed = None
        if pet_data.get("breed_id"):
            breed = await catalog.require_breed(pet_data["breed_id"], pet_type.id)
        city = await catalog.require_city(data["city_id"])

        tier = data.get("pricing_tier") or FREE_TIER
        fee = get_tier_price(ListingType.ADOPTION, tier)
        active_count = await self.count_active_listings(user_id)
        activate = fee == 0 and active_count == 0

        pet = build_pet(user_id, pet_data, pet_type, breed, city)
        listing = AdoptionListing(
            user_id=user_id,
            pet=pet,
            slug=build_listing_slug(data["title"], pet_type, breed, pet.name, city),
            pricing_tier=tier,
            status=(
                AdoptionListingStatus.ACTIVE
                if activate
                else AdoptionListingStatus.PENDING_PAYMENT
            ),
            published_at=datetime.now(timezone.utc) if activate else None,
        )
        for field in LISTING_FIELDS:
            if data.get(field) is not None:
                setattr(listing, field, data[field])
        self.db.add(pet)
        self.db.add(listing)
        await self.db.commit()

        self.logger.info(
            "Adoption listing created",
            listing_id=str(listing.id),
            status=listing.status,
            pricing_tier=tier,
        )
        return await self.get_my_listing(user_id, listing.id)

    async def get_my_listing(self, user_id: UUID, listing_id: UUID) -> AdoptionListing:
        listing = await self._load(AdoptionListing.id == listing_id)
        if not listing:
            raise NotFoundError(
                MessageCode.LISTING_NOT_FOUND, {"listing_id": str(listing_id)}
            )
        if listing.user_id != user_id:
            raise NotAuthorizedError(details={"listing_id": str(listing_id)})
        return listing

    async def update_listing(
        self, user_id: UUID, listing_id: UUID, data: dict
    ) -> AdoptionListing:
        listing = await self.get_my_listing(user_id, listing_id)
        if listing.status not in EDITABLE_STATUSES:
            raise InvalidStateError(
                details={"listing_id": str(listing_id), "status": listing.status}
            )

        pet: Pet = listing.pet
        pet_data = data.get("pet") or {}
        for field in PET_FIELDS:
            if pet_data.get(field) is not None:
                setattr(pet, field, pet_data[field])
        if pet_data.get("images") is not None:
            # Full replace; delete-orphan drops the old rows
            pet.images = build_pet_images(pet_data["images"])

        for field in LISTING_FIELDS:
            if data.get(field) is not None:
                setattr(listing, field, data[field])

        if data.get("submit_for_review") and listing.status == AdoptionListingStatus.DRAFT:
            listing.status = AdoptionListingStatus.PENDING_REVIEW
        elif listing.status == AdoptionListingStatus.ACTIVE and not listing.published_at:
            listing.published_at = datetime.now(timezone.utc)

        await self.db.commit()
        return await self.get_my_listing(user_id, listing_id)

    async def submit_listing(self, user_id: UUID, listing_id: UUID) -> AdoptionListing:
        listing = await self.get_my_listing(user_id, listing_id)
        if listing.status not in SUBMITTABLE_STATUSES:
            raise InvalidStateError(
                details={"listing_id": str(listing_id), "status": listing.status}
            )
        listing.status = AdoptionListingStatus.PENDING_REVIEW
        listing.rejection_reason = None
        await self.db.commit()
        self.logger.info("Adoption listing submitted", listing_id=str(listing_id))
        return listing

    async def mark_adopted(self, user_id: UUID, listing_id: UUID) -> AdoptionListing:
        listing = await self.get_my_listing(user_id, listing_id)
        if listing.status != AdoptionListingStatus.ACTIVE:
            raise InvalidStateError(
                details={"listing_id": str(listing_id), "status": listing.status}
            )
        listing.status = AdoptionListingStatus.ADOPTED
        listing.adopted_at = datetime.now(timezone.utc)
        await self.db.commit()
        self.logger.info("Adoption listing adopted", listing_id=str(listing_id))
        return listing

    async def list_my_listings(
        self,
        user_id: UUID,
        status: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[AdoptionListing], int]:
        stmt = select(AdoptionListing).where(AdoptionListing.user_id == user_id)
        if status:
            stmt = stmt.where(AdoptionListing.status == status)

        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        result = await self.db.execute(
            stmt.order_by(AdoptionListing.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().unique().all()), total or 0

    async def get_owner_contact(self, slug: str) -> OwnerContact:
        """Reveal the owner's contact details and count the inquiry."""
        listing = await self._load(
            AdoptionListing.slug == slug,
            AdoptionListing.status == AdoptionListingStatus.ACTIVE,
        )
        if not listing:
            raise NotFoundError(MessageCode.LISTING_NOT_FOUND, {"slug": slug})

        await self.db.execute(
            update(AdoptionListing)
            .where(AdoptionListing.id == listing.id)
            .values(inquiry_count=AdoptionListing.inquiry_count + 1)
        )
        await self.db.commit()

        owner: User = listing.user
        return OwnerContact(
            phone=owner.phone,
            phone_verified=bool(owner.phone_verified),
            email=owner.email,
            preferred_channel="whatsapp" if owner.phone else "email",
        )

    async def list_public_listings(
        self,
        pet_type: str | None = None,
        breed: str | None = None,
        city: str | None = None,
        gender: str | None = None,
        page: int = 1,
        limit: int = 12,
    ) -> tuple[list[AdoptionListing], int]:
        """Active listings, featured first then newest."""
        stmt = (
            select(AdoptionListing)
            .join(Pet, AdoptionListing.pet_id == Pet.id)
            .where(AdoptionListing.status == AdoptionListingStatus.ACTIVE)
        )
        if pet_type:
            stmt = stmt.join(PetType, Pet.pet_type_id == PetType.id).where(
                PetType.slug == pet_type
            )
        if breed:
            stmt = stmt.join(Breed, Pet.breed_id == Breed.id).where(Breed.slug == breed)
        if city:
            stmt = stmt.join(City, Pet.city_id == City.id).where(City.slug == city)
        if gender:
            stmt = stmt.where(Pet.gender == gender.lower())

        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        result = await self.db.execute(
            stmt.order_by(
                AdoptionListing.is_featured.desc(), AdoptionListing.created_at.desc()
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().unique().all()), total or 0

    async def get_public_listing(
        self, slug: str, count_view: bool = True
    ) -> AdoptionListing:
        listing = await self._load(
            AdoptionListing.slug == slug,
            AdoptionListing.status.in_(
                [AdoptionListingStatus.ACTIVE, AdoptionListingStatus.ADOPTED]
            ),
        )
        if not listing:
            raise NotFoundError(MessageCode.LISTING_NOT_FOUND, {"slug": slug})

        if count_view:
            # Counter is eventually consistent; the returned object is not refreshed
            await self.db.execute(
                update(AdoptionListing)
                .where(AdoptionListing.id == listing.id)
                .values(view_count=AdoptionListing.view_count + 1)
            )
            await self.db.commit()
        return listing

    async def dashboard_stats(self, user_id: UUID) -> dict[str, int]:
        """Totals across the owner's adoption listings."""
        row = (
            await self.db.execute(
                select(
                    func.count(AdoptionListing.id),
                    func.coalesce(func.sum(AdoptionListing.view_count), 0),
                    func.coalesce(func.sum(AdoptionListing.inquiry_count), 0),
                ).where(AdoptionListing.user_id == user_id)
            )
        ).one()
        return {
            "active_listings": await self.count_active_listings(user_id),
            "total_listings": row[0],
            "total_views": int(row[1]),
            "inquiries": int(row[2]),
        }

"""Breeder listings: creation, ownership-checked edits and public search."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, or_, select, update

from pawmarket.api.core.exceptions.base import (
    InputValidationError,
    NotAuthorizedError,
    NotFoundError,
)
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import (
    BreederListing,
    BreederListingStatus,
    BreederProfile,
    ListingType,
    Pet,
    PetType,
)
from pawmarket.modules.breeder.profiles import BreederProfileService
from pawmarket.modules.catalog.service import CatalogService
from pawmarket.modules.payment.pricing import FREE_TIER, get_tier_price
from pawmarket.modules.pets.factory import build_pet
from pawmarket.utils.slugs import short_token

LISTING_FIELDS = (
    "title",
    "price",
    "price_negotiable",
    "available_count",
    "expected_date",
    "includes",
)


@dataclass
class ListingFilter:
    pet_type: str | None = None
    breed_id: UUID | None = None
    city_id: UUID | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    page: int = 1
    page_size: int = 12


class BreederListingService(BaseService):
    async def _require_profile(self, user_id: UUID) -> BreederProfile:
        profile = await BreederProfileService(self.db).find_by_user(user_id)
        if not profile:
            raise NotAuthorizedError(MessageCode.BREEDER_PROFILE_REQUIRED)
        return profile

    async def _load(self, *criteria) -> BreederListing | None:
        result = await self.db.execute(
            select(BreederListing)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        return result.scalars().unique().first()

    async def get_listing(self, listing_id: UUID) -> BreederListing:
        listing = await self._load(
            BreederListing.id == listing_id, BreederListing.is_deleted.is_(False)
        )
        if not listing:
            raise NotFoundError(
                MessageCode.LISTING_NOT_FOUND, {"listing_id": str(listing_id)}
            )
        return listing

    async def count_active_listings(self, profile_id: UUID) -> int:
        count = await self.db.scalar(
            select(func.count(BreederListing.id)).where(
                BreederListing.breeder_profile_id == profile_id,
                BreederListing.status == BreederListingStatus.ACTIVE,
                BreederListing.is_deleted.is_(False),
            )
        )
        return count or 0

    async def _resolve_pet(
        self, user_id: UUID, profile: BreederProfile, data: dict
    ) -> Pet:
        if data.get("pet_id"):
            pet = await self.db.get(Pet, data["pet_id"])
            if not pet:
                raise NotFoundError(
                    MessageCode.PET_NOT_FOUND, {"pet_id": str(data["pet_id"])}
                )
            if pet.owner_id != user_id:
                raise NotAuthorizedError(details={"pet_id": str(pet.id)})
            return pet

        new_pet = data.get("new_pet")
        if not new_pet:
            raise InputValidationError(
                message="Either pet_id or new_pet must be provided"
            )

        catalog = CatalogService(self.db)
        pet_type = await catalog.require_pet_type(new_pet["pet_type_id"])
        breed = None
        if new_pet.get("breed_id"):
            breed = await catalog.require_breed(new_pet["breed_id"], pet_type.id)
        # Inline pets live in the breeder's city
        city = await catalog.require_city(profile.city_id)
        pet = build_pet(user_id, new_pet, pet_type, breed, city)
        self.db.add(pet)
        return pet

    async def create_listing(self, user_id: UUID, data: dict) -> BreederListing:
        """Create a listing for the caller's breeder profile.

        A zero-fee tier activates immediately only while the breeder has no
        other active listing; everything else waits for payment.
        """
        profile = await self._require_profile(user_id)
        tier = data.get("pricing_tier") or FREE_TIER
        fee = get_tier_price(ListingType.BREEDER, tier)
        pet = await self._resolve_pet(user_id, profile, data)

        breed_slug = pet.breed.slug if pet.breed else "pet"
        city_slug = profile.city.slug if profile.city else "india"

        active_count = await self.count_active_listings(profile.id)
        now = datetime.now(timezone.utc)
        activate = fee == 0 and active_count == 0

        listing = BreederListing(
            breeder_profile_id=profile.id,
            pet=pet,
            slug=f"{breed_slug}-in-{city_slug}-{short_token(8)}",
            pricing_tier=tier,
            status=(
                BreederListingStatus.ACTIVE
                if activate
                else BreederListingStatus.PENDING_PAYMENT
            ),
            published_at=now if activate else None,
        )
        for field in LISTING_FIELDS:
            if data.get(field) is not None:
                setattr(listing, field, data[field])
        self.db.add(listing)

        if activate:
            profile.active_listings_count = active_count + 1

        await self.db.commit()
        self.logger.info(
            "Breeder listing created",
            listing_id=str(listing.id),
            status=listing.status,
            pricing_tier=tier,
        )
        return await self.get_listing(listing.id)

    async def _get_owned_listing(
        self, user_id: UUID, listing_id: UUID
    ) -> tuple[BreederListing, BreederProfile]:
        listing = await self.get_listing(listing_id)
        profile = await BreederProfileService(self.db).find_by_user(user_id)
        if not profile or listing.breeder_profile_id != profile.id:
            raise NotAuthorizedError(details={"listing_id": str(listing_id)})
        return listing, profile

    async def update_listing(
        self, user_id: UUID, listing_id: UUID, data: dict
    ) -> BreederListing:
        listing, _ = await self._get_owned_listing(user_id, listing_id)
        for field in LISTING_FIELDS:
            if field in data and data[field] is not None:
                setattr(listing, field, data[field])
        await self.db.commit()
        return await self.get_listing(listing_id)

    async def delete_listing(self, user_id: UUID, listing_id: UUID) -> None:
        listing, profile = await self._get_owned_listing(user_id, listing_id)
        was_active = listing.status == BreederListingStatus.ACTIVE
        listing.is_deleted = True
        if was_active:
            profile.active_listings_count = max(
                (profile.active_listings_count or 0) - 1, 0
            )
        await self.db.commit()
        self.logger.info("Breeder listing deleted", listing_id=str(listing_id))

    async def list_my_listings(self, user_id: UUID) -> list[BreederListing]:
        profile = await BreederProfileService(self.db).find_by_user(user_id)
        if not profile:
            return []
        result = await self.db.execute(
            select(BreederListing)
            .where(
                BreederListing.breeder_profile_id == profile.id,
                BreederListing.is_deleted.is_(False),
            )
            .order_by(BreederListing.created_at.desc())
        )
        return list(result.scalars().unique().all())

    async def list_public_listings(self, profile_id: UUID) -> list[BreederListing]:
        result = await self.db.execute(
            select(BreederListing)
            .where(
                BreederListing.breeder_profile_id == profile_id,
                BreederListing.status == BreederListingStatus.ACTIVE,
                BreederListing.is_deleted.is_(False),
            )
            .order_by(BreederListing.is_featured.desc(), BreederListing.created_at.desc())
        )
        return list(result.scalars().unique().all())

    async def search_listings(
        self, filters: ListingFilter
    ) -> tuple[list[BreederListing], int]:
        """Active listings, featured first then newest, price bounds inclusive."""
        stmt = (
            select(BreederListing)
            .join(Pet, BreederListing.pet_id == Pet.id)
            .join(PetType, Pet.pet_type_id == PetType.id)
            .join(BreederProfile, BreederListing.breeder_profile_id == BreederProfile.id)
            .where(
                BreederListing.status == BreederListingStatus.ACTIVE,
                BreederListing.is_deleted.is_(False),
            )
        )
        if filters.pet_type:
            pet_type = filters.pet_type.lower()
            stmt = stmt.where(
                or_(func.lower(PetType.name) == pet_type, PetType.slug == pet_type)
            )
        if filters.breed_id:
            stmt = stmt.where(Pet.breed_id == filters.breed_id)
        if filters.city_id:
            stmt = stmt.where(BreederProfile.city_id == filters.city_id)
        if filters.min_price is not None:
            stmt = stmt.where(BreederListing.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(BreederListing.price <= filters.max_price)

        total = await self.db.scalar(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self.db.execute(
            stmt.order_by(
                BreederListing.is_featured.desc(), BreederListing.created_at.desc()
            )
            .offset((filters.page - 1) * filters.page_size)
            .limit(filters.page_size)
        )
        return list(result.scalars().unique().all()), total or 0

    async def get_listing_by_slug(
        self, slug: str, count_view: bool = True
    ) -> BreederListing:
        listing = await self._load(
            BreederListing.slug == slug,
            BreederListing.status == BreederListingStatus.ACTIVE,
            BreederListing.is_deleted.is_(False),
        )
        if not listing:
            raise NotFoundError(MessageCode.LISTING_NOT_FOUND, {"slug": slug})

        if count_view:
            await self.db.execute(
                update(BreederListing)
                .where(BreederListing.id == listing.id)
                .values(view_count=BreederListing.view_count + 1)
            )
            await self.db.commit()
        return listing

from uuid import UUID

from sqlalchemy import select, update

from pawmarket.api.core.exceptions.base import NotFoundError
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import BreederProfile
from pawmarket.modules.catalog.service import CatalogService

PROFILE_FIELDS = (
    "business_name",
    "kennel_name",
    "description",
    "years_experience",
    "business_phone",
    "business_email",
    "website_url",
    "city_id",
    "address",
    "pincode",
    "logo_url",
    "cover_image_url",
    "gallery_urls",
)


class BreederProfileService(BaseService):
    async def _get_one(self, *criteria) -> BreederProfile | None:
        result = await self.db.execute(
            select(BreederProfile)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def find_by_user(self, user_id: UUID) -> BreederProfile | None:
        return await self._get_one(BreederProfile.user_id == user_id)

    async def get_my_profile(self, user_id: UUID) -> BreederProfile:
        profile = await self.find_by_user(user_id)
        if not profile:
            raise NotFoundError(MessageCode.BREEDER_PROFILE_NOT_FOUND)
        return profile

    async def get_profile_by_id(self, profile_id: UUID) -> BreederProfile:
        profile = await self._get_one(BreederProfile.id == profile_id)
        if not profile:
            raise NotFoundError(
                MessageCode.BREEDER_PROFILE_NOT_FOUND, {"profile_id": str(profile_id)}
            )
        return profile

    async def get_profile_by_slug(
        self, slug: str, count_view: bool = True
    ) -> BreederProfile:
        """Public profile lookup.

        ``view_count`` is bumped with a single UPDATE; concurrent readers may
        observe a slightly stale value.
        """
        profile = await self._get_one(BreederProfile.slug == slug)
        if not profile:
            raise NotFoundError(MessageCode.BREEDER_PROFILE_NOT_FOUND, {"slug": slug})

        if count_view:
            await self.db.execute(
                update(BreederProfile)
                .where(BreederProfile.id == profile.id)
                .values(view_count=BreederProfile.view_count + 1)
            )
            await self.db.commit()
        return profile

    async def update_my_profile(self, user_id: UUID, data: dict) -> BreederProfile:
        profile = await self.get_my_profile(user_id)
        catalog = CatalogService(self.db)

        if data.get("city_id"):
            await catalog.require_city(data["city_id"])
        breeds = None
        if data.get("breed_ids") is not None:
            breeds = await catalog.get_breeds_by_ids(data["breed_ids"])

        for field in PROFILE_FIELDS:
            if field in data and data[field] is not None:
                setattr(profile, field, data[field])
        if breeds is not None:
            profile.breeds = breeds

        await self.db.commit()
        self.logger.info("Breeder profile updated", profile_id=str(profile.id))
        return await self.get_profile_by_id(profile.id)

from uuid import UUID

from sqlalchemy import select

from pawmarket.api.core.exceptions.base import NotFoundError
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import AdoptionListing, Favorite


class FavoritesService(BaseService):
    async def _find(self, user_id: UUID, listing_id: UUID) -> Favorite | None:
        result = await self.db.execute(
            select(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.adoption_listing_id == listing_id,
            )
        )
        return result.scalars().unique().first()

    async def list_favorites(self, user_id: UUID) -> list[Favorite]:
        result = await self.db.execute(
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc())
        )
        return list(result.scalars().unique().all())

    async def add_favorite(self, user_id: UUID, listing_id: UUID) -> Favorite:
        """Adding the same listing twice returns the existing favorite."""
        listing = await self.db.get(AdoptionListing, listing_id)
        if not listing:
            raise NotFoundError(
                MessageCode.LISTING_NOT_FOUND, {"listing_id": str(listing_id)}
            )

        existing = await self._find(user_id, listing_id)
        if existing:
            return existing

        favorite = Favorite(user_id=user_id, adoption_listing_id=listing_id)
        favorite.listing = listing
        self.db.add(favorite)
        await self.db.commit()
        return favorite

    async def remove_favorite(self, user_id: UUID, listing_id: UUID) -> None:
        favorite = await self._find(user_id, listing_id)
        if not favorite:
            raise NotFoundError(details={"listing_id": str(listing_id)})
        await self.db.delete(favorite)
        await self.db.commit()

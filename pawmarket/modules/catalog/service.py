"""Read-only reference data: pet types, breeds and cities."""

from uuid import UUID

from sqlalchemy import func, select

from pawmarket.api.core.exceptions.base import InputValidationError, NotFoundError
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import Breed, City, PetType, State


class CatalogService(BaseService):
    async def list_pet_types(self) -> list[PetType]:
        result = await self.db.execute(
            select(PetType)
            .where(PetType.is_active.is_(True))
            .order_by(PetType.display_order, PetType.name)
        )
        return list(result.scalars().all())

    async def list_breeds(
        self,
        pet_type: str | None = None,
        size: str | None = None,
        popular: bool | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 500,
    ) -> tuple[list[Breed], int]:
        stmt = select(Breed).where(Breed.is_active.is_(True))
        if pet_type:
            stmt = stmt.join(Breed.pet_type).where(PetType.slug == pet_type)
        if size:
            stmt = stmt.where(Breed.size_category == size)
        if popular:
            stmt = stmt.where(Breed.is_popular.is_(True))
        if search:
            stmt = stmt.where(func.lower(Breed.name).contains(search.lower()))

        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        result = await self.db.execute(
            stmt.order_by(Breed.display_order, Breed.name)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def get_breed_by_slug(self, slug: str) -> Breed:
        result = await self.db.execute(
            select(Breed).where(Breed.slug == slug, Breed.is_active.is_(True))
        )
        breed = result.scalar_one_or_none()
        if not breed:
            raise NotFoundError(MessageCode.BREED_NOT_FOUND, {"slug": slug})
        return breed

    async def list_cities(
        self,
        state: str | None = None,
        featured: bool | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 500,
    ) -> tuple[list[City], int]:
        stmt = select(City).where(City.is_active.is_(True))
        if state:
            stmt = stmt.join(City.state).where(State.slug == state)
        if featured:
            stmt = stmt.where(City.is_featured.is_(True))
        if search:
            stmt = stmt.where(func.lower(City.name).contains(search.lower()))

        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        result = await self.db.execute(
            stmt.order_by(City.is_featured.desc(), City.name)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def get_city_by_slug(self, slug: str) -> City:
        result = await self.db.execute(
            select(City).where(City.slug == slug, City.is_active.is_(True))
        )
        city = result.scalar_one_or_none()
        if not city:
            raise NotFoundError(MessageCode.CITY_NOT_FOUND, {"slug": slug})
        return city

    async def require_pet_type(self, pet_type_id: UUID) -> PetType:
        pet_type = await self.db.get(PetType, pet_type_id)
        if not pet_type:
            raise InputValidationError(
                MessageCode.PET_TYPE_NOT_FOUND, {"pet_type_id": str(pet_type_id)}
            )
        return pet_type

    async def require_breed(
        self, breed_id: UUID, pet_type_id: UUID | None = None
    ) -> Breed:
        """Fetch a breed, optionally checking it belongs to the given pet type."""
        breed = await self.db.get(Breed, breed_id)
        if not breed or (pet_type_id and breed.pet_type_id != pet_type_id):
            raise InputValidationError(
                MessageCode.BREED_NOT_FOUND, {"breed_id": str(breed_id)}
            )
        return breed

    async def require_city(self, city_id: UUID) -> City:
        city = await self.db.get(City, city_id)
        if not city:
            raise InputValidationError(
                MessageCode.CITY_NOT_FOUND, {"city_id": str(city_id)}
            )
        return city

    async def get_breeds_by_ids(self, breed_ids: list[UUID]) -> list[Breed]:
        """Fetch breeds by id; raises if any id is unknown."""
        unique_ids = list(dict.fromkeys(breed_ids))
        if not unique_ids:
            return []
        result = await self.db.execute(select(Breed).where(Breed.id.in_(unique_ids)))
        breeds = list(result.scalars().all())
        found = {breed.id for breed in breeds}
        missing = [str(breed_id) for breed_id in unique_ids if breed_id not in found]
        if missing:
            raise InputValidationError(
                MessageCode.BREED_NOT_FOUND, {"missing_breed_ids": missing}
            )
        return breeds

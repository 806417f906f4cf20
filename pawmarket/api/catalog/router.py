"""Public reference data: pet types, breeds and cities."""

from fastapi import APIRouter, Query

from pawmarket.api.catalog.schemas import (
    BreedListResponse,
    BreedModel,
    BreedResponse,
    CityListResponse,
    CityModel,
    CityResponse,
    PetTypeListResponse,
    PetTypeModel,
)
from pawmarket.api.core.dependencies import CatalogServiceDep
from pawmarket.api.core.messages import APIResponse

router = APIRouter(prefix="/public", tags=["catalog"])


@router.get("/pet-types", response_model=PetTypeListResponse)
async def list_pet_types(catalog: CatalogServiceDep) -> PetTypeListResponse:
    pet_types = await catalog.list_pet_types()
    return APIResponse.success(
        data=[PetTypeModel.model_validate(pet_type) for pet_type in pet_types]
    )


@router.get("/breeds", response_model=BreedListResponse)
async def list_breeds(
    catalog: CatalogServiceDep,
    pet_type: str | None = None,
    size: str | None = None,
    popular: bool | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(500, ge=1, le=500),
) -> BreedListResponse:
    breeds, _ = await catalog.list_breeds(
        pet_type=pet_type,
        size=size,
        popular=popular,
        search=search,
        page=page,
        limit=limit,
    )
    return APIResponse.success(data=[BreedModel.model_validate(b) for b in breeds])


@router.get("/breeds/{slug}", response_model=BreedResponse)
async def get_breed(slug: str, catalog: CatalogServiceDep) -> BreedResponse:
    breed = await catalog.get_breed_by_slug(slug)
    return APIResponse.success(data=BreedModel.model_validate(breed))


@router.get("/cities", response_model=CityListResponse)
async def list_cities(
    catalog: CatalogServiceDep,
    state: str | None = None,
    featured: bool | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(500, ge=1, le=500),
) -> CityListResponse:
    cities, _ = await catalog.list_cities(
        state=state, featured=featured, search=search, page=page, limit=limit
    )
    return APIResponse.success(data=[CityModel.model_validate(c) for c in cities])


@router.get("/cities/{slug}", response_model=CityResponse)
async def get_city(slug: str, catalog: CatalogServiceDep) -> CityResponse:
    city = await catalog.get_city_by_slug(slug)
    return APIResponse.success(data=CityModel.model_validate(city))

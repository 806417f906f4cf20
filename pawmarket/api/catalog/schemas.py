"""Catalog API schemas."""

from uuid import UUID

from pydantic import BaseModel

from pawmarket.api.core.messages import APIResponse
from pawmarket.api.core.models.pets import PetTypeSummary


class PetTypeModel(BaseModel):
    id: UUID
    name: str
    slug: str
    plural_name: str
    icon_url: str | None = None
    display_order: int

    model_config = {"from_attributes": True}


class BreedModel(BaseModel):
    id: UUID
    name: str
    slug: str
    size_category: str | None = None
    description: str | None = None
    image_url: str | None = None
    is_popular: bool
    pet_type: PetTypeSummary

    model_config = {"from_attributes": True}


class StateModel(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CityModel(BaseModel):
    id: UUID
    name: str
    slug: str
    is_featured: bool
    state: StateModel

    model_config = {"from_attributes": True}


PetTypeListResponse = APIResponse[list[PetTypeModel]]
BreedListResponse = APIResponse[list[BreedModel]]
BreedResponse = APIResponse[BreedModel]
CityListResponse = APIResponse[list[CityModel]]
CityResponse = APIResponse[CityModel]

"""Pet and catalog shapes shared by the adoption and breeder APIs."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class PetTypeSummary(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}


class BreedSummary(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CitySummary(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}


class PetImageModel(BaseModel):
    id: UUID
    url: str
    thumb_url: str | None = None
    is_primary: bool
    display_order: int

    model_config = {"from_attributes": True}


class PetModel(BaseModel):
    id: UUID
    name: str
    slug: str
    gender: str
    date_of_birth: date | None = None
    age_years: int | None = None
    age_months: int | None = None
    color: str | None = None
    size_category: str | None = None
    weight: Decimal | None = None
    is_neutered: bool | None = None
    is_vaccinated: bool | None = None
    vaccination_details: str | None = None
    temperament: dict | None = None
    fun_facts: list[str] | None = None
    rescue_story: str | None = None
    description: str | None = None
    pet_type: PetTypeSummary
    breed: BreedSummary | None = None
    city: CitySummary
    images: list[PetImageModel] = []
    primary_image_url: str | None = None

    model_config = {"from_attributes": True}


class PetFields(BaseModel):
    gender: str | None = Field(None, pattern="^(male|female)$")
    date_of_birth: date | None = None
    age_years: int | None = Field(None, ge=0, le=40)
    age_months: int | None = Field(None, ge=0, le=11)
    color: str | None = Field(None, max_length=50)
    size_category: str | None = Field(None, max_length=20)
    weight: Decimal | None = Field(None, ge=0)
    is_neutered: bool | None = None
    is_vaccinated: bool | None = None
    vaccination_details: str | None = None
    temperament: dict | None = None
    fun_facts: list[str] | None = None
    rescue_story: str | None = None
    description: str | None = None
    images: list[str] | None = Field(None, max_length=10)


class PetCreateRequest(PetFields):
    pet_type_id: UUID
    breed_id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=100)


class PetUpdateRequest(PetFields):
    name: str | None = Field(None, min_length=1, max_length=100)

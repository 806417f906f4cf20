"""Breeder application, profile and listing API schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from pawmarket.api.core.messages import APIResponse, Paginated
from pawmarket.api.core.models.pets import (
    BreedSummary,
    CitySummary,
    PetCreateRequest,
    PetModel,
)


class ApplicationEventModel(BaseModel):
    from_status: str | None = None
    to_status: str
    actor_id: UUID | None = None
    note: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BreederApplicationModel(BaseModel):
    id: UUID
    user_id: UUID
    business_name: str
    kennel_name: str | None = None
    years_experience: int | None = None
    description: str | None = None
    business_phone: str
    business_email: str | None = None
    website_url: str | None = None
    city_id: UUID
    address: str | None = None
    pincode: str | None = None
    breed_ids: list[str] = []
    document_urls: dict = {}
    agree_to_ethical_standards: bool
    status: str
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    review_notes: dict | None = None
    created_at: datetime
    events: list[ApplicationEventModel] = []

    model_config = {"from_attributes": True}


class BreederApplicationRequest(BaseModel):
    business_name: str = Field(..., min_length=2, max_length=200)
    kennel_name: str | None = Field(None, max_length=200)
    years_experience: int | None = Field(None, ge=0, le=80)
    description: str | None = None
    business_phone: str = Field(..., min_length=5, max_length=20)
    business_email: EmailStr | None = None
    website_url: str | None = None
    city_id: UUID
    address: str | None = None
    pincode: str | None = Field(None, max_length=10)
    breed_ids: list[UUID] = []
    document_urls: dict[str, str] = {}
    agree_to_ethical_standards: bool = False


class BreederProfileModel(BaseModel):
    id: UUID
    user_id: UUID
    business_name: str
    slug: str
    kennel_name: str | None = None
    description: str | None = None
    years_experience: int | None = None
    business_phone: str | None = None
    business_email: str | None = None
    website_url: str | None = None
    city: CitySummary
    address: str | None = None
    pincode: str | None = None
    logo_url: str | None = None
    cover_image_url: str | None = None
    gallery_urls: list[str] = []
    is_verified: bool
    verified_at: datetime | None = None
    verification_badge: str | None = None
    view_count: int
    active_listings_count: int
    breeds: list[BreedSummary] = []
    created_at: datetime

    model_config = {"from_attributes": True}

    def without_contact(self) -> "BreederProfileModel":
        """Copy with business contact details hidden, for anonymous visitors."""
        return self.model_copy(
            update={"business_phone": None, "business_email": None, "address": None}
        )


class BreederProfileUpdateRequest(BaseModel):
    business_name: str | None = Field(None, min_length=2, max_length=200)
    kennel_name: str | None = Field(None, max_length=200)
    description: str | None = None
    years_experience: int | None = Field(None, ge=0, le=80)
    business_phone: str | None = Field(None, min_length=5, max_length=20)
    business_email: EmailStr | None = None
    website_url: str | None = None
    city_id: UUID | None = None
    address: str | None = None
    pincode: str | None = Field(None, max_length=10)
    logo_url: str | None = None
    cover_image_url: str | None = None
    gallery_urls: list[str] | None = None
    breed_ids: list[UUID] | None = None


class ListingBreederModel(BaseModel):
    id: UUID
    business_name: str
    slug: str
    is_verified: bool
    verification_badge: str | None = None

    model_config = {"from_attributes": True}


class BreederListingModel(BaseModel):
    id: UUID
    title: str
    slug: str
    price: Decimal
    price_negotiable: bool
    available_count: int
    expected_date: date | None = None
    includes: list[str] = []
    pricing_tier: str
    status: str
    is_featured: bool
    view_count: int
    published_at: datetime | None = None
    created_at: datetime
    pet: PetModel
    breeder_profile: ListingBreederModel

    model_config = {"from_attributes": True}


class BreederListingCreateRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    price: Decimal = Field(..., ge=0)
    price_negotiable: bool = False
    available_count: int = Field(1, ge=1)
    expected_date: date | None = None
    includes: list[str] = []
    pricing_tier: str = "free"
    pet_id: UUID | None = None
    new_pet: PetCreateRequest | None = None

    @model_validator(mode="after")
    def check_pet_source(self) -> "BreederListingCreateRequest":
        if self.pet_id and self.new_pet:
            raise ValueError("Provide either pet_id or new_pet, not both")
        return self


class BreederListingUpdateRequest(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=200)
    price: Decimal | None = Field(None, ge=0)
    price_negotiable: bool | None = None
    available_count: int | None = Field(None, ge=1)
    expected_date: date | None = None
    includes: list[str] | None = None


BreederApplicationResponse = APIResponse[BreederApplicationModel]
BreederProfileResponse = APIResponse[BreederProfileModel]
BreederListingResponse = APIResponse[BreederListingModel]
BreederListingListResponse = APIResponse[list[BreederListingModel]]
BreederListingPageResponse = APIResponse[Paginated[BreederListingModel]]

"""Adoption listing API schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from pawmarket.api.core.messages import APIResponse, Paginated
from pawmarket.api.core.models.pets import PetCreateRequest, PetModel, PetUpdateRequest


class AdoptionListingModel(BaseModel):
    id: UUID
    title: str
    slug: str
    adoption_fee: Decimal | None = None
    fee_includes: str | None = None
    adopter_requirements: str | None = None
    home_check_required: bool
    pricing_tier: str
    status: str
    rejection_reason: str | None = None
    is_featured: bool
    view_count: int
    inquiry_count: int
    published_at: datetime | None = None
    adopted_at: datetime | None = None
    created_at: datetime
    pet: PetModel

    model_config = {"from_attributes": True}


class AdoptionListingCreateRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    city_id: UUID
    adoption_fee: Decimal | None = Field(None, ge=0)
    fee_includes: str | None = None
    adopter_requirements: str | None = None
    home_check_required: bool = False
    pricing_tier: str = "free"
    pet: PetCreateRequest


class AdoptionListingUpdateRequest(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=200)
    adoption_fee: Decimal | None = Field(None, ge=0)
    fee_includes: str | None = None
    adopter_requirements: str | None = None
    home_check_required: bool | None = None
    submit_for_review: bool = False
    pet: PetUpdateRequest | None = None


class ListingStatusModel(BaseModel):
    id: UUID
    status: str
    adopted_at: datetime | None = None

    model_config = {"from_attributes": True}


class OwnerContactModel(BaseModel):
    phone: str | None = None
    phone_verified: bool
    email: str
    preferred_channel: str

    model_config = {"from_attributes": True}


class DashboardStatsModel(BaseModel):
    active_listings: int
    total_listings: int
    total_views: int
    inquiries: int


AdoptionListingResponse = APIResponse[AdoptionListingModel]
AdoptionListingPageResponse = APIResponse[Paginated[AdoptionListingModel]]
ListingStatusResponse = APIResponse[ListingStatusModel]
OwnerContactResponse = APIResponse[OwnerContactModel]
DashboardStatsResponse = APIResponse[DashboardStatsModel]

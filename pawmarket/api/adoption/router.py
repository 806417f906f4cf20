"""Adoption listing endpoints for owners, plus the public catalogue."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from pawmarket.api.adoption.schemas import (
    AdoptionListingCreateRequest,
    AdoptionListingModel,
    AdoptionListingPageResponse,
    AdoptionListingResponse,
    AdoptionListingUpdateRequest,
    DashboardStatsModel,
    DashboardStatsResponse,
    ListingStatusModel,
    ListingStatusResponse,
    OwnerContactModel,
    OwnerContactResponse,
)
from pawmarket.api.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from pawmarket.api.core.dependencies import AdoptionServiceDep, CurrentUserDep
from pawmarket.api.core.messages import APIResponse, MessageCode, Paginated

router = APIRouter(prefix="/adoption-listings", tags=["adoption"])
public_router = APIRouter(prefix="/public/adoption-listings", tags=["adoption"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.post(
    "",
    response_model=AdoptionListingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_listing(
    body: AdoptionListingCreateRequest,
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> AdoptionListingResponse:
    listing = await adoption.create_listing(current_user.id, body.model_dump())
    return APIResponse.success(
        message_code=MessageCode.LISTING_CREATED,
        data=AdoptionListingModel.model_validate(listing),
    )


@router.get("/my-listings", response_model=AdoptionListingPageResponse)
async def list_my_listings(
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
) -> AdoptionListingPageResponse:
    items, total = await adoption.list_my_listings(
        current_user.id, status=status, page=page, limit=limit
    )
    return APIResponse.success(
        data=Paginated.build(
            [AdoptionListingModel.model_validate(item) for item in items],
            total,
            page,
            limit,
        )
    )


@router.get("/{listing_id}", response_model=AdoptionListingResponse)
async def get_listing(
    listing_id: UUID,
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> AdoptionListingResponse:
    listing = await adoption.get_my_listing(current_user.id, listing_id)
    return APIResponse.success(data=AdoptionListingModel.model_validate(listing))


@router.put("/{listing_id}", response_model=AdoptionListingResponse)
async def update_listing(
    listing_id: UUID,
    body: AdoptionListingUpdateRequest,
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> AdoptionListingResponse:
    listing = await adoption.update_listing(
        current_user.id, listing_id, body.model_dump(exclude_unset=True)
    )
    return APIResponse.success(
        message_code=MessageCode.LISTING_UPDATED,
        data=AdoptionListingModel.model_validate(listing),
    )


@router.post("/{listing_id}/submit", response_model=ListingStatusResponse)
async def submit_listing(
    listing_id: UUID,
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> ListingStatusResponse:
    listing = await adoption.submit_listing(current_user.id, listing_id)
    return APIResponse.success(
        message_code=MessageCode.LISTING_SUBMITTED,
        data=ListingStatusModel.model_validate(listing),
    )


@router.post("/{listing_id}/mark-adopted", response_model=ListingStatusResponse)
async def mark_adopted(
    listing_id: UUID,
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> ListingStatusResponse:
    listing = await adoption.mark_adopted(current_user.id, listing_id)
    return APIResponse.success(
        message_code=MessageCode.LISTING_ADOPTED,
        data=ListingStatusModel.model_validate(listing),
    )


@router.get("/{slug}/contact", response_model=OwnerContactResponse)
async def get_owner_contact(
    slug: str,
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> OwnerContactResponse:
    """Owner contact details; login required."""
    contact = await adoption.get_owner_contact(slug)
    return APIResponse.success(
        message_code=MessageCode.CONTACT_REVEALED,
        data=OwnerContactModel.model_validate(contact),
    )


@public_router.get("", response_model=AdoptionListingPageResponse)
async def list_public_listings(
    adoption: AdoptionServiceDep,
    pet_type: str | None = None,
    breed: str | None = None,
    city: str | None = None,
    gender: str | None = Query(None, pattern="^(male|female)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> AdoptionListingPageResponse:
    items, total = await adoption.list_public_listings(
        pet_type=pet_type, breed=breed, city=city, gender=gender, page=page, limit=limit
    )
    return APIResponse.success(
        data=Paginated.build(
            [AdoptionListingModel.model_validate(item) for item in items],
            total,
            page,
            limit,
        )
    )


@public_router.get("/{slug}", response_model=AdoptionListingResponse)
async def get_public_listing(
    slug: str,
    adoption: AdoptionServiceDep,
) -> AdoptionListingResponse:
    listing = await adoption.get_public_listing(slug)
    return APIResponse.success(data=AdoptionListingModel.model_validate(listing))


@dashboard_router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    current_user: CurrentUserDep,
    adoption: AdoptionServiceDep,
) -> DashboardStatsResponse:
    stats = await adoption.dashboard_stats(current_user.id)
    return APIResponse.success(data=DashboardStatsModel(**stats))

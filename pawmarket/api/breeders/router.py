"""Breeder onboarding, profile and listing endpoints."""

from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from pawmarket.api.breeders.schemas import (
    BreederApplicationModel,
    BreederApplicationRequest,
    BreederApplicationResponse,
    BreederListingCreateRequest,
    BreederListingListResponse,
    BreederListingModel,
    BreederListingPageResponse,
    BreederListingResponse,
    BreederListingUpdateRequest,
    BreederProfileModel,
    BreederProfileResponse,
    BreederProfileUpdateRequest,
)
from pawmarket.api.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from pawmarket.api.core.dependencies import (
    BreederListingServiceDep,
    BreederProfileServiceDep,
    BreederWorkflowServiceDep,
    CurrentUserDep,
    OptionalUserDep,
)
from pawmarket.api.core.messages import APIResponse, MessageCode, Paginated
from pawmarket.database.models import BreederProfile, User
from pawmarket.modules.breeder.listings import ListingFilter

router = APIRouter(prefix="/breeders", tags=["breeders"])


def _public_profile(profile: BreederProfile, viewer: User | None) -> BreederProfileModel:
    model = BreederProfileModel.model_validate(profile)
    return model if viewer else model.without_contact()


@router.post(
    "/apply",
    response_model=BreederApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply(
    body: BreederApplicationRequest,
    current_user: CurrentUserDep,
    workflow: BreederWorkflowServiceDep,
) -> BreederApplicationResponse:
    application = await workflow.submit_application(current_user.id, body.model_dump())
    return APIResponse.success(
        message_code=MessageCode.APPLICATION_SUBMITTED,
        data=BreederApplicationModel.model_validate(application),
    )


@router.get("/application", response_model=BreederApplicationResponse)
async def get_my_application(
    current_user: CurrentUserDep,
    workflow: BreederWorkflowServiceDep,
) -> BreederApplicationResponse:
    application = await workflow.get_my_application(current_user.id)
    return APIResponse.success(data=BreederApplicationModel.model_validate(application))


@router.get("/me", response_model=BreederProfileResponse)
async def get_my_profile(
    current_user: CurrentUserDep,
    profiles: BreederProfileServiceDep,
) -> BreederProfileResponse:
    profile = await profiles.get_my_profile(current_user.id)
    return APIResponse.success(data=BreederProfileModel.model_validate(profile))


@router.put("/me", response_model=BreederProfileResponse)
async def update_my_profile(
    body: BreederProfileUpdateRequest,
    current_user: CurrentUserDep,
    profiles: BreederProfileServiceDep,
) -> BreederProfileResponse:
    profile = await profiles.update_my_profile(
        current_user.id, body.model_dump(exclude_unset=True)
    )
    return APIResponse.success(
        message_code=MessageCode.UPDATED,
        data=BreederProfileModel.model_validate(profile),
    )


@router.get("/listings", response_model=BreederListingListResponse)
async def list_my_listings(
    current_user: CurrentUserDep,
    listings: BreederListingServiceDep,
) -> BreederListingListResponse:
    items = await listings.list_my_listings(current_user.id)
    return APIResponse.success(
        data=[BreederListingModel.model_validate(item) for item in items]
    )


@router.post(
    "/listings",
    response_model=BreederListingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_listing(
    body: BreederListingCreateRequest,
    current_user: CurrentUserDep,
    listings: BreederListingServiceDep,
) -> BreederListingResponse:
    listing = await listings.create_listing(current_user.id, body.model_dump())
    return APIResponse.success(
        message_code=MessageCode.LISTING_CREATED,
        data=BreederListingModel.model_validate(listing),
    )


@router.put("/listings/{listing_id}", response_model=BreederListingResponse)
async def update_listing(
    listing_id: UUID,
    body: BreederListingUpdateRequest,
    current_user: CurrentUserDep,
    listings: BreederListingServiceDep,
) -> BreederListingResponse:
    listing = await listings.update_listing(
        current_user.id, listing_id, body.model_dump(exclude_unset=True)
    )
    return APIResponse.success(
        message_code=MessageCode.LISTING_UPDATED,
        data=BreederListingModel.model_validate(listing),
    )


@router.delete("/listings/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(
    listing_id: UUID,
    current_user: CurrentUserDep,
    listings: BreederListingServiceDep,
) -> Response:
    await listings.delete_listing(current_user.id, listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/public/{profile_id}", response_model=BreederProfileResponse)
async def get_public_profile(
    profile_id: UUID,
    viewer: OptionalUserDep,
    profiles: BreederProfileServiceDep,
) -> BreederProfileResponse:
    profile = await profiles.get_profile_by_id(profile_id)
    return APIResponse.success(data=_public_profile(profile, viewer))


@router.get("/public/slug/{slug}", response_model=BreederProfileResponse)
async def get_public_profile_by_slug(
    slug: str,
    viewer: OptionalUserDep,
    profiles: BreederProfileServiceDep,
) -> BreederProfileResponse:
    profile = await profiles.get_profile_by_slug(slug)
    return APIResponse.success(data=_public_profile(profile, viewer))


@router.get("/public/{profile_id}/listings", response_model=BreederListingListResponse)
async def get_public_profile_listings(
    profile_id: UUID,
    listings: BreederListingServiceDep,
) -> BreederListingListResponse:
    items = await listings.list_public_listings(profile_id)
    return APIResponse.success(
        data=[BreederListingModel.model_validate(item) for item in items]
    )


@router.get("/listings/search", response_model=BreederListingPageResponse)
async def search_listings(
    listings: BreederListingServiceDep,
    pet_type: str | None = None,
    breed_id: UUID | None = None,
    city_id: UUID | None = None,
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> BreederListingPageResponse:
    filters = ListingFilter(
        pet_type=pet_type,
        breed_id=breed_id,
        city_id=city_id,
        min_price=min_price,
        max_price=max_price,
        page=page,
        page_size=page_size,
    )
    items, total = await listings.search_listings(filters)
    return APIResponse.success(
        data=Paginated.build(
            [BreederListingModel.model_validate(item) for item in items],
            total,
            page,
            page_size,
        )
    )


@router.get("/listings/{slug}", response_model=BreederListingResponse)
async def get_listing_by_slug(
    slug: str,
    listings: BreederListingServiceDep,
) -> BreederListingResponse:
    listing = await listings.get_listing_by_slug(slug)
    return APIResponse.success(data=BreederListingModel.model_validate(listing))

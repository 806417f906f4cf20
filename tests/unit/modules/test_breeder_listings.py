from decimal import Decimal

import pytest
import pytest_asyncio

from pawmarket.api.core.exceptions.base import NotAuthorizedError
from pawmarket.api.core.messages import MessageCode
from pawmarket.database.models import BreederListingStatus
from pawmarket.modules.breeder.listings import BreederListingService, ListingFilter
from tests.factories import (
    BreederListingFactory,
    BreederProfileFactory,
    PetFactory,
    PetTypeFactory,
    UserFactory,
)


@pytest_asyncio.fixture
async def breeder_profile(db_session, test_user, test_city):
    return await BreederProfileFactory.create_async(
        db_session, user_id=test_user.id, city=test_city
    )


async def make_listing(db_session, profile, pet_type, breed=None, **kwargs):
    pet = await PetFactory.create_async(
        db_session,
        owner_id=profile.user_id,
        pet_type=pet_type,
        breed=breed,
        city=profile.city,
    )
    return await BreederListingFactory.create_async(
        db_session, breeder_profile=profile, pet=pet, **kwargs
    )


@pytest.mark.asyncio
async def test_search_price_bounds_are_inclusive(db_session, breeder_profile, test_pet_type):
    for price in ("5000", "15000", "30000", "45000"):
        await make_listing(db_session, breeder_profile, test_pet_type, price=Decimal(price))

    items, total = await BreederListingService(db_session).search_listings(
        ListingFilter(min_price=Decimal("15000"), max_price=Decimal("30000"))
    )

    assert total == 2
    assert sorted(item.price for item in items) == [Decimal("15000"), Decimal("30000")]


@pytest.mark.asyncio
async def test_search_lists_featured_first_then_newest(
    db_session, breeder_profile, test_pet_type
):
    older = await make_listing(db_session, breeder_profile, test_pet_type)
    featured = await make_listing(db_session, breeder_profile, test_pet_type, is_featured=True)
    newer = await make_listing(db_session, breeder_profile, test_pet_type)

    items, _ = await BreederListingService(db_session).search_listings(ListingFilter())

    assert [item.id for item in items] == [featured.id, newer.id, older.id]


@pytest.mark.asyncio
async def test_search_only_returns_live_listings(db_session, breeder_profile, test_pet_type):
    live = await make_listing(db_session, breeder_profile, test_pet_type)
    await make_listing(
        db_session,
        breeder_profile,
        test_pet_type,
        status=BreederListingStatus.PENDING_PAYMENT,
    )
    await make_listing(db_session, breeder_profile, test_pet_type, is_deleted=True)

    items, total = await BreederListingService(db_session).search_listings(ListingFilter())

    assert total == 1
    assert items[0].id == live.id


@pytest.mark.asyncio
async def test_search_filters_by_pet_type_breed_and_city(
    db_session, breeder_profile, test_pet_type, test_breed
):
    cat = await PetTypeFactory.create_async(db_session, name="Cat", slug="cat")
    labrador = await make_listing(db_session, breeder_profile, test_pet_type, breed=test_breed)
    await make_listing(db_session, breeder_profile, cat)
    service = BreederListingService(db_session)

    by_type, _ = await service.search_listings(ListingFilter(pet_type="Dog"))
    by_breed, _ = await service.search_listings(ListingFilter(breed_id=test_breed.id))
    by_city, city_total = await service.search_listings(
        ListingFilter(city_id=breeder_profile.city_id)
    )

    assert [item.id for item in by_type] == [labrador.id]
    assert [item.id for item in by_breed] == [labrador.id]
    assert city_total == 2


@pytest.mark.asyncio
async def test_search_paginates(db_session, breeder_profile, test_pet_type):
    for _ in range(5):
        await make_listing(db_session, breeder_profile, test_pet_type)

    items, total = await BreederListingService(db_session).search_listings(
        ListingFilter(page=2, page_size=2)
    )

    assert total == 5
    assert len(items) == 2


@pytest.mark.asyncio
async def test_first_free_listing_goes_live_and_second_waits_for_payment(
    db_session, breeder_profile, test_user, test_pet_type, test_breed
):
    service = BreederListingService(db_session)
    data = {
        "title": "Labrador puppies",
        "price": Decimal("25000"),
        "new_pet": {
            "pet_type_id": test_pet_type.id,
            "breed_id": test_breed.id,
            "name": "Bruno",
            "gender": "male",
        },
    }

    first = await service.create_listing(test_user.id, data)
    second = await service.create_listing(test_user.id, data)

    assert first.status == BreederListingStatus.ACTIVE
    assert first.published_at is not None
    assert first.slug.startswith("labrador-in-bangalore-")
    assert second.status == BreederListingStatus.PENDING_PAYMENT
    await db_session.refresh(breeder_profile)
    assert breeder_profile.active_listings_count == 1


@pytest.mark.asyncio
async def test_listing_requires_breeder_profile(db_session, test_pet_type):
    user = await UserFactory.create_async(db_session)

    with pytest.raises(NotAuthorizedError) as exc_info:
        await BreederListingService(db_session).create_listing(
            user.id,
            {"title": "Kittens", "price": Decimal("100"), "new_pet": {"name": "Tom"}},
        )

    assert exc_info.value.message_code == MessageCode.BREEDER_PROFILE_REQUIRED


@pytest.mark.asyncio
async def test_only_owner_can_delete_listing(db_session, breeder_profile, test_pet_type):
    listing = await make_listing(db_session, breeder_profile, test_pet_type)
    stranger = await UserFactory.create_async(db_session)
    service = BreederListingService(db_session)

    with pytest.raises(NotAuthorizedError):
        await service.delete_listing(stranger.id, listing.id)

    await service.delete_listing(breeder_profile.user_id, listing.id)
    await db_session.refresh(listing)
    assert listing.is_deleted is True

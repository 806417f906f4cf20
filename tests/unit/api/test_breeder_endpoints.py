"""Breeder application, profile and listing endpoint tests."""

from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi import status
from httpx import AsyncClient

from tests.factories import (
    BreederListingFactory,
    BreederProfileFactory,
    PetFactory,
    UserFactory,
)


@pytest_asyncio.fixture
async def breeder(db_session, test_city, test_breed):
    user = await UserFactory.create_async(db_session, is_breeder=True)
    profile = await BreederProfileFactory.create_async(
        db_session,
        user_id=user.id,
        city=test_city,
        slug="happy-paws-kennel",
        business_phone="9123456780",
        breeds=[test_breed],
    )
    return user, profile


def application_payload(city_id, breed_ids=()) -> dict:
    return {
        "business_name": "Happy Paws Kennel",
        "business_phone": "9876543210",
        "business_email": "kennel@mypaws.in",
        "city_id": str(city_id),
        "breed_ids": [str(b) for b in breed_ids],
        "agree_to_ethical_standards": True,
    }


@pytest.mark.asyncio
async def test_apply_then_duplicate(authorized_client: AsyncClient, test_city, test_breed):
    payload = application_payload(test_city.id, [test_breed.id])

    created = await authorized_client.post("/api/v1/breeders/apply", json=payload)
    duplicate = await authorized_client.post("/api/v1/breeders/apply", json=payload)
    mine = await authorized_client.get("/api/v1/breeders/application")

    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["message_code"] == "application_submitted"
    assert created.json()["data"]["status"] == "pending"
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert duplicate.json()["message_code"] == "duplicate_application"
    assert mine.json()["data"]["id"] == created.json()["data"]["id"]
    assert len(mine.json()["data"]["events"]) == 1


@pytest.mark.asyncio
async def test_apply_with_unknown_city(authorized_client: AsyncClient):
    from uuid import uuid4

    response = await authorized_client.post(
        "/api/v1/breeders/apply", json=application_payload(uuid4())
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message_code"] == "city_not_found"


@pytest.mark.asyncio
async def test_apply_requires_login(public_client: AsyncClient, test_city):
    response = await public_client.post(
        "/api/v1/breeders/apply", json=application_payload(test_city.id)
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_my_profile_missing(authorized_client: AsyncClient):
    response = await authorized_client.get("/api/v1/breeders/me")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message_code"] == "breeder_profile_not_found"


@pytest.mark.asyncio
async def test_public_profile_hides_contact_from_anonymous(
    public_client: AsyncClient, authorized_client: AsyncClient, breeder
):
    _, profile = breeder

    anonymous = await public_client.get("/api/v1/breeders/public/slug/happy-paws-kennel")
    signed_in = await authorized_client.get(f"/api/v1/breeders/public/{profile.id}")

    assert anonymous.status_code == status.HTTP_200_OK
    assert anonymous.json()["data"]["business_phone"] is None
    assert anonymous.json()["data"]["business_email"] is None
    assert anonymous.json()["data"]["breeds"][0]["slug"] == "labrador"
    assert signed_in.json()["data"]["business_phone"] == "9123456780"


@pytest.mark.asyncio
async def test_breeder_creates_updates_and_deletes_listing(
    breeder, client_factory, test_pet_type, test_breed
):
    user, _ = breeder

    async with client_factory(user) as client:
        created = await client.post(
            "/api/v1/breeders/listings",
            json={
                "title": "Champion line Labrador puppies",
                "price": "35000",
                "new_pet": {
                    "pet_type_id": str(test_pet_type.id),
                    "breed_id": str(test_breed.id),
                    "name": "Litter A",
                },
            },
        )
        listing_id = created.json()["data"]["id"]
        updated = await client.put(
            f"/api/v1/breeders/listings/{listing_id}",
            json={"price": "32000", "price_negotiable": True},
        )
        mine = await client.get("/api/v1/breeders/listings")
        deleted = await client.delete(f"/api/v1/breeders/listings/{listing_id}")
        after = await client.get("/api/v1/breeders/listings")

    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["data"]["status"] == "active"
    assert created.json()["data"]["slug"].startswith("labrador-in-bangalore-")
    assert Decimal(updated.json()["data"]["price"]) == Decimal("32000")
    assert updated.json()["data"]["price_negotiable"] is True
    assert [item["id"] for item in mine.json()["data"]] == [listing_id]
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert after.json()["data"] == []


@pytest.mark.asyncio
async def test_non_breeder_cannot_create_listing(
    authorized_client: AsyncClient, test_pet_type
):
    response = await authorized_client.post(
        "/api/v1/breeders/listings",
        json={
            "title": "Puppies",
            "price": "1000",
            "new_pet": {"pet_type_id": str(test_pet_type.id), "name": "Pup"},
        },
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message_code"] == "breeder_profile_required"


@pytest.mark.asyncio
async def test_search_and_listing_detail(
    public_client: AsyncClient, db_session, breeder, test_pet_type
):
    user, profile = breeder
    listings = []
    for price in ("8000", "20000", "50000"):
        pet = await PetFactory.create_async(
            db_session, owner_id=user.id, pet_type=test_pet_type, city=profile.city
        )
        listings.append(
            await BreederListingFactory.create_async(
                db_session, breeder_profile=profile, pet=pet, price=Decimal(price)
            )
        )

    search = await public_client.get(
        "/api/v1/breeders/listings/search",
        params={"min_price": "8000", "max_price": "20000", "pet_type": "dog"},
    )
    detail = await public_client.get(f"/api/v1/breeders/listings/{listings[2].slug}")
    by_profile = await public_client.get(f"/api/v1/breeders/public/{profile.id}/listings")

    assert search.status_code == status.HTTP_200_OK
    page = search.json()["data"]
    assert page["pagination"]["total"] == 2
    assert {Decimal(item["price"]) for item in page["items"]} == {
        Decimal("8000"),
        Decimal("20000"),
    }
    assert detail.status_code == status.HTTP_200_OK
    assert detail.json()["data"]["id"] == str(listings[2].id)
    assert len(by_profile.json()["data"]) == 3


@pytest.mark.asyncio
async def test_unknown_listing_slug(public_client: AsyncClient):
    response = await public_client.get("/api/v1/breeders/listings/no-such-listing")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message_code"] == "listing_not_found"

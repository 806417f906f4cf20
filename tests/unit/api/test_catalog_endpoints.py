import pytest
from fastapi import status
from httpx import AsyncClient

from tests.factories import BreedFactory, PetTypeFactory


@pytest.mark.asyncio
async def test_list_pet_types(public_client: AsyncClient, test_pet_type):
    response = await public_client.get("/api/v1/public/pet-types")

    assert response.status_code == status.HTTP_200_OK
    assert [item["slug"] for item in response.json()["data"]] == ["dog"]


@pytest.mark.asyncio
async def test_breeds_filtered_by_pet_type(
    public_client: AsyncClient, db_session, test_breed
):
    cat = await PetTypeFactory.create_async(db_session, name="Cat", slug="cat")
    await BreedFactory.create_async(db_session, pet_type=cat, name="Persian", slug="persian")

    dogs = await public_client.get("/api/v1/public/breeds", params={"pet_type": "dog"})
    everything = await public_client.get("/api/v1/public/breeds")
    single = await public_client.get("/api/v1/public/breeds/labrador")

    assert [b["slug"] for b in dogs.json()["data"]] == ["labrador"]
    assert len(everything.json()["data"]) == 2
    assert single.json()["data"]["pet_type"]["slug"] == "dog"


@pytest.mark.asyncio
async def test_city_lookup(public_client: AsyncClient, test_city):
    found = await public_client.get("/api/v1/public/cities/bangalore")
    missing = await public_client.get("/api/v1/public/cities/atlantis")

    assert found.status_code == status.HTTP_200_OK
    assert found.json()["data"]["state"]["name"] == "Karnataka"
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json()["message_code"] == "city_not_found"

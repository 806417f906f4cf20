"""Factory for Pet models. ``owner_id`` must be supplied."""

import factory
from pawmarket.database.models import Pet
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory
from .catalog import CityFactory, PetTypeFactory


class PetFactory(AsyncSQLAlchemyModelFactory[Pet]):
    class Meta:
        model = Pet

    id = UUIDFactory()
    pet_type = factory.SubFactory(PetTypeFactory)
    breed = None
    city = factory.SubFactory(CityFactory)
    name = factory.Faker("first_name")
    slug = factory.Sequence(lambda n: f"pet-{n}")
    gender = "male"
    age_years = 1
    is_vaccinated = True

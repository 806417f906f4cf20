"""Factories for catalog reference data."""

import factory
from pawmarket.database.models import Breed, City, PetType, State
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory


class PetTypeFactory(AsyncSQLAlchemyModelFactory[PetType]):
    class Meta:
        model = PetType

    id = UUIDFactory()
    name = "Dog"
    slug = factory.Sequence(lambda n: f"dog-{n}")
    plural_name = "Dogs"
    is_active = True
    display_order = 0


class BreedFactory(AsyncSQLAlchemyModelFactory[Breed]):
    class Meta:
        model = Breed

    id = UUIDFactory()
    pet_type = factory.SubFactory(PetTypeFactory)
    name = factory.Sequence(lambda n: f"Labrador {n}")
    slug = factory.Sequence(lambda n: f"labrador-{n}")
    size_category = "large"
    is_active = True
    is_popular = False
    display_order = 0


class StateFactory(AsyncSQLAlchemyModelFactory[State]):
    class Meta:
        model = State

    id = UUIDFactory()
    name = "Karnataka"
    slug = factory.Sequence(lambda n: f"karnataka-{n}")


class CityFactory(AsyncSQLAlchemyModelFactory[City]):
    class Meta:
        model = City

    id = UUIDFactory()
    state = factory.SubFactory(StateFactory)
    name = "Bangalore"
    slug = factory.Sequence(lambda n: f"bangalore-{n}")
    is_active = True
    is_featured = False

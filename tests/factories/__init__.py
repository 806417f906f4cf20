"""Test factories for PawMarket models."""

from .base import AsyncSQLAlchemyModelFactory
from .users import UserFactory
from .catalog import BreedFactory, CityFactory, PetTypeFactory, StateFactory
from .pets import PetFactory
from .breeders import (
    BreederApplicationFactory,
    BreederListingFactory,
    BreederProfileFactory,
)
from .adoption import AdoptionListingFactory, FavoriteFactory
from .payments import PaymentFactory

__all__ = [
    "AsyncSQLAlchemyModelFactory",
    "UserFactory",
    "PetTypeFactory",
    "BreedFactory",
    "StateFactory",
    "CityFactory",
    "PetFactory",
    "BreederApplicationFactory",
    "BreederProfileFactory",
    "BreederListingFactory",
    "AdoptionListingFactory",
    "FavoriteFactory",
    "PaymentFactory",
]

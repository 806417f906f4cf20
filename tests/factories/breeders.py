"""Factories for breeder applications, profiles and listings."""

from datetime import datetime, timezone
from decimal import Decimal

import factory
from pawmarket.database.models import (
    ApplicationStatus,
    BreederApplication,
    BreederListing,
    BreederListingStatus,
    BreederProfile,
)
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory
from .catalog import CityFactory


class BreederApplicationFactory(AsyncSQLAlchemyModelFactory[BreederApplication]):
    """``user_id`` must be supplied."""

    class Meta:
        model = BreederApplication

    id = UUIDFactory()
    business_name = factory.Faker("company")
    business_phone = "9876543210"
    business_email = factory.Sequence(lambda n: f"kennel{n}@mypaws.in")
    city = factory.SubFactory(CityFactory)
    address = "12 MG Road"
    pincode = "560001"
    breed_ids = factory.LazyFunction(list)
    document_urls = factory.LazyFunction(dict)
    agree_to_ethical_standards = True
    status = ApplicationStatus.PENDING
    submitted_at = factory.LazyFunction(lambda: datetime.now(timezone.utc))


class BreederProfileFactory(AsyncSQLAlchemyModelFactory[BreederProfile]):
    """``user_id`` must be supplied."""

    class Meta:
        model = BreederProfile

    id = UUIDFactory()
    business_name = factory.Faker("company")
    slug = factory.Sequence(lambda n: f"kennel-{n}")
    business_phone = "9876543210"
    business_email = factory.Sequence(lambda n: f"breeder{n}@mypaws.in")
    address = "12 MG Road"
    city = factory.SubFactory(CityFactory)
    gallery_urls = factory.LazyFunction(list)
    is_verified = False
    active_listings_count = 0


class BreederListingFactory(AsyncSQLAlchemyModelFactory[BreederListing]):
    """``breeder_profile`` and ``pet`` must be supplied."""

    class Meta:
        model = BreederListing

    id = UUIDFactory()
    title = factory.Faker("sentence", nb_words=4)
    slug = factory.Sequence(lambda n: f"labrador-in-bangalore-{n:08d}")
    price = Decimal("15000")
    available_count = 1
    includes = factory.LazyFunction(list)
    pricing_tier = "free"
    status = BreederListingStatus.ACTIVE
    is_featured = False
    is_deleted = False

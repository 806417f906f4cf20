from .adoption import AdoptionListing, AdoptionListingStatus, Favorite
from .base import Base
from .breeders import (
    ApplicationStatus,
    BreederApplication,
    BreederApplicationEvent,
    BreederListing,
    BreederListingStatus,
    BreederProfile,
    breeder_profile_breeds,
)
from .catalog import Breed, City, PetType, State
from .payments import (
    ListingType,
    ListingUsage,
    Payment,
    PaymentStatus,
    UsageStatus,
)
from .pets import Pet, PetImage
from .users import BLOCKED_STATUSES, User, UserStatus

__all__ = [
    "AdoptionListing",
    "AdoptionListingStatus",
    "ApplicationStatus",
    "Base",
    "BLOCKED_STATUSES",
    "Breed",
    "BreederApplication",
    "BreederApplicationEvent",
    "BreederListing",
    "BreederListingStatus",
    "BreederProfile",
    "City",
    "Favorite",
    "ListingType",
    "ListingUsage",
    "Payment",
    "PaymentStatus",
    "Pet",
    "PetImage",
    "PetType",
    "State",
    "UsageStatus",
    "User",
    "UserStatus",
    "breeder_profile_breeds",
]

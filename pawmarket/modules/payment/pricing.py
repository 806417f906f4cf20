"""Listing fee tiers, in rupees (GST inclusive)."""

from decimal import Decimal

from pawmarket.api.core.exceptions.base import InputValidationError
from pawmarket.api.core.messages import MessageCode
from pawmarket.database.models import ListingType

FREE_TIER = "free"

PRICING_TIERS: dict[ListingType, dict[str, Decimal]] = {
    ListingType.ADOPTION: {
        "free": Decimal("0"),
        "standard": Decimal("199"),
        "featured": Decimal("399"),
    },
    ListingType.BREEDER: {
        "free": Decimal("0"),
        "standard": Decimal("499"),
        "premium": Decimal("999"),
        "bulk_5": Decimal("1999"),
    },
}

# Tiers that put the listing in the featured slot
FEATURED_TIERS: dict[ListingType, set[str]] = {
    ListingType.ADOPTION: {"featured"},
    ListingType.BREEDER: {"premium", "bulk_5"},
}

TAX_RATE = Decimal("18")
LISTING_VALIDITY_DAYS = 90
FEATURED_DAYS = 30


def get_tier_price(listing_type: ListingType | str, tier: str) -> Decimal:
    tiers = PRICING_TIERS.get(ListingType(listing_type), {})
    if tier not in tiers:
        raise InputValidationError(
            MessageCode.VALIDATION_ERROR,
            {"pricing_tier": tier, "allowed": sorted(tiers)},
            message=f"Unknown pricing tier '{tier}'",
        )
    return tiers[tier]


def split_tax(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Split a tax-inclusive amount into (subtotal, tax)."""
    subtotal = (amount / (1 + TAX_RATE / 100)).quantize(Decimal("0.01"))
    return subtotal, amount - subtotal


def is_featured_tier(listing_type: ListingType | str, tier: str) -> bool:
    return tier in FEATURED_TIERS.get(ListingType(listing_type), set())

"""Factory for Payment models."""

from decimal import Decimal

import factory
from pawmarket.database.models import ListingType, Payment, PaymentStatus
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory


class PaymentFactory(AsyncSQLAlchemyModelFactory[Payment]):
    """``user_id`` and ``listing_id`` must be supplied."""

    class Meta:
        model = Payment

    id = UUIDFactory()
    gateway = "razorpay"
    gateway_order_id = factory.Sequence(lambda n: f"order_test{n:06d}")
    amount = Decimal("199")
    currency = "INR"
    subtotal = Decimal("168.64")
    tax_rate = Decimal("18")
    tax_amount = Decimal("30.36")
    payment_type = "listing_fee"
    listing_type = ListingType.ADOPTION
    pricing_tier = "standard"
    receipt = factory.Sequence(lambda n: f"rcpt_{n:08d}")
    status = PaymentStatus.PENDING

"""Listing fee payments: order initiation, verification and activation."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select

from pawmarket.api.core.exceptions.base import (
    GatewayError,
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
    PaymentVerificationFailed,
)
from pawmarket.api.core.messages import MessageCode
from pawmarket.core.base import BaseService
from pawmarket.database.models import (
    AdoptionListing,
    AdoptionListingStatus,
    BreederListing,
    BreederListingStatus,
    BreederProfile,
    ListingType,
    ListingUsage,
    Payment,
    PaymentStatus,
    UsageStatus,
)
from pawmarket.modules.payment.gateway import PaymentGateway
from pawmarket.modules.payment.pricing import (
    FEATURED_DAYS,
    LISTING_VALIDITY_DAYS,
    TAX_RATE,
    get_tier_price,
    is_featured_tier,
    split_tax,
)
from pawmarket.utils.settings.payment import PaymentSettings

FREE_ACTIVATION = "free_activation"
ORDER_CREATED = "created"
PAID_BADGE = "Trusted"

Listing = AdoptionListing | BreederListing


@dataclass
class PaymentInitiation:
    status: str
    amount: Decimal
    currency: str
    payment_id: UUID | None = None
    order_id: str | None = None
    key_id: str | None = None


class PaymentService(BaseService):
    def __init__(self, db, gateway: PaymentGateway):
        super().__init__(db)
        self.gateway = gateway

    async def _get_listing(
        self, listing_type: ListingType, listing_id: UUID
    ) -> tuple[Listing | None, UUID | None]:
        """Return the listing and the id of the user who owns it."""
        if listing_type == ListingType.ADOPTION:
            listing = await self.db.get(AdoptionListing, listing_id)
            return listing, listing.user_id if listing else None

        listing = await self.db.get(BreederListing, listing_id)
        if not listing or listing.is_deleted:
            return None, None
        return listing, listing.breeder_profile.user_id

    async def _get_owned_listing(
        self, user_id: UUID, listing_type: ListingType, listing_id: UUID
    ) -> Listing:
        listing, owner_id = await self._get_listing(listing_type, listing_id)
        if not listing:
            raise NotFoundError(
                MessageCode.LISTING_NOT_FOUND, {"listing_id": str(listing_id)}
            )
        if owner_id != user_id:
            raise NotAuthorizedError(details={"listing_id": str(listing_id)})
        return listing

    async def _has_other_active_listing(
        self, user_id: UUID, listing_type: ListingType, listing_id: UUID
    ) -> bool:
        if listing_type == ListingType.ADOPTION:
            stmt = select(func.count(AdoptionListing.id)).where(
                AdoptionListing.user_id == user_id,
                AdoptionListing.status == AdoptionListingStatus.ACTIVE,
                AdoptionListing.id != listing_id,
            )
        else:
            stmt = (
                select(func.count(BreederListing.id))
                .join(BreederProfile, BreederListing.breeder_profile_id == BreederProfile.id)
                .where(
                    BreederProfile.user_id == user_id,
                    BreederListing.status == BreederListingStatus.ACTIVE,
                    BreederListing.is_deleted.is_(False),
                    BreederListing.id != listing_id,
                )
            )
        return bool(await self.db.scalar(stmt))

    async def _has_free_usage(self, user_id: UUID, listing_type: ListingType) -> bool:
        count = await self.db.scalar(
            select(func.count(ListingUsage.id)).where(
                ListingUsage.user_id == user_id,
                ListingUsage.listing_type == listing_type,
                ListingUsage.is_free_tier.is_(True),
                ListingUsage.status == UsageStatus.ACTIVE,
            )
        )
        return bool(count)

    async def _activate(
        self,
        listing_type: ListingType,
        listing: Listing,
        tier: str,
        payment: Payment | None,
        now: datetime,
    ) -> None:
        was_active = listing.status == "active"
        listing.status = "active"
        listing.pricing_tier = tier
        if listing.published_at is None:
            listing.published_at = now
        if is_featured_tier(listing_type, tier):
            listing.is_featured = True
            listing.featured_until = now + timedelta(days=FEATURED_DAYS)

        if listing_type == ListingType.ADOPTION:
            if payment is not None:
                listing.is_paid = True
                listing.payment_id = payment.id
            return

        profile = listing.breeder_profile
        if not was_active:
            profile.active_listings_count = (profile.active_listings_count or 0) + 1
        if payment is not None and not profile.is_verified:
            profile.is_verified = True
            profile.verified_at = now
            profile.verification_badge = PAID_BADGE
            self.logger.info("Breeder profile verified by payment", profile_id=str(profile.id))

    def _record_usage(
        self,
        user_id: UUID,
        listing_type: ListingType,
        listing_id: UUID,
        tier: str,
        payment: Payment | None,
        now: datetime,
    ) -> None:
        self.db.add(
            ListingUsage(
                user_id=user_id,
                listing_type=listing_type,
                listing_id=listing_id,
                pricing_tier=tier,
                is_free_tier=payment is None,
                payment_id=payment.id if payment else None,
                valid_from=now,
                valid_until=now + timedelta(days=LISTING_VALIDITY_DAYS),
                status=UsageStatus.ACTIVE,
            )
        )

    async def initiate(
        self,
        user_id: UUID,
        listing_type: ListingType,
        listing_id: UUID,
        tier: str,
    ) -> PaymentInitiation:
        """Start paying for a listing.

        Zero-fee tiers activate the listing directly when the user's free
        slot for that listing type is unused. Paid tiers store a pending
        payment and open a gateway order; on gateway failure the payment is
        marked failed and the listing is left as it was.
        """
        amount = get_tier_price(listing_type, tier)
        listing = await self._get_owned_listing(user_id, listing_type, listing_id)
        if listing.status in ("adopted", "sold"):
            raise InvalidStateError(details={"status": listing.status})

        currency = PaymentSettings().PAYMENT_CURRENCY
        now = datetime.now(timezone.utc)

        if amount == 0:
            if await self._has_other_active_listing(
                user_id, listing_type, listing_id
            ) or await self._has_free_usage(user_id, listing_type):
                raise InvalidStateError(MessageCode.FREE_SLOT_USED)

            await self._activate(listing_type, listing, tier, None, now)
            self._record_usage(user_id, listing_type, listing_id, tier, None, now)
            await self.db.commit()
            self.logger.info(
                "Listing activated on free tier",
                listing_type=listing_type.value,
                listing_id=str(listing_id),
            )
            return PaymentInitiation(
                status=FREE_ACTIVATION, amount=amount, currency=currency
            )

        subtotal, tax = split_tax(amount)
        payment = Payment(
            user_id=user_id,
            amount=amount,
            currency=currency,
            subtotal=subtotal,
            tax_rate=TAX_RATE,
            tax_amount=tax,
            payment_type="listing_fee",
            listing_type=listing_type,
            listing_id=listing_id,
            pricing_tier=tier,
            status=PaymentStatus.PENDING,
        )
        self.db.add(payment)
        await self.db.flush()
        payment.receipt = f"rcpt_{payment.id.hex[:8]}"
        await self.db.commit()

        try:
            order = await self.gateway.create_order(
                amount,
                currency,
                payment.receipt,
                notes={"payment_id": str(payment.id), "listing_id": str(listing_id)},
            )
        except GatewayError as e:
            payment.status = PaymentStatus.FAILED
            payment.failure_reason = e.reason
            await self.db.commit()
            self.logger.error(
                "Payment initiation failed",
                payment_id=str(payment.id),
                reason=e.reason,
            )
            raise

        payment.gateway_order_id = order.order_id
        await self.db.commit()
        self.logger.info(
            "Payment initiated",
            payment_id=str(payment.id),
            order_id=order.order_id,
            amount=str(amount),
        )
        return PaymentInitiation(
            status=ORDER_CREATED,
            amount=amount,
            currency=currency,
            payment_id=payment.id,
            order_id=order.order_id,
            key_id=order.key_id,
        )

    async def verify(
        self, user_id: UUID, order_id: str, payment_id: str, signature: str
    ) -> Payment:
        """Confirm a checkout and activate the paid listing.

        Verifying an already completed payment is a no-op.
        """
        result = await self.db.execute(
            select(Payment).where(Payment.gateway_order_id == order_id)
        )
        payment = result.scalar_one_or_none()
        if not payment:
            raise NotFoundError(MessageCode.PAYMENT_NOT_FOUND, {"order_id": order_id})
        if payment.user_id != user_id:
            raise NotAuthorizedError(details={"order_id": order_id})
        if payment.status == PaymentStatus.COMPLETED:
            return payment

        if not self.gateway.verify_signature(order_id, payment_id, signature):
            payment.status = PaymentStatus.FAILED
            payment.failure_reason = "Signature mismatch"
            await self.db.commit()
            self.logger.warning(
                "Payment signature mismatch",
                payment_id=str(payment.id),
                order_id=order_id,
            )
            raise PaymentVerificationFailed({"order_id": order_id})

        now = datetime.now(timezone.utc)
        payment.status = PaymentStatus.COMPLETED
        payment.gateway_payment_id = payment_id
        payment.gateway_signature = signature
        payment.paid_at = now
        payment.failure_reason = None

        listing_type = ListingType(payment.listing_type)
        listing, _ = await self._get_listing(listing_type, payment.listing_id)
        self._record_usage(
            user_id, listing_type, payment.listing_id, payment.pricing_tier, payment, now
        )
        if listing is not None:
            await self._activate(listing_type, listing, payment.pricing_tier, payment, now)
        else:
            self.logger.warning(
                "Paid listing no longer exists",
                payment_id=str(payment.id),
                listing_id=str(payment.listing_id),
            )

        await self.db.commit()
        self.logger.info(
            "Payment verified",
            payment_id=str(payment.id),
            listing_id=str(payment.listing_id),
        )
        return payment

    async def list_my_payments(self, user_id: UUID) -> list[Payment]:
        result = await self.db.execute(
            select(Payment)
            .where(Payment.user_id == user_id)
            .order_by(Payment.created_at.desc())
        )
        return list(result.scalars().all())

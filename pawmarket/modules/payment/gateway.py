"""Payment gateway capability and its Razorpay implementation."""

import asyncio
import hashlib
import hmac
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

import razorpay
import requests
from razorpay.errors import BadRequestError, ServerError
from razorpay.errors import GatewayError as RazorpaySDKGatewayError

from pawmarket.api.core.exceptions.base import GatewayError
from pawmarket.utils.logger import get_logger
from pawmarket.utils.settings.payment import PaymentSettings

logger = get_logger(__name__)

SDK_ERRORS = (
    BadRequestError,
    ServerError,
    RazorpaySDKGatewayError,
    requests.RequestException,
    KeyError,
)


@dataclass(frozen=True)
class GatewayOrder:
    order_id: str
    key_id: str
    amount: Decimal


class PaymentGateway(Protocol):
    async def create_order(
        self,
        amount: Decimal,
        currency: str,
        receipt: str,
        notes: dict[str, str] | None = None,
    ) -> GatewayOrder: ...

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool: ...


def to_minor_units(amount: Decimal) -> int:
    """Rupees to paise."""
    return int((Decimal(amount) * 100).to_integral_value())


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    return hmac.new(
        secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256
    ).hexdigest()


class RazorpayGateway:
    """Razorpay orders API.

    The SDK is synchronous, so order creation runs in a worker thread and is
    bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        timeout: float = 15.0,
        client: razorpay.Client | None = None,
    ):
        if not key_id or not key_secret:
            raise ValueError("Razorpay key id and key secret must be configured")
        self.key_id = key_id
        self._key_secret = key_secret
        self.timeout = timeout
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    @classmethod
    def from_settings(cls, settings: PaymentSettings | None = None) -> "RazorpayGateway":
        settings = settings or PaymentSettings()
        return cls(
            key_id=settings.RAZORPAY_KEY_ID,
            key_secret=settings.RAZORPAY_KEY_SECRET.get_secret_value(),
            timeout=settings.PAYMENT_GATEWAY_TIMEOUT,
        )

    async def create_order(
        self,
        amount: Decimal,
        currency: str,
        receipt: str,
        notes: dict[str, str] | None = None,
    ) -> GatewayOrder:
        payload = {
            "amount": to_minor_units(amount),
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
        }
        if notes:
            payload["notes"] = notes

        try:
            order = await asyncio.wait_for(
                asyncio.to_thread(self.client.order.create, data=payload),
                timeout=self.timeout,
            )
            order_id = order["id"]
        except asyncio.TimeoutError as e:
            logger.error("Razorpay order creation timed out", receipt=receipt)
            raise GatewayError(f"Gateway timed out after {self.timeout}s") from e
        except SDK_ERRORS as e:
            logger.error(
                "Razorpay order creation failed",
                receipt=receipt,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GatewayError(str(e) or type(e).__name__) from e

        logger.info(
            "Razorpay order created",
            order_id=order_id,
            receipt=receipt,
            amount=payload["amount"],
        )
        return GatewayOrder(order_id=order_id, key_id=self.key_id, amount=amount)

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        expected = compute_signature(self._key_secret, order_id, payment_id)
        return hmac.compare_digest(
            expected.encode(), (signature or "").lower().encode()
        )

"""Payment API schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from pawmarket.api.core.messages import APIResponse
from pawmarket.database.models import ListingType


class PaymentInitiateRequest(BaseModel):
    listing_type: ListingType
    listing_id: UUID
    pricing_tier: str = Field(..., min_length=1, max_length=20)


class PaymentVerifyRequest(BaseModel):
    order_id: str = Field(..., min_length=1)
    payment_id: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)


class PaymentInitiationModel(BaseModel):
    status: str
    amount: Decimal
    amount_minor: int
    currency: str
    payment_id: UUID | None = None
    order_id: str | None = None
    key_id: str | None = None


class PaymentModel(BaseModel):
    id: UUID
    gateway_order_id: str | None = None
    gateway_payment_id: str | None = None
    amount: Decimal
    currency: str
    subtotal: Decimal
    tax_amount: Decimal
    listing_type: str
    listing_id: UUID
    pricing_tier: str
    receipt: str | None = None
    status: str
    failure_reason: str | None = None
    paid_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


PaymentInitiationResponse = APIResponse[PaymentInitiationModel]
PaymentResponse = APIResponse[PaymentModel]
PaymentListResponse = APIResponse[list[PaymentModel]]

"""Listing fee checkout: initiate, verify and history."""

from dataclasses import asdict

from fastapi import APIRouter

from pawmarket.api.core.dependencies import CurrentUserDep, PaymentServiceDep
from pawmarket.api.core.messages import APIResponse, MessageCode
from pawmarket.api.payments.schemas import (
    PaymentInitiateRequest,
    PaymentInitiationModel,
    PaymentInitiationResponse,
    PaymentListResponse,
    PaymentModel,
    PaymentResponse,
    PaymentVerifyRequest,
)
from pawmarket.modules.payment.gateway import to_minor_units
from pawmarket.modules.payment.service import FREE_ACTIVATION

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/initiate", response_model=PaymentInitiationResponse)
async def initiate_payment(
    body: PaymentInitiateRequest,
    current_user: CurrentUserDep,
    payments: PaymentServiceDep,
) -> PaymentInitiationResponse:
    """Open a gateway order, or activate directly on a free tier."""
    initiation = await payments.initiate(
        current_user.id, body.listing_type, body.listing_id, body.pricing_tier
    )
    message_code = (
        MessageCode.FREE_ACTIVATION
        if initiation.status == FREE_ACTIVATION
        else MessageCode.PAYMENT_INITIATED
    )
    return APIResponse.success(
        message_code=message_code,
        data=PaymentInitiationModel(
            **asdict(initiation), amount_minor=to_minor_units(initiation.amount)
        ),
    )


@router.post("/verify", response_model=PaymentResponse)
async def verify_payment(
    body: PaymentVerifyRequest,
    current_user: CurrentUserDep,
    payments: PaymentServiceDep,
) -> PaymentResponse:
    payment = await payments.verify(
        current_user.id, body.order_id, body.payment_id, body.signature
    )
    return APIResponse.success(
        message_code=MessageCode.PAYMENT_VERIFIED,
        data=PaymentModel.model_validate(payment),
    )


@router.get("/me", response_model=PaymentListResponse)
async def list_my_payments(
    current_user: CurrentUserDep,
    payments: PaymentServiceDep,
) -> PaymentListResponse:
    items = await payments.list_my_payments(current_user.id)
    return APIResponse.success(data=[PaymentModel.model_validate(p) for p in items])

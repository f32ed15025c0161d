import time
from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import (
    PaymentConfirmRequest,
    PaymentRequest,
    PaymentResponse,
    PaymentStatusResponse,
    RefundRequest,
    SuccessResponse,
)
from travana.core.errors import ServiceError, ValidationError
from travana.dependencies import get_current_user, get_payment_service
from travana.domain.models import UserEntity
from travana.domain.services.payment_service import PaymentService

router = APIRouter(prefix="/payment", tags=["payment"])

# Used for anonymous checkouts
GUEST_USER_ID = "user-123"


@router.post("", response_model=PaymentResponse)
async def create_payment(
    body: PaymentRequest,
    user: Optional[UserEntity] = Depends(get_current_user),
    svc: PaymentService = Depends(get_payment_service),
):
    if not body.amount or not body.currency or not body.description:
        raise ValidationError("Amount, currency, and description are required")

    booking_id = f"{body.service or 'booking'}-{int(time.time() * 1000)}"
    payment = await svc.create_booking_payment(
        amount=body.amount,
        currency=body.currency,
        description=body.description,
        customer_email=body.customerEmail,
        booking_id=booking_id,
        user_id=user.id if user else GUEST_USER_ID,
    )
    if not await svc.send_payment_confirmation(payment):
        raise ServiceError("Payment confirmation failed")

    return PaymentResponse(
        paymentId=payment.id,
        amount=payment.amount,
        currency=payment.currency,
        status=payment.status,
        message="Payment created successfully",
    )


@router.get("")
async def payment_info(
    action: Optional[str] = None,
    paymentId: Optional[str] = None,
    svc: PaymentService = Depends(get_payment_service),
):
    if action == "currencies":
        return svc.get_supported_currencies()

    if action == "status":
        if not paymentId:
            raise ValidationError("Payment ID is required")
        return PaymentStatusResponse(status=await svc.get_payment_status(paymentId))

    raise ValidationError("Invalid action parameter")


@router.post("/confirm", response_model=SuccessResponse)
async def confirm_payment(body: PaymentConfirmRequest, svc: PaymentService = Depends(get_payment_service)):
    if not body.paymentIntentId or not body.paymentMethodId:
        raise ValidationError("paymentIntentId and paymentMethodId are required")
    if not await svc.validate_payment_method(body.paymentMethodId):
        raise ValidationError("Invalid payment method")
    return SuccessResponse(success=await svc.confirm_payment(body.paymentIntentId, body.paymentMethodId))


@router.post("/refund", response_model=SuccessResponse)
async def refund_payment(body: RefundRequest, svc: PaymentService = Depends(get_payment_service)):
    if not body.paymentIntentId:
        raise ValidationError("paymentIntentId is required")
    ok = await svc.process_refund(body.paymentIntentId, body.reason, body.amount, body.description)
    return SuccessResponse(success=ok)

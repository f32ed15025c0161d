from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import stripe

from travana.core.config import settings

logger = logging.getLogger(__name__)

# The SDK is synchronous; calls run in a worker thread and raise stripe.error.StripeError on failure.


async def _call(operation: Callable[..., Any], **params: Any) -> Dict[str, Any]:
    result = await asyncio.to_thread(operation, api_key=settings.stripe_secret_key, **params)
    return result.to_dict()


async def create_payment_intent(amount: int, currency: str, metadata: Dict[str, str]) -> Dict[str, Any]:
    return await _call(
        stripe.PaymentIntent.create,
        amount=amount,
        currency=currency,
        metadata={
            "service": metadata.get("service") or "trip_booking",
            "booking_id": metadata.get("bookingId", ""),
            "user_id": metadata.get("userId", ""),
        },
    )


async def confirm_payment_intent(payment_intent_id: str, payment_method_id: str) -> Dict[str, Any]:
    return await _call(stripe.PaymentIntent.confirm, intent=payment_intent_id, payment_method=payment_method_id)


async def retrieve_payment_intent(payment_intent_id: str) -> Dict[str, Any]:
    return await _call(stripe.PaymentIntent.retrieve, id=payment_intent_id)


async def create_refund(
    payment_intent_id: str, reason: str, amount: Optional[int] = None, description: Optional[str] = None
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"payment_intent": payment_intent_id, "reason": reason}
    if amount:
        params["amount"] = amount
    if description:
        params["metadata"] = {"description": description}
    return await _call(stripe.Refund.create, **params)


async def retrieve_payment_method(payment_method_id: str) -> Dict[str, Any]:
    return await _call(stripe.PaymentMethod.retrieve, id=payment_method_id)

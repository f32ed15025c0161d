from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional

from travana.api.models.schemas import BookingPayment, Currency, PaymentIntent
from travana.core.config import settings
from travana.external import stripe_api

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = [
    ("usd", "US Dollar", "$"),
    ("eur", "Euro", "€"),
    ("gbp", "British Pound", "£"),
    ("jpy", "Japanese Yen", "¥"),
    ("cad", "Canadian Dollar", "C$"),
    ("aud", "Australian Dollar", "A$"),
    ("chf", "Swiss Franc", "CHF"),
    ("cny", "Chinese Yuan", "¥"),
]


def _now_ms() -> int:
    return int(time.time() * 1000)


def fallback_payment_intent(amount: int, currency: str) -> PaymentIntent:
    stamp = _now_ms()
    return PaymentIntent(
        id=f"pi_mock_{stamp}",
        amount=amount,
        currency=currency,
        status="requires_payment_method",
        clientSecret=f"pi_mock_secret_{stamp}",
    )


def format_amount(amount: int, currency: str) -> str:
    """Stripe amounts are in the smallest currency unit."""
    symbols = {code: symbol for code, _, symbol in SUPPORTED_CURRENCIES}
    symbol = symbols.get(currency.lower(), currency.upper() + " ")
    return f"{symbol}{amount / 100:,.2f}"


def generate_invoice(payment: BookingPayment) -> str:
    lines = [
        "INVOICE",
        "",
        f"Payment ID: {payment.id}",
        f"Date: {payment.createdAt}",
        f"Amount: {payment.amount / 100:g} {payment.currency.upper()}",
        f"Description: {payment.description}",
        f"Status: {payment.status}",
        "",
        f"Customer: {payment.customerEmail}",
        f"Booking ID: {payment.metadata.get('bookingId', '')}",
    ]
    return "\n".join(lines)


class PaymentService:
    async def create_payment_intent(
        self, amount: int, currency: str = "usd", metadata: Optional[Dict[str, str]] = None
    ) -> PaymentIntent:
        if not settings.stripe_secret_key:
            return fallback_payment_intent(amount, currency)
        try:
            data = await stripe_api.create_payment_intent(amount, currency, metadata or {})
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Stripe payment intent creation failed: %s", exc)
            return fallback_payment_intent(amount, currency)
        return PaymentIntent(
            id=data["id"],
            amount=data["amount"],
            currency=data["currency"],
            status=data["status"],
            clientSecret=data.get("client_secret", ""),
            paymentMethod=data.get("payment_method"),
        )

    async def confirm_payment(self, payment_intent_id: str, payment_method_id: str) -> bool:
        if not settings.stripe_secret_key:
            return True
        try:
            data = await stripe_api.confirm_payment_intent(payment_intent_id, payment_method_id)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Stripe confirmation failed for '%s': %s", payment_intent_id, exc)
            return False
        return data.get("status") == "succeeded"

    async def get_payment_status(self, payment_intent_id: str) -> Optional[str]:
        if not settings.stripe_secret_key:
            return "succeeded"
        try:
            data = await stripe_api.retrieve_payment_intent(payment_intent_id)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Stripe status lookup failed for '%s': %s", payment_intent_id, exc)
            return None
        return data.get("status")

    async def process_refund(
        self, payment_intent_id: str, reason: str, amount: Optional[int] = None, description: Optional[str] = None
    ) -> bool:
        if not settings.stripe_secret_key:
            return True
        try:
            await stripe_api.create_refund(payment_intent_id, reason, amount, description)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Stripe refund failed for '%s': %s", payment_intent_id, exc)
            return False
        return True

    async def validate_payment_method(self, payment_method_id: str) -> bool:
        if not settings.stripe_secret_key:
            return True
        try:
            await stripe_api.retrieve_payment_method(payment_method_id)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.warning("Stripe payment method '%s' is not valid: %s", payment_method_id, exc)
            return False
        return True

    async def create_booking_payment(
        self,
        amount: int,
        currency: str,
        description: str,
        customer_email: str,
        booking_id: str,
        user_id: str,
    ) -> BookingPayment:
        intent = await self.create_payment_intent(
            amount, currency, {"service": "trip_booking", "bookingId": booking_id, "userId": user_id}
        )
        return BookingPayment(
            id=intent.id,
            amount=intent.amount,
            currency=intent.currency,
            description=description,
            status=intent.status,
            customerEmail=customer_email,
            metadata={"bookingId": booking_id, "userId": user_id},
            createdAt=datetime.now(timezone.utc).isoformat(),
        )

    async def send_payment_confirmation(self, payment: BookingPayment) -> bool:
        # No mail provider is wired up; the confirmation is only logged
        logger.info(
            "Payment confirmation for %s: %s %s (%s), booking %s",
            payment.customerEmail,
            payment.amount,
            payment.currency,
            payment.description,
            payment.metadata.get("bookingId"),
        )
        return True

    def generate_invoice(self, payment: BookingPayment) -> str:
        return generate_invoice(payment)

    def format_amount(self, amount: int, currency: str) -> str:
        return format_amount(amount, currency)

    def convert_currency(self, amount: int, from_currency: str, to_currency: str) -> int:
        # No exchange-rate source yet
        return amount

    def get_supported_currencies(self) -> List[Currency]:
        return [Currency(code=code, name=name, symbol=symbol) for code, name, symbol in SUPPORTED_CURRENCIES]

"""
Payment intents and card confirmation.

PaymentIntentService runs behind POST /create-payment-intent and is the only
code holding the Stripe secret key. PaymentAdapter is the booking flow's side
of the exchange: it asks the endpoint for a client secret and hands it to a
hosted card widget, which owns all card data.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import anyio
import httpx
import stripe

from cleaning_booking.core.config import StripeConfig
from cleaning_booking.core.enums import PaymentOutcome
from cleaning_booking.core.errors import PaymentConfigurationError, PaymentProcessorError
from cleaning_booking.core.metrics import payment_intents
from cleaning_booking.schemas.payment import PaymentIntentOut, PaymentResult

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Cleaning Service"
NOT_CONFIGURED_CODE = "payment_not_configured"
BOOKING_NUMBER_KEY = "booking_number"


def _stripe_message(exc: Exception) -> str:
    return getattr(exc, "user_message", None) or str(exc) or "Payment failed"


def intent_id_from_client_secret(client_secret: str) -> str:
    return client_secret.split("_secret_", 1)[0]


class PaymentIntentService:
    def __init__(self, config: Optional[StripeConfig], stripe_sdk: Any = None):
        self.config = config
        self.stripe = stripe_sdk or stripe

    def require_config(self) -> StripeConfig:
        if self.config is None:
            raise PaymentConfigurationError("Payment processing is not configured")
        return self.config

    async def call(self, fn, *args, **kwargs):
        try:
            return await anyio.to_thread.run_sync(lambda: fn(*args, **kwargs))
        except stripe.CardError as e:
            raise PaymentProcessorError(_stripe_message(e), code=getattr(e, "code", None)) from e
        except (stripe.AuthenticationError, stripe.PermissionError, stripe.APIConnectionError) as e:
            raise PaymentConfigurationError(_stripe_message(e)) from e
        except stripe.StripeError as e:
            raise PaymentProcessorError(_stripe_message(e), code=getattr(e, "code", None)) from e

    async def create_intent(
        self,
        amount_cents: int,
        email: str,
        description: Optional[str] = None,
        payment_method_id: Optional[str] = None,
        currency: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> PaymentIntentOut:
        config = self.require_config()
        description = description or DEFAULT_DESCRIPTION
        payload = {
            "amount": int(round(amount_cents)),
            "currency": (currency or config.currency).lower(),
            "receipt_email": email,
            "description": description,
            "confirm": bool(payment_method_id),
            "confirmation_method": "manual",
            "metadata": {
                "customerEmail": email,
                "serviceDescription": description,
            },
        }
        if payment_method_id:
            payload["payment_method"] = payment_method_id
        extra = {}
        if idempotency_key:
            extra["idempotency_key"] = idempotency_key

        logger.info(f"Creating payment intent for {email}, amount: {payload['amount']}, description: {description}")
        try:
            intent = await self.call(
                self.stripe.PaymentIntent.create, api_key=config.secret_key, **payload, **extra
            )
        except Exception:
            payment_intents.labels(status="error").inc()
            raise
        payment_intents.labels(status="created").inc()
        return PaymentIntentOut(clientSecret=intent.client_secret, paymentIntentId=intent.id)

    async def retrieve_intent(self, payment_intent_id: str) -> Any:
        config = self.require_config()
        return await self.call(
            self.stripe.PaymentIntent.retrieve, payment_intent_id, api_key=config.secret_key
        )

    async def record_booking(self, payment_intent_id: str, booking_number: str) -> Any:
        """Stamp the booking number on the intent so it is confirmed only once."""
        config = self.require_config()
        logger.info(f"Recording booking {booking_number} on intent {payment_intent_id}")
        return await self.call(
            self.stripe.PaymentIntent.modify,
            payment_intent_id,
            metadata={BOOKING_NUMBER_KEY: booking_number},
            api_key=config.secret_key,
        )


def booking_number_of(intent: Any) -> Optional[str]:
    metadata = getattr(intent, "metadata", None) or {}
    return metadata.get(BOOKING_NUMBER_KEY) or None


@dataclass(frozen=True)
class WidgetResult:
    status: Optional[str] = None
    error_message: Optional[str] = None


class HostedCardWidget(Protocol):
    async def confirm_card_payment(self, client_secret: str, email: str) -> WidgetResult:
        ...


class StripeCardWidget:
    """Confirms an intent with a payment method tokenized by Stripe's card element."""

    def __init__(self, config: Optional[StripeConfig], payment_method_id: str, stripe_sdk: Any = None):
        self.service = PaymentIntentService(config, stripe_sdk=stripe_sdk)
        self.payment_method_id = payment_method_id

    async def confirm_card_payment(self, client_secret: str, email: str) -> WidgetResult:
        config = self.service.require_config()
        try:
            intent = await self.service.call(
                self.service.stripe.PaymentIntent.confirm,
                intent_id_from_client_secret(client_secret),
                payment_method=self.payment_method_id,
                receipt_email=email,
                api_key=config.secret_key,
            )
        except PaymentProcessorError as e:
            return WidgetResult(error_message=str(e))
        return WidgetResult(status=intent.status)


class PaymentAdapter:
    def __init__(
        self,
        endpoint_url: str,
        widget: HostedCardWidget,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: int = 10,
    ):
        self.endpoint_url = endpoint_url
        self.widget = widget
        self.http_client = http_client
        self.timeout = timeout

    async def _post(self, body: dict) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.post(self.endpoint_url, json=body)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.endpoint_url, json=body)

    async def create_intent(self, amount_cents: int, currency: str, email: str, description: str) -> PaymentIntentOut:
        body = {
            "amount": amount_cents,
            "currency": currency,
            "email": email,
            "description": description,
        }
        try:
            response = await self._post(body)
        except httpx.HTTPError as e:
            raise PaymentConfigurationError(f"Payment service unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.status_code == 200:
            try:
                return PaymentIntentOut(**data)
            except (TypeError, ValueError) as e:
                raise PaymentConfigurationError("Payment service returned an invalid response") from e

        message = data.get("error") or "Failed to create payment intent"
        if response.status_code in (404, 405) or data.get("code") == NOT_CONFIGURED_CODE:
            raise PaymentConfigurationError(message)
        raise PaymentProcessorError(message, code=data.get("code"))

    async def pay(self, amount_cents: int, currency: str, email: str, description: str) -> PaymentResult:
        try:
            intent = await self.create_intent(amount_cents, currency, email, description)
            result = await self.widget.confirm_card_payment(intent.clientSecret, email)
        except PaymentConfigurationError as e:
            logger.error(f"Payment configuration error: {e}")
            return PaymentResult(outcome=PaymentOutcome.CONFIGURATION_ERROR, message=str(e))
        except PaymentProcessorError as e:
            logger.warning(f"Payment failed: {e}")
            return PaymentResult(outcome=PaymentOutcome.DECLINED, message=str(e))

        if result.error_message:
            logger.warning(f"Card confirmation failed for intent {intent.paymentIntentId}: {result.error_message}")
            return PaymentResult(
                outcome=PaymentOutcome.DECLINED,
                message=result.error_message,
                payment_intent_id=intent.paymentIntentId,
            )
        if result.status != "succeeded":
            return PaymentResult(
                outcome=PaymentOutcome.DECLINED,
                message=f"Payment was not completed (status: {result.status})",
                payment_intent_id=intent.paymentIntentId,
            )
        return PaymentResult(outcome=PaymentOutcome.SUCCEEDED, payment_intent_id=intent.paymentIntentId)

"""Payment intent creation, a pass-through to Stripe, and the card element config."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from cleaning_booking.api.deps import get_integrations, get_payment_service
from cleaning_booking.core.config import IntegrationConfig
from cleaning_booking.core.errors import PaymentConfigurationError, PaymentProcessorError
from cleaning_booking.schemas.payment import PaymentConfigOut, PaymentIntentIn, PaymentIntentOut
from cleaning_booking.services.payments import NOT_CONFIGURED_CODE, PaymentIntentService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["payments"])


def _error(status_code: int, message: str, code: Optional[str] = None) -> JSONResponse:
    content = {"error": message}
    if code:
        content["code"] = code
    return JSONResponse(status_code=status_code, content=content)


@router.post("/create-payment-intent", response_model=PaymentIntentOut)
async def create_payment_intent(
    payload: Optional[PaymentIntentIn] = None,
    idempotency_key: Optional[str] = Header(None),
    service: PaymentIntentService = Depends(get_payment_service),
):
    if payload is None or not payload.amount or not payload.email:
        return _error(400, "Missing required fields: amount and email")

    try:
        return await service.create_intent(
            amount_cents=payload.amount,
            email=payload.email,
            description=payload.description,
            payment_method_id=payload.payment_method_id,
            currency=payload.currency,
            idempotency_key=idempotency_key,
        )
    except PaymentConfigurationError as e:
        logger.error(f"Error creating payment intent: {e}")
        return _error(500, str(e), NOT_CONFIGURED_CODE)
    except PaymentProcessorError as e:
        logger.error(f"Error creating payment intent: {e}")
        return _error(500, str(e) or "Failed to create payment intent", e.code)


@router.get("/payment-config", response_model=PaymentConfigOut)
async def payment_config(integrations: IntegrationConfig = Depends(get_integrations)):
    """Publishable key and currency for mounting the hosted card element."""
    payments = integrations.payments
    if payments is None or not payments.publishable_key:
        return _error(503, "Payment processing is not configured", NOT_CONFIGURED_CODE)
    return PaymentConfigOut(publishableKey=payments.publishable_key, currency=payments.currency)

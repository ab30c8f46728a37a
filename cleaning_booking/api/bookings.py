import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from cleaning_booking.api.deps import get_emitter, get_integrations, get_payment_service, resolve_table
from cleaning_booking.core.config import IntegrationConfig, settings
from cleaning_booking.core.enums import BookingStep, TimeSlot
from cleaning_booking.core.errors import PaymentConfigurationError, PaymentProcessorError, StepValidationError
from cleaning_booking.core.metrics import step_validations
from cleaning_booking.core.response_builders import build_confirmation_response
from cleaning_booking.schemas.booking import (
    AvailabilityOut,
    BookingConfirmationOut,
    BookingRequest,
    ConfirmBookingIn,
    StepValidationOut,
    TimeSlotOut,
)
from cleaning_booking.services.booking_flow import BookingFlow
from cleaning_booking.services.navigator import next_step, validate_step
from cleaning_booking.services.notifications import BookingConfirmationEmitter
from cleaning_booking.services.payments import PaymentIntentService, booking_number_of
from cleaning_booking.services.pricing import quote_amount_cents
from cleaning_booking.services.scheduling import TIME_SLOT_LABELS, generate_booking_number, next_available_dates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/availability", response_model=AvailabilityOut)
async def availability():
    return AvailabilityOut(
        dates=next_available_dates(settings.AVAILABLE_DAYS),
        time_slots=[
            TimeSlotOut(value=slot.value, label=TIME_SLOT_LABELS[slot]) for slot in TimeSlot
        ],
    )


@router.post("/steps/{step}/validate", response_model=StepValidationOut)
async def validate_booking_step(step: BookingStep, booking: BookingRequest):
    errors = validate_step(step, booking)
    step_validations.labels(step=step.value, result="invalid" if errors else "valid").inc()
    return StepValidationOut(
        step=step,
        valid=not errors,
        errors=errors,
        next_step=None if errors else next_step(step),
    )


@router.post("/confirm", response_model=BookingConfirmationOut)
async def confirm_booking(
    payload: ConfirmBookingIn,
    background_tasks: BackgroundTasks,
    integrations: IntegrationConfig = Depends(get_integrations),
    service: PaymentIntentService = Depends(get_payment_service),
    emitter: BookingConfirmationEmitter = Depends(get_emitter),
):
    """Record a booking whose payment the card widget reported as succeeded.

    Every step is re-validated and the intent is checked with Stripe before
    the booking number is issued and the confirmation email scheduled. The
    booking number is stamped on the intent metadata, so replaying the same
    intent answers 409 instead of booking twice.
    """
    resolve_table(integrations.pricing_variant)
    flow = BookingFlow.from_config(integrations, payload.booking, emitter=emitter)

    try:
        while flow.step != BookingStep.PAYMENT:
            flow.advance()
    except StepValidationError as e:
        raise HTTPException(status_code=400, detail={"step": e.step.value, "errors": e.errors})

    quote = flow.recompute_quote()

    try:
        intent = await service.retrieve_intent(payload.payment_intent_id)
    except PaymentConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except PaymentProcessorError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if intent.status != "succeeded":
        raise HTTPException(status_code=402, detail=f"Payment has not succeeded (status: {intent.status})")
    if intent.amount != quote_amount_cents(quote):
        logger.warning(
            f"Intent {payload.payment_intent_id} amount {intent.amount} does not match quote "
            f"{quote_amount_cents(quote)}"
        )
        raise HTTPException(status_code=409, detail="Payment amount does not match the quoted price")

    existing = booking_number_of(intent)
    if existing:
        logger.warning(f"Intent {payload.payment_intent_id} already confirmed as booking {existing}")
        raise HTTPException(status_code=409, detail=f"Payment already confirmed as booking {existing}")

    booking_number = generate_booking_number()
    try:
        await service.record_booking(payload.payment_intent_id, booking_number)
    except PaymentConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except PaymentProcessorError as e:
        raise HTTPException(status_code=400, detail=str(e))

    flow.confirm(quote, booking_number)
    background_tasks.add_task(flow.drain_notifications)

    return build_confirmation_response(
        booking_number,
        payload.payment_intent_id,
        flow.form.selections,
        quote,
        notification_scheduled=emitter.enabled,
    )

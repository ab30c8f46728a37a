from fastapi import HTTPException, Request

from cleaning_booking.core.config import IntegrationConfig
from cleaning_booking.core.errors import UnknownPricingVariantError
from cleaning_booking.services.notifications import BookingConfirmationEmitter
from cleaning_booking.services.payments import PaymentIntentService
from cleaning_booking.services.pricing_tables import PricingTable, get_pricing_table


def get_integrations(request: Request) -> IntegrationConfig:
    return request.app.state.integrations


def get_payment_service(request: Request) -> PaymentIntentService:
    return request.app.state.payment_service


def get_emitter(request: Request) -> BookingConfirmationEmitter:
    return request.app.state.emitter


def resolve_table(variant: str) -> PricingTable:
    try:
        return get_pricing_table(variant)
    except UnknownPricingVariantError as e:
        raise HTTPException(status_code=404, detail=str(e))

from typing import Dict

from cleaning_booking.schemas.booking import (
    AddressInfo,
    BookingConfirmationOut,
    ContactInfo,
    ScheduleInfo,
)
from cleaning_booking.schemas.quote import Quote, Selections
from cleaning_booking.services.scheduling import (
    format_service_date,
    frequency_label,
    time_slot_label,
)


def build_email_params(
    booking_number: str,
    selections: Selections,
    quote: Quote,
    contact: ContactInfo,
    address: AddressInfo,
    schedule: ScheduleInfo,
) -> Dict[str, str]:
    return {
        "booking_number": booking_number,
        "customer_name": contact.name,
        "customer_email": contact.email,
        "customer_phone": contact.phone,
        "service_date": format_service_date(schedule.date) if schedule.date else "",
        "service_time": time_slot_label(schedule.time_slot) or schedule.time_slot,
        "service_address": address.one_line(),
        "cleaning_type": selections.cleaning_type,
        "frequency": frequency_label(selections.frequency),
        "total_price": f"{quote.first_visit_total:.2f}",
        "special_instructions": address.special_instructions.strip() or "None",
    }


def build_confirmation_response(
    booking_number: str,
    payment_intent_id: str,
    selections: Selections,
    quote: Quote,
    notification_scheduled: bool,
) -> BookingConfirmationOut:
    return BookingConfirmationOut(
        booking_number=booking_number,
        payment_intent_id=payment_intent_id,
        total_paid=quote.first_visit_total,
        frequency=frequency_label(selections.frequency),
        quote=quote,
        notification_scheduled=notification_scheduled,
    )

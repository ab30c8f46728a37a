"""
Linear step sequence for the booking wizard:

    SERVICE_DETAILS -> DATE_TIME -> ADDRESS -> PAYMENT -> CONFIRMATION

Moving forward runs the current step's validator. CONFIRMATION is entered
only through complete_payment() and left only through reset().
"""
import logging
from datetime import date
from typing import Callable, Dict, Optional

from cleaning_booking.core.enums import BookingStep, TimeSlot
from cleaning_booking.core.errors import NavigationError, StepValidationError
from cleaning_booking.schemas.booking import BookingRequest
from cleaning_booking.utils.validators import is_blank, is_valid_email

logger = logging.getLogger(__name__)

STEP_ORDER = (
    BookingStep.SERVICE_DETAILS,
    BookingStep.DATE_TIME,
    BookingStep.ADDRESS,
    BookingStep.PAYMENT,
    BookingStep.CONFIRMATION,
)

VALID_TIME_SLOTS = {slot.value for slot in TimeSlot}


def validate_service_details(booking: BookingRequest, today: date) -> Dict[str, str]:
    errors = {}
    contact = booking.contact
    if is_blank(contact.name):
        errors["name"] = "Name is required"
    if is_blank(contact.email):
        errors["email"] = "Email is required"
    elif not is_valid_email(contact.email):
        errors["email"] = "Enter a valid email address"
    if is_blank(contact.phone):
        errors["phone"] = "Phone number is required"
    for field in booking.selections.missing_required():
        errors[field] = "Please make a selection"
    return errors


def validate_date_time(booking: BookingRequest, today: date) -> Dict[str, str]:
    errors = {}
    schedule = booking.schedule
    if schedule.date is None:
        errors["date"] = "Choose a date"
    elif schedule.date < today:
        errors["date"] = "Date cannot be in the past"
    if schedule.time_slot not in VALID_TIME_SLOTS:
        errors["time_slot"] = "Choose a time slot"
    return errors


def validate_address(booking: BookingRequest, today: date) -> Dict[str, str]:
    errors = {}
    address = booking.address
    if is_blank(address.street):
        errors["street"] = "Street address is required"
    if is_blank(address.city):
        errors["city"] = "City is required"
    if is_blank(address.postal_code):
        errors["postal_code"] = "Postal code is required"
    return errors


def validate_payment(booking: BookingRequest, today: date) -> Dict[str, str]:
    return {"payment": "Payment has not been completed"}


STEP_VALIDATORS: Dict[BookingStep, Callable[[BookingRequest, date], Dict[str, str]]] = {
    BookingStep.SERVICE_DETAILS: validate_service_details,
    BookingStep.DATE_TIME: validate_date_time,
    BookingStep.ADDRESS: validate_address,
    BookingStep.PAYMENT: validate_payment,
}


def validate_step(step: BookingStep, booking: BookingRequest, today: Optional[date] = None) -> Dict[str, str]:
    validator = STEP_VALIDATORS.get(step)
    if validator is None:
        return {}
    return validator(booking, today or date.today())


def next_step(step: BookingStep) -> Optional[BookingStep]:
    index = STEP_ORDER.index(step)
    if index + 1 >= len(STEP_ORDER):
        return None
    return STEP_ORDER[index + 1]


class StepNavigator:
    def __init__(self, clock: Callable[[], date] = date.today):
        self.clock = clock
        self.current = STEP_ORDER[0]

    @property
    def index(self) -> int:
        return STEP_ORDER.index(self.current)

    @property
    def progress(self) -> int:
        """Percent of the wizard completed, as shown on the progress bar."""
        return min(100, (self.index + 1) * 25)

    @property
    def is_confirmed(self) -> bool:
        return self.current == BookingStep.CONFIRMATION

    def advance(self, booking: BookingRequest) -> BookingStep:
        if self.current == BookingStep.CONFIRMATION:
            raise NavigationError("Booking is confirmed; restart to book again")
        errors = validate_step(self.current, booking, self.clock())
        if errors:
            logger.info(f"Step {self.current} rejected: {sorted(errors)}")
            raise StepValidationError(self.current, errors)
        self.current = STEP_ORDER[self.index + 1]
        return self.current

    def back(self) -> BookingStep:
        if self.current == BookingStep.CONFIRMATION:
            raise NavigationError("Booking is confirmed; restart to book again")
        if self.index == 0:
            raise NavigationError("Already at the first step")
        self.current = STEP_ORDER[self.index - 1]
        return self.current

    def complete_payment(self) -> BookingStep:
        if self.current != BookingStep.PAYMENT:
            raise NavigationError(f"Payment can only complete from the payment step, not {self.current}")
        self.current = BookingStep.CONFIRMATION
        return self.current

    def reset(self) -> BookingStep:
        self.current = STEP_ORDER[0]
        return self.current

import datetime as dt
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from cleaning_booking.core.enums import BookingStep
from cleaning_booking.schemas.quote import Quote, Selections


class ContactInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class AddressInfo(BaseModel):
    street: str = ""
    city: str = ""
    postal_code: str = ""
    special_instructions: str = ""

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.postal_code}"


class ScheduleInfo(BaseModel):
    date: Optional[dt.date] = None
    time_slot: str = ""


class BookingRequest(BaseModel):
    contact: ContactInfo = Field(default_factory=ContactInfo)
    selections: Selections = Field(default_factory=Selections)
    schedule: ScheduleInfo = Field(default_factory=ScheduleInfo)
    address: AddressInfo = Field(default_factory=AddressInfo)


class StepValidationOut(BaseModel):
    step: BookingStep
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    next_step: Optional[BookingStep] = None


class TimeSlotOut(BaseModel):
    value: str
    label: str


class AvailabilityOut(BaseModel):
    dates: List[dt.date]
    time_slots: List[TimeSlotOut]


class ConfirmBookingIn(BaseModel):
    booking: BookingRequest
    payment_intent_id: str


class BookingConfirmationOut(BaseModel):
    booking_number: str
    payment_intent_id: str
    total_paid: Decimal
    frequency: str
    quote: Quote
    notification_scheduled: bool

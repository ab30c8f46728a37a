"""
Per-step form state for one booking session.

Every field has its own update method; state is held as immutable pydantic
models and replaced on each update. Updates go through model
validation, so a setter raises pydantic.ValidationError for any value the
HTTP API would reject with 422. A quote is recomputed from scratch
whenever it is read.
"""
from datetime import date
from typing import Iterable, Optional, TypeVar

from pydantic import BaseModel

from cleaning_booking.schemas.booking import (
    AddressInfo,
    BookingRequest,
    ContactInfo,
    ScheduleInfo,
)
from cleaning_booking.schemas.quote import Quote, Selections
from cleaning_booking.services.pricing import compute_quote
from cleaning_booking.services.pricing_tables import PricingTable


ModelT = TypeVar("ModelT", bound=BaseModel)


def _revalidate(model: ModelT, **changes) -> ModelT:
    return type(model).model_validate({**model.model_dump(), **changes})


class BookingForm:
    def __init__(self, table: PricingTable):
        self.table = table
        self.reset()

    def reset(self) -> None:
        self.contact = ContactInfo()
        self.selections = Selections()
        self.schedule = ScheduleInfo()
        self.address = AddressInfo()

    @classmethod
    def from_request(cls, table: PricingTable, request: BookingRequest) -> "BookingForm":
        form = cls(table)
        form.contact = request.contact
        form.selections = request.selections
        form.schedule = request.schedule
        form.address = request.address
        return form

    def to_request(self) -> BookingRequest:
        return BookingRequest(
            contact=self.contact,
            selections=self.selections,
            schedule=self.schedule,
            address=self.address,
        )

    # contact
    def set_name(self, name: str) -> None:
        self.contact = _revalidate(self.contact, name=name)

    def set_email(self, email: str) -> None:
        self.contact = _revalidate(self.contact, email=email)

    def set_phone(self, phone: str) -> None:
        self.contact = _revalidate(self.contact, phone=phone)

    # service selections
    def _select(self, **changes) -> None:
        self.selections = _revalidate(self.selections, **changes)

    def set_home_size(self, home_size: Optional[str]) -> None:
        self._select(home_size=home_size)

    def set_bedrooms(self, bedrooms: Optional[int]) -> None:
        self._select(bedrooms=bedrooms)

    def set_bathrooms(self, bathrooms: Optional[int]) -> None:
        self._select(bathrooms=bathrooms)

    def set_half_baths(self, half_baths: int) -> None:
        self._select(half_baths=half_baths)

    def set_cleaning_type(self, cleaning_type: str) -> None:
        self._select(cleaning_type=cleaning_type)

    def set_frequency(self, frequency: str) -> None:
        self._select(frequency=frequency)

    def toggle_add_on(self, add_on: str, selected: bool) -> None:
        add_ons = set(self.selections.add_ons)
        if selected:
            add_ons.add(add_on)
        else:
            add_ons.discard(add_on)
        self._select(add_ons=frozenset(add_ons))

    def set_add_ons(self, add_ons: Iterable[str]) -> None:
        self._select(add_ons=frozenset(add_ons))

    # schedule
    def set_date(self, value: Optional[date]) -> None:
        self.schedule = _revalidate(self.schedule, date=value)

    def set_time_slot(self, time_slot: str) -> None:
        self.schedule = _revalidate(self.schedule, time_slot=time_slot)

    # address
    def set_street(self, street: str) -> None:
        self.address = _revalidate(self.address, street=street)

    def set_city(self, city: str) -> None:
        self.address = _revalidate(self.address, city=city)

    def set_postal_code(self, postal_code: str) -> None:
        self.address = _revalidate(self.address, postal_code=postal_code)

    def set_special_instructions(self, text: str) -> None:
        self.address = _revalidate(self.address, special_instructions=text)

    def can_quote(self) -> bool:
        return not self.selections.missing_required()

    def quote(self) -> Optional[Quote]:
        if not self.can_quote():
            return None
        return compute_quote(self.selections, self.table)

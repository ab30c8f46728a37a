"""
One booking session: form state, step navigation, payment and the
confirmation email, composed the way the booking wizard uses them.
"""
import asyncio
import logging
from typing import Optional, Set

import httpx

from cleaning_booking.core.config import IntegrationConfig
from cleaning_booking.core.enums import BookingStep
from cleaning_booking.core.errors import NavigationError
from cleaning_booking.core.metrics import bookings_confirmed, quotes_computed
from cleaning_booking.schemas.booking import BookingRequest
from cleaning_booking.schemas.payment import PaymentResult
from cleaning_booking.schemas.quote import Quote
from cleaning_booking.services.forms import BookingForm
from cleaning_booking.services.navigator import StepNavigator
from cleaning_booking.services.notifications import BookingConfirmationEmitter
from cleaning_booking.services.payments import HostedCardWidget, PaymentAdapter
from cleaning_booking.services.pricing import quote_amount_cents
from cleaning_booking.services.pricing_tables import get_pricing_table
from cleaning_booking.services.scheduling import frequency_label, generate_booking_number

logger = logging.getLogger(__name__)


class BookingFlow:
    def __init__(
        self,
        form: BookingForm,
        navigator: StepNavigator,
        payment_adapter: Optional[PaymentAdapter],
        emitter: BookingConfirmationEmitter,
        currency: str = "cad",
    ):
        self.form = form
        self.navigator = navigator
        self.payment_adapter = payment_adapter
        self.emitter = emitter
        self.currency = currency
        self.booking_number: Optional[str] = None
        self.last_payment: Optional[PaymentResult] = None
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_config(
        cls,
        integrations: IntegrationConfig,
        booking: Optional[BookingRequest] = None,
        widget: Optional[HostedCardWidget] = None,
        emitter: Optional[BookingConfirmationEmitter] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "BookingFlow":
        """Build a session for the configured pricing variant.

        A payment adapter pointed at PAYMENT_INTENT_URL is attached only when a
        card widget is supplied; a flow without one can confirm but not charge.
        """
        table = get_pricing_table(integrations.pricing_variant)
        form = BookingForm.from_request(table, booking) if booking is not None else BookingForm(table)
        adapter = None
        if widget is not None:
            adapter = PaymentAdapter(
                integrations.payment_intent_url,
                widget,
                http_client=http_client,
                timeout=integrations.payment_timeout,
            )
        return cls(
            form,
            StepNavigator(),
            payment_adapter=adapter,
            emitter=emitter or BookingConfirmationEmitter(integrations.email, http_client=http_client),
            currency=integrations.currency,
        )

    @property
    def step(self) -> BookingStep:
        return self.navigator.current

    @property
    def quote(self) -> Optional[Quote]:
        return self.form.quote()

    def recompute_quote(self) -> Optional[Quote]:
        """Price the current selections and count the quote in metrics."""
        quote = self.form.quote()
        if quote is not None:
            quotes_computed.labels(variant=quote.variant, frequency=self.form.selections.frequency).inc()
        return quote

    def advance(self) -> BookingStep:
        return self.navigator.advance(self.form.to_request())

    def back(self) -> BookingStep:
        return self.navigator.back()

    def payment_description(self) -> str:
        selections = self.form.selections
        return f"{selections.cleaning_type} cleaning ({frequency_label(selections.frequency)})"

    async def submit_payment(self) -> PaymentResult:
        if self.navigator.current != BookingStep.PAYMENT:
            raise NavigationError(f"Payment is submitted from the payment step, not {self.navigator.current}")
        if self.payment_adapter is None:
            raise NavigationError("No payment adapter attached to this booking")
        quote = self.recompute_quote()
        if quote is None:
            raise NavigationError("Cannot take payment without a quote")

        result = await self.payment_adapter.pay(
            quote_amount_cents(quote),
            self.currency,
            self.form.contact.email,
            self.payment_description(),
        )
        self.last_payment = result
        if result.succeeded:
            self.confirm(quote)
        return result

    def confirm(self, quote: Quote, booking_number: Optional[str] = None) -> str:
        """Move to CONFIRMATION and fire the confirmation email once."""
        self.navigator.complete_payment()
        self.booking_number = booking_number or generate_booking_number()
        bookings_confirmed.inc()
        logger.info(f"Booking {self.booking_number} confirmed, total {quote.first_visit_total}")

        task = asyncio.ensure_future(self.emitter.notify(
            self.booking_number,
            self.form.selections,
            quote,
            self.form.contact,
            self.form.address,
            self.form.schedule,
        ))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return self.booking_number

    async def drain_notifications(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def restart(self) -> BookingStep:
        self.form.reset()
        self.booking_number = None
        self.last_payment = None
        return self.navigator.reset()

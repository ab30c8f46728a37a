import pytest
from datetime import date, timedelta

from cleaning_booking.core.enums import BookingStep
from cleaning_booking.core.errors import NavigationError, StepValidationError
from cleaning_booking.services.navigator import StepNavigator, next_step, validate_step


class TestStepValidators:

    @pytest.mark.navigation
    def test_valid_booking_passes_every_input_step(self, valid_booking):
        for step in (BookingStep.SERVICE_DETAILS, BookingStep.DATE_TIME, BookingStep.ADDRESS):
            assert validate_step(step, valid_booking) == {}

    @pytest.mark.navigation
    def test_service_details_missing_fields(self, valid_booking):
        booking = valid_booking.model_copy(update={
            "contact": valid_booking.contact.model_copy(update={"name": "  ", "email": "not_an_email"}),
            "selections": valid_booking.selections.model_copy(update={"bathrooms": None}),
        })
        errors = validate_step(BookingStep.SERVICE_DETAILS, booking)

        assert set(errors) == {"name", "email", "bathrooms"}

    @pytest.mark.navigation
    def test_date_in_past_rejected(self, valid_booking):
        booking = valid_booking.model_copy(update={
            "schedule": valid_booking.schedule.model_copy(update={"date": date.today() - timedelta(days=1)}),
        })
        errors = validate_step(BookingStep.DATE_TIME, booking)

        assert errors == {"date": "Date cannot be in the past"}

    @pytest.mark.navigation
    def test_unknown_time_slot_rejected(self, valid_booking):
        booking = valid_booking.model_copy(update={
            "schedule": valid_booking.schedule.model_copy(update={"time_slot": "midnight"}),
        })
        assert "time_slot" in validate_step(BookingStep.DATE_TIME, booking)

    @pytest.mark.navigation
    def test_address_required_fields(self, valid_booking):
        booking = valid_booking.model_copy(update={
            "address": valid_booking.address.model_copy(update={"street": "", "postal_code": ""}),
        })
        assert set(validate_step(BookingStep.ADDRESS, booking)) == {"street", "postal_code"}

    def test_next_step(self):
        assert next_step(BookingStep.SERVICE_DETAILS) == BookingStep.DATE_TIME
        assert next_step(BookingStep.PAYMENT) == BookingStep.CONFIRMATION
        assert next_step(BookingStep.CONFIRMATION) is None


class TestStepNavigator:

    @pytest.mark.navigation
    def test_walks_forward_to_payment(self, valid_booking):
        nav = StepNavigator()
        assert nav.advance(valid_booking) == BookingStep.DATE_TIME
        assert nav.advance(valid_booking) == BookingStep.ADDRESS
        assert nav.advance(valid_booking) == BookingStep.PAYMENT
        assert nav.progress == 100

    @pytest.mark.navigation
    def test_missing_field_keeps_current_step(self, valid_booking):
        nav = StepNavigator()
        nav.advance(valid_booking)
        incomplete = valid_booking.model_copy(update={
            "schedule": valid_booking.schedule.model_copy(update={"time_slot": ""}),
        })

        with pytest.raises(StepValidationError) as exc:
            nav.advance(incomplete)

        assert exc.value.step == BookingStep.DATE_TIME
        assert "time_slot" in exc.value.errors
        assert nav.current == BookingStep.DATE_TIME

    @pytest.mark.navigation
    def test_cannot_advance_past_payment(self, valid_booking):
        nav = StepNavigator()
        for _ in range(3):
            nav.advance(valid_booking)

        with pytest.raises(StepValidationError):
            nav.advance(valid_booking)
        assert nav.current == BookingStep.PAYMENT

    @pytest.mark.navigation
    def test_back(self, valid_booking):
        nav = StepNavigator()
        with pytest.raises(NavigationError):
            nav.back()

        nav.advance(valid_booking)
        nav.advance(valid_booking)
        assert nav.back() == BookingStep.DATE_TIME
        assert nav.back() == BookingStep.SERVICE_DETAILS

    @pytest.mark.navigation
    def test_confirmation_only_from_payment(self, valid_booking):
        nav = StepNavigator()
        with pytest.raises(NavigationError):
            nav.complete_payment()

        for _ in range(3):
            nav.advance(valid_booking)
        assert nav.complete_payment() == BookingStep.CONFIRMATION
        assert nav.is_confirmed

    @pytest.mark.navigation
    def test_confirmation_is_terminal(self, valid_booking):
        nav = StepNavigator()
        for _ in range(3):
            nav.advance(valid_booking)
        nav.complete_payment()

        with pytest.raises(NavigationError):
            nav.advance(valid_booking)
        with pytest.raises(NavigationError):
            nav.back()

        assert nav.reset() == BookingStep.SERVICE_DETAILS

    @pytest.mark.navigation
    def test_clock_controls_past_date_check(self, valid_booking):
        nav = StepNavigator(clock=lambda: valid_booking.schedule.date + timedelta(days=1))
        nav.advance(valid_booking)

        with pytest.raises(StepValidationError):
            nav.advance(valid_booking)

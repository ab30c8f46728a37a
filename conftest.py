import pytest
import inspect
import httpx
import stripe
from datetime import date, timedelta
from types import SimpleNamespace
from httpx import AsyncClient, ASGITransport

from cleaning_booking.main import app, init_state
from cleaning_booking.core.config import EmailJSConfig, IntegrationConfig, StripeConfig
from cleaning_booking.schemas.booking import AddressInfo, BookingRequest, ContactInfo, ScheduleInfo
from cleaning_booking.schemas.quote import Selections
from cleaning_booking.services.pricing_tables import BOOKING_TABLE


class FakePaymentIntentResource:
    """Stands in for stripe.PaymentIntent; records every call."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.status = "succeeded"
        self.amount = 16272
        self.metadata = {}

    def _intent(self, intent_id="pi_test_123", **extra):
        return SimpleNamespace(
            id=intent_id,
            client_secret=f"{intent_id}_secret_abc",
            status=self.status,
            amount=extra.get("amount", self.amount),
            metadata=dict(self.metadata),
        )

    def create(self, **kwargs):
        self.calls.append(("create", kwargs))
        if self.error:
            raise self.error
        return self._intent(amount=kwargs.get("amount"))

    def retrieve(self, intent_id, **kwargs):
        self.calls.append(("retrieve", {"id": intent_id, **kwargs}))
        if self.error:
            raise self.error
        return self._intent(intent_id)

    def modify(self, intent_id, metadata=None, **kwargs):
        self.calls.append(("modify", {"id": intent_id, "metadata": metadata, **kwargs}))
        if self.error:
            raise self.error
        self.metadata.update(metadata or {})
        return self._intent(intent_id)

    def confirm(self, intent_id, **kwargs):
        self.calls.append(("confirm", {"id": intent_id, **kwargs}))
        if self.error:
            raise self.error
        return self._intent(intent_id)


class FakeStripe:
    def __init__(self):
        self.PaymentIntent = FakePaymentIntentResource()


class EmailRecorder:
    def __init__(self, status_code=200):
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text="OK")


@pytest.fixture
def fake_stripe():
    return FakeStripe()


@pytest.fixture
def card_declined():
    return stripe.CardError("Your card was declined.", param=None, code="card_declined")


@pytest.fixture
def stripe_config():
    return StripeConfig(secret_key="sk_test_123", publishable_key="pk_test_123", currency="cad")


@pytest.fixture
def email_config():
    return EmailJSConfig(
        service_id="service_test",
        template_id="template_test",
        user_id="user_test",
        api_url="https://emailjs.test/api/v1.0/email/send",
        timeout=5,
    )


@pytest.fixture
def email_recorder():
    return EmailRecorder()


@pytest.fixture
def email_client(email_recorder):
    return AsyncClient(transport=httpx.MockTransport(email_recorder))


@pytest.fixture
def integrations(stripe_config, email_config):
    return IntegrationConfig(
        payments=stripe_config,
        email=email_config,
        pricing_variant="booking",
        payment_intent_url="http://test/create-payment-intent",
        payment_timeout=5,
    )


@pytest.fixture
async def test_client(integrations, fake_stripe, email_client):
    init_state(app, integrations, stripe_sdk=fake_stripe, email_client=email_client)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    init_state(app)


@pytest.fixture
async def unconfigured_client():
    bare = IntegrationConfig(
        payments=None,
        email=None,
        pricing_variant="booking",
        payment_intent_url="http://test/create-payment-intent",
        payment_timeout=5,
    )
    init_state(app, bare)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    init_state(app)


@pytest.fixture
def booking_table():
    return BOOKING_TABLE


@pytest.fixture
def medium_selections():
    """medium home, 2 bedrooms, 1 bathroom, standard, one-time"""
    return Selections(home_size="medium", bedrooms=2, bathrooms=1)


@pytest.fixture
def service_date():
    return date.today() + timedelta(days=3)


@pytest.fixture
def valid_booking(medium_selections, service_date):
    return BookingRequest(
        contact=ContactInfo(name="Jane Doe", email="jane@example.com", phone="(555) 123-4567"),
        selections=medium_selections,
        schedule=ScheduleInfo(date=service_date, time_slot="8-11"),
        address=AddressInfo(street="12 King St", city="Toronto", postal_code="M5H 1A1"),
    )


@pytest.fixture
def valid_booking_data(valid_booking):
    return valid_booking.model_dump(mode="json")


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "navigation: marks tests related to booking steps"
    )
    config.addinivalue_line(
        "markers", "payments: marks tests related to payments"
    )
    config.addinivalue_line(
        "markers", "notifications: marks tests related to confirmation emails"
    )
    config.addinivalue_line(
        "markers", "api: marks HTTP endpoint tests"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)

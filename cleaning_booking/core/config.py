import logging
from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKERS = (
    "placeholder",
    "your_live_publishable_key_here",
    "your_actual_key_here",
    "changeme",
)


class Settings(BaseSettings):
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_PUBLISHABLE_KEY: Optional[str] = None
    PAYMENT_CURRENCY: str = "cad"
    PAYMENT_INTENT_URL: str = "http://localhost:8000/create-payment-intent"
    PAYMENT_TIMEOUT: int = 10

    EMAILJS_SERVICE_ID: Optional[str] = None
    EMAILJS_TEMPLATE_ID: Optional[str] = None
    EMAILJS_USER_ID: Optional[str] = None
    EMAILJS_API_URL: str = "https://api.emailjs.com/api/v1.0/email/send"
    EMAIL_TIMEOUT: int = 10

    PRICING_VARIANT: str = "booking"
    AVAILABLE_DAYS: int = 14

    API_TITLE: str = "Cleaning Booking Service"
    API_DESCRIPTION: str = "Quotes, booking steps and payment intents for home cleaning"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()


def is_configured(value: Optional[str]) -> bool:
    if not value or not value.strip():
        return False
    lowered = value.lower()
    return not any(marker in lowered for marker in PLACEHOLDER_MARKERS)


@dataclass(frozen=True)
class StripeConfig:
    secret_key: str
    publishable_key: Optional[str]
    currency: str


@dataclass(frozen=True)
class EmailJSConfig:
    service_id: str
    template_id: str
    user_id: str
    api_url: str
    timeout: int


@dataclass(frozen=True)
class IntegrationConfig:
    """Credentials checked once at startup. A missing integration is None."""
    payments: Optional[StripeConfig]
    email: Optional[EmailJSConfig]
    pricing_variant: str
    payment_intent_url: str
    payment_timeout: int

    @classmethod
    def from_settings(cls, s: Settings) -> "IntegrationConfig":
        payments = None
        if is_configured(s.STRIPE_SECRET_KEY):
            publishable = s.STRIPE_PUBLISHABLE_KEY if is_configured(s.STRIPE_PUBLISHABLE_KEY) else None
            payments = StripeConfig(
                secret_key=s.STRIPE_SECRET_KEY,
                publishable_key=publishable,
                currency=s.PAYMENT_CURRENCY.lower(),
            )
        else:
            logger.warning("Stripe secret key missing or placeholder - payments disabled")

        email = None
        email_fields = (s.EMAILJS_SERVICE_ID, s.EMAILJS_TEMPLATE_ID, s.EMAILJS_USER_ID)
        if all(is_configured(v) for v in email_fields):
            email = EmailJSConfig(
                service_id=s.EMAILJS_SERVICE_ID,
                template_id=s.EMAILJS_TEMPLATE_ID,
                user_id=s.EMAILJS_USER_ID,
                api_url=s.EMAILJS_API_URL,
                timeout=s.EMAIL_TIMEOUT,
            )
        else:
            logger.warning("EmailJS not configured - confirmation emails will be skipped")

        return cls(
            payments=payments,
            email=email,
            pricing_variant=s.PRICING_VARIANT,
            payment_intent_url=s.PAYMENT_INTENT_URL,
            payment_timeout=s.PAYMENT_TIMEOUT,
        )

    @property
    def currency(self) -> str:
        return self.payments.currency if self.payments else settings.PAYMENT_CURRENCY.lower()

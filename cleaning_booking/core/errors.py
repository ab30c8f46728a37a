"""
Exceptions raised by the booking services.
Routes in cleaning_booking.api translate them to HTTP responses.
"""
from typing import Dict, Optional


class BookingError(Exception):
    """Base exception for all booking errors."""
    pass


class MissingSelectionError(BookingError):
    """Raised when a quote is requested before home size, bedrooms and bathrooms are chosen."""

    def __init__(self, missing: list):
        self.missing = list(missing)
        super().__init__(f"Missing required selections: {', '.join(self.missing)}")


class UnknownPricingVariantError(BookingError):
    """Raised when no pricing table is registered under the requested name."""
    pass


class StepValidationError(BookingError):
    """Raised when advancing past a step whose required fields are missing or malformed."""

    def __init__(self, step, errors: Dict[str, str]):
        self.step = step
        self.errors = dict(errors)
        super().__init__(f"Step {step} is incomplete: {', '.join(sorted(self.errors))}")


class NavigationError(BookingError):
    """Raised on a transition the step sequence does not allow."""
    pass


class ConfigurationError(BookingError):
    """Raised when an external integration is missing credentials."""
    pass


class PaymentConfigurationError(ConfigurationError):
    """Payment provider is not configured or not reachable. Not retryable by the user."""
    pass


class PaymentProcessorError(BookingError):
    """Payment provider rejected the request (declined card, invalid parameters...)."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)

"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

quotes_computed = Counter(
    'quotes_computed_total',
    'Total quotes computed',
    ['variant', 'frequency'],
    registry=registry
)

step_validations = Counter(
    'booking_step_validations_total',
    'Booking step validation results',
    ['step', 'result'],
    registry=registry
)

payment_intents = Counter(
    'payment_intents_total',
    'Payment intent creation attempts',
    ['status'],
    registry=registry
)

bookings_confirmed = Counter(
    'bookings_confirmed_total',
    'Bookings confirmed after successful payment',
    registry=registry
)

confirmation_emails = Counter(
    'confirmation_emails_total',
    'Confirmation email dispatch attempts',
    ['status'],
    registry=registry
)

email_duration = Histogram(
    'confirmation_email_duration_seconds',
    'Confirmation email dispatch duration in seconds',
    ['status'],
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')

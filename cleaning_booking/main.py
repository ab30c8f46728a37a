from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from typing import Any, Optional
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
import httpx
from cleaning_booking.api import bookings, payments, quotes
from cleaning_booking.core.config import IntegrationConfig, settings
from cleaning_booking.core.metrics import request_count, request_duration, get_metrics_text
from cleaning_booking.services.notifications import BookingConfirmationEmitter
from cleaning_booking.services.payments import PaymentIntentService
from cleaning_booking.services.pricing_tables import get_pricing_table
import time
import logging

logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=500
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(time.time() - start_time)
            raise

        request_count.labels(
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code
        ).inc()
        request_duration.labels(
            method=request.method,
            endpoint=request.url.path
        ).observe(time.time() - start_time)
        return response


def init_state(
    app: FastAPI,
    integrations: Optional[IntegrationConfig] = None,
    stripe_sdk: Any = None,
    email_client: Optional[httpx.AsyncClient] = None,
) -> IntegrationConfig:
    """Validate configuration once and attach the service objects to app.state."""
    integrations = integrations or IntegrationConfig.from_settings(settings)
    # fail fast on a misspelled PRICING_VARIANT
    get_pricing_table(integrations.pricing_variant)
    app.state.integrations = integrations
    app.state.payment_service = PaymentIntentService(integrations.payments, stripe_sdk=stripe_sdk)
    app.state.emitter = BookingConfirmationEmitter(integrations.email, http_client=email_client)
    return integrations


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.LOG_LEVEL)
    logger.info("Application starting...")
    integrations = app.state.integrations
    logger.info(f"Pricing variant: {integrations.pricing_variant}")
    logger.info(f"Payments: {'configured' if integrations.payments else 'NOT configured'}")
    logger.info(f"Confirmation email: {'configured' if integrations.email else 'NOT configured'}")

    yield

    logger.info("Application shutting down...")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(quotes.router)
app.include_router(bookings.router)
app.include_router(payments.router)

init_state(app)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check(request: Request):
    integrations = request.app.state.integrations

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "pricing_variant": integrations.pricing_variant,
        "dependencies": {
            "payments": "configured" if integrations.payments else "not_configured",
            "email": "configured" if integrations.email else "not_configured"
        }
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }

import logging
import time
from typing import Optional

import httpx

from cleaning_booking.core.config import EmailJSConfig
from cleaning_booking.core.metrics import confirmation_emails, email_duration
from cleaning_booking.core.response_builders import build_email_params
from cleaning_booking.schemas.booking import AddressInfo, ContactInfo, ScheduleInfo
from cleaning_booking.schemas.quote import Quote, Selections

logger = logging.getLogger(__name__)


class BookingConfirmationEmitter:
    """Sends the booking confirmation through EmailJS.

    Best effort: a single attempt, failures are logged and never raised.
    """

    def __init__(self, config: Optional[EmailJSConfig], http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.http_client = http_client

    @property
    def enabled(self) -> bool:
        return self.config is not None

    async def _post(self, body: dict) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.post(self.config.api_url, json=body)
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            return await client.post(self.config.api_url, json=body)

    async def notify(
        self,
        booking_number: str,
        selections: Selections,
        quote: Quote,
        contact: ContactInfo,
        address: AddressInfo,
        schedule: ScheduleInfo,
    ) -> bool:
        if not self.enabled:
            logger.warning(f"EmailJS not configured - skipping confirmation for booking {booking_number}")
            confirmation_emails.labels(status="skipped").inc()
            return False

        body = {
            "service_id": self.config.service_id,
            "template_id": self.config.template_id,
            "user_id": self.config.user_id,
            "template_params": build_email_params(
                booking_number, selections, quote, contact, address, schedule
            ),
        }

        start_time = time.time()
        status = "failed"
        try:
            response = await self._post(body)
            if 200 <= response.status_code < 300:
                status = "sent"
                logger.info(f"Confirmation email sent for booking {booking_number}")
            else:
                logger.error(
                    f"Confirmation email failed for booking {booking_number}: "
                    f"Status {response.status_code}"
                )
        except httpx.TimeoutException:
            logger.error(f"Confirmation email timeout for booking {booking_number}")
        except Exception as e:
            logger.error(f"Failed to send confirmation email for booking {booking_number}: {e}")
        finally:
            confirmation_emails.labels(status=status).inc()
            email_duration.labels(status=status).observe(time.time() - start_time)

        return status == "sent"

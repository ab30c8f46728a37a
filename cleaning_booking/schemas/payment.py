from typing import Optional

from pydantic import BaseModel

from cleaning_booking.core.enums import PaymentOutcome


class PaymentIntentIn(BaseModel):
    amount: Optional[int] = None
    email: Optional[str] = None
    description: Optional[str] = None
    payment_method_id: Optional[str] = None
    currency: Optional[str] = None


class PaymentIntentOut(BaseModel):
    clientSecret: str
    paymentIntentId: str


class PaymentConfigOut(BaseModel):
    publishableKey: str
    currency: str


class PaymentResult(BaseModel):
    outcome: PaymentOutcome
    message: Optional[str] = None
    payment_intent_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == PaymentOutcome.SUCCEEDED

    @property
    def retryable(self) -> bool:
        return self.outcome == PaymentOutcome.DECLINED

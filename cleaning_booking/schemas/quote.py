from decimal import Decimal
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from cleaning_booking.core.enums import CleaningType, Frequency


class Selections(BaseModel):
    model_config = ConfigDict(frozen=True)

    home_size: Optional[str] = None
    # "5+" and "3+" on the intake form are submitted as 5 and 3
    bedrooms: Optional[int] = Field(None, ge=0, le=5)
    bathrooms: Optional[int] = Field(None, ge=0, le=5)
    half_baths: int = Field(0, ge=0, le=3)
    cleaning_type: str = CleaningType.STANDARD.value
    frequency: str = Frequency.ONE_TIME.value
    add_ons: FrozenSet[str] = frozenset()

    def missing_required(self) -> list:
        missing = []
        if not self.home_size:
            missing.append("home_size")
        if self.bedrooms is None:
            missing.append("bedrooms")
        if self.bathrooms is None:
            missing.append("bathrooms")
        return missing

    @property
    def is_one_time(self) -> bool:
        return self.frequency == Frequency.ONE_TIME.value


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant: str
    base_price: Decimal
    bedroom_cost: Decimal
    bathroom_cost: Decimal
    half_bath_cost: Decimal
    add_ons_cost: Decimal
    multiplier: Decimal
    discount_rate: Decimal
    tax_rate: Decimal
    subtotal: Decimal
    recurring_discount: Decimal
    discounted_subtotal: Decimal
    tax: Decimal
    first_visit_total: Decimal
    subsequent_visit_tax: Optional[Decimal] = None
    subsequent_visit_total: Optional[Decimal] = None
    savings_per_visit: Optional[Decimal] = None

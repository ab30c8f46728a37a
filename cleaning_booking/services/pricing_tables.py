"""Static price tables, one per calculator variant."""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from cleaning_booking.core.enums import (
    AddOn,
    AddOnsStage,
    CleaningType,
    Frequency,
    HomeSize,
    PricingCategory,
)
from cleaning_booking.core.errors import UnknownPricingVariantError

TAX_RATE = Decimal("0.13")


def _freeze(values: Mapping) -> Mapping[str, Decimal]:
    return MappingProxyType({str(k): Decimal(str(v)) for k, v in values.items()})


@dataclass(frozen=True, eq=False)
class PricingTable:
    name: str
    home_sizes: Mapping[str, Decimal]
    bedrooms: Mapping[str, Decimal] = field(default_factory=dict)
    bathrooms: Mapping[str, Decimal] = field(default_factory=dict)
    half_baths: Mapping[str, Decimal] = field(default_factory=dict)
    cleaning_types: Mapping[str, Decimal] = field(default_factory=dict)
    add_ons: Mapping[str, Decimal] = field(default_factory=dict)
    frequencies: Mapping[str, Decimal] = field(default_factory=dict)
    tax_rate: Decimal = TAX_RATE
    add_ons_stage: AddOnsStage = AddOnsStage.AFTER_MULTIPLIER

    def __post_init__(self):
        for attr in ("home_sizes", "bedrooms", "bathrooms", "half_baths",
                     "cleaning_types", "add_ons", "frequencies"):
            object.__setattr__(self, attr, _freeze(getattr(self, attr)))
        object.__setattr__(self, "tax_rate", Decimal(str(self.tax_rate)))
        self._validate()

    def _validate(self):
        for category in (self.home_sizes, self.bedrooms, self.bathrooms,
                         self.half_baths, self.add_ons):
            for key, price in category.items():
                if price < 0:
                    raise ValueError(f"{self.name}: negative price for {key}")
        for key, multiplier in self.cleaning_types.items():
            if multiplier < 1:
                raise ValueError(f"{self.name}: multiplier for {key} must be >= 1.0")
        for key, rate in self.frequencies.items():
            if not (0 <= rate < 1):
                raise ValueError(f"{self.name}: discount for {key} must be in [0, 1)")
        if self.tax_rate < 0:
            raise ValueError(f"{self.name}: negative tax rate")

    def _category(self, category) -> Mapping[str, Decimal]:
        return {
            PricingCategory.HOME_SIZE: self.home_sizes,
            PricingCategory.BEDROOMS: self.bedrooms,
            PricingCategory.BATHROOMS: self.bathrooms,
            PricingCategory.HALF_BATHS: self.half_baths,
            PricingCategory.CLEANING_TYPE: self.cleaning_types,
            PricingCategory.ADD_ONS: self.add_ons,
            PricingCategory.FREQUENCY: self.frequencies,
        }[PricingCategory(category)]

    def lookup(self, category, key) -> Optional[Decimal]:
        """Return the tabulated value, or None when the key is not priced."""
        if key is None:
            return None
        return self._category(category).get(str(key))

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "tax_rate": str(self.tax_rate),
            "add_ons_stage": self.add_ons_stage.value,
            **{
                category.value: {k: str(v) for k, v in self._category(category).items()}
                for category in PricingCategory
            },
        }


HOME_SIZE_PRICES = {
    HomeSize.SMALL: 89,
    HomeSize.MEDIUM: 109,
    HomeSize.LARGE: 129,
    HomeSize.XLARGE: 149,
    HomeSize.XXLARGE: 179,
}

FREQUENCY_DISCOUNTS = {
    Frequency.ONE_TIME: 0,
    Frequency.WEEKLY: "0.20",
    Frequency.BIWEEKLY: "0.15",
    Frequency.TRIWEEKLY: "0.12",
    Frequency.MONTHLY: "0.10",
}

BOOKING_TABLE = PricingTable(
    name="booking",
    home_sizes=HOME_SIZE_PRICES,
    bedrooms={1: 10, 2: 20, 3: 30, 4: 40, 5: 50},
    bathrooms={1: 15, 2: 30, 3: 45, 4: 60, 5: 75},
    half_baths={1: 8, 2: 16, 3: 24},
    cleaning_types={
        CleaningType.STANDARD: "1.0",
        CleaningType.DEEP: "1.5",
        CleaningType.MOVE_IN_OUT: "1.75",
        CleaningType.AIRBNB: "1.25",
        CleaningType.OFFICE: "1.2",
    },
    add_ons={
        AddOn.INSIDE_FRIDGE: 25,
        AddOn.INSIDE_OVEN: 25,
        AddOn.INSIDE_CABINETS: 30,
        AddOn.WINDOWS_UP_TO_6: 45,
        AddOn.WINDOWS_UP_TO_12: 80,
        AddOn.WINDOWS_UP_TO_24: 150,
        AddOn.CHANGE_BED_SHEETS: 10,
        AddOn.LOAD_DISHWASHER: 15,
        AddOn.SANITIZATION: 40,
        AddOn.BASEMENT: 40,
        AddOn.ADDITIONAL_KITCHEN: 50,
    },
    frequencies=FREQUENCY_DISCOUNTS,
)

# Quick calculator: flat base, linear room charges
QUICK_TABLE = PricingTable(
    name="quick",
    home_sizes={size: 120 for size in HomeSize},
    bedrooms={n: 15 * n for n in range(0, 6)},
    bathrooms={n: 20 * n for n in range(0, 6)},
    cleaning_types={
        CleaningType.STANDARD: "1.0",
        CleaningType.DEEP: "1.5",
        CleaningType.MOVE_IN_OUT: "1.75",
        CleaningType.AIRBNB: "1.25",
    },
    frequencies=FREQUENCY_DISCOUNTS,
)

# Long quote form: size-based price plus flat extras, no recurring discount
FULL_QUOTE_TABLE = PricingTable(
    name="full_quote",
    home_sizes=HOME_SIZE_PRICES,
    add_ons={
        AddOn.DEEP_CLEAN: 60,
        AddOn.MOVE_IN_OUT: 80,
        AddOn.INSIDE_FRIDGE: 25,
        AddOn.INSIDE_OVEN: 25,
        AddOn.INSIDE_CABINETS: 30,
    },
    frequencies={Frequency.ONE_TIME: 0},
)

PRICING_TABLES: Mapping[str, PricingTable] = MappingProxyType({
    BOOKING_TABLE.name: BOOKING_TABLE,
    QUICK_TABLE.name: QUICK_TABLE,
    FULL_QUOTE_TABLE.name: FULL_QUOTE_TABLE,
})


def get_pricing_table(name: str) -> PricingTable:
    try:
        return PRICING_TABLES[name]
    except KeyError:
        raise UnknownPricingVariantError(
            f"Unknown pricing variant '{name}'. Must be one of {sorted(PRICING_TABLES)}"
        ) from None

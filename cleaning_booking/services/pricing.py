from decimal import Decimal, ROUND_HALF_UP

from cleaning_booking.core.enums import AddOnsStage, PricingCategory
from cleaning_booking.core.errors import MissingSelectionError
from cleaning_booking.schemas.quote import Quote, Selections
from cleaning_booking.services.pricing_tables import PricingTable

CENT = Decimal("0.01")
ZERO = Decimal("0")
ONE = Decimal("1")


def round2(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_quote(selections: Selections, table: PricingTable) -> Quote:
    """Price a booking from scratch.

    Unpriced keys contribute nothing: an unknown home size or room count adds
    zero, an unknown cleaning type multiplies by 1 and an unknown frequency
    gives no discount. The first visit is never discounted.
    """
    missing = selections.missing_required()
    if missing:
        raise MissingSelectionError(missing)

    def lookup(category, key, default=ZERO) -> Decimal:
        value = table.lookup(category, key)
        return default if value is None else value

    base_price = lookup(PricingCategory.HOME_SIZE, selections.home_size)
    bedroom_cost = lookup(PricingCategory.BEDROOMS, selections.bedrooms)
    bathroom_cost = lookup(PricingCategory.BATHROOMS, selections.bathrooms)
    half_bath_cost = lookup(PricingCategory.HALF_BATHS, selections.half_baths)
    add_ons_cost = sum(
        (lookup(PricingCategory.ADD_ONS, add_on) for add_on in selections.add_ons),
        ZERO,
    )

    room_subtotal = base_price + bedroom_cost + bathroom_cost + half_bath_cost
    multiplier = lookup(PricingCategory.CLEANING_TYPE, selections.cleaning_type, ONE)

    if table.add_ons_stage == AddOnsStage.BEFORE_MULTIPLIER:
        subtotal = round2((room_subtotal + add_ons_cost) * multiplier)
    else:
        subtotal = round2(room_subtotal * multiplier + add_ons_cost)

    first_visit_price = subtotal

    # tables reject rates outside [0, 1)
    discount_rate = lookup(PricingCategory.FREQUENCY, selections.frequency)
    recurring_discount = round2(subtotal * discount_rate)
    discounted_subtotal = round2(subtotal - recurring_discount)

    first_visit_tax = round2(first_visit_price * table.tax_rate)
    subsequent_visit_tax = round2(discounted_subtotal * table.tax_rate)

    first_visit_total = round2(first_visit_price + first_visit_tax)
    subsequent_visit_total = round2(discounted_subtotal + subsequent_visit_tax)
    savings_per_visit = round2(first_visit_total - subsequent_visit_total)

    one_time = selections.is_one_time

    return Quote(
        variant=table.name,
        base_price=round2(base_price),
        bedroom_cost=round2(bedroom_cost),
        bathroom_cost=round2(bathroom_cost),
        half_bath_cost=round2(half_bath_cost),
        add_ons_cost=round2(add_ons_cost),
        multiplier=multiplier,
        discount_rate=discount_rate,
        tax_rate=table.tax_rate,
        subtotal=subtotal,
        recurring_discount=recurring_discount,
        discounted_subtotal=discounted_subtotal,
        tax=first_visit_tax,
        first_visit_total=first_visit_total,
        subsequent_visit_tax=None if one_time else subsequent_visit_tax,
        subsequent_visit_total=None if one_time else subsequent_visit_total,
        savings_per_visit=None if one_time else savings_per_visit,
    )


def quote_amount_cents(quote: Quote) -> int:
    """First-visit total in minor currency units, as charged at booking."""
    return int((quote.first_visit_total * 100).to_integral_value(rounding=ROUND_HALF_UP))

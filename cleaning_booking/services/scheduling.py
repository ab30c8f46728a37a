import random
import time
from datetime import date, timedelta
from typing import List, Optional

from cleaning_booking.core.enums import Frequency, TimeSlot

TIME_SLOT_LABELS = {
    TimeSlot.MORNING: "8:00 AM - 11:00 AM",
    TimeSlot.MIDDAY: "11:00 AM - 2:00 PM",
    TimeSlot.AFTERNOON: "2:00 PM - 5:00 PM",
    TimeSlot.EVENING: "5:00 PM - 8:00 PM",
}

FREQUENCY_LABELS = {
    Frequency.ONE_TIME: "One-Time",
    Frequency.WEEKLY: "Weekly",
    Frequency.BIWEEKLY: "Bi-Weekly",
    Frequency.TRIWEEKLY: "Tri-Weekly",
    Frequency.MONTHLY: "Monthly",
}

SUNDAY = 6


def next_available_dates(count: int = 14, today: Optional[date] = None) -> List[date]:
    """Bookable dates starting tomorrow. No cleanings on Sundays."""
    current = (today or date.today()) + timedelta(days=1)
    dates = []
    while len(dates) < count:
        if current.weekday() != SUNDAY:
            dates.append(current)
        current += timedelta(days=1)
    return dates


def time_slot_label(value: str) -> Optional[str]:
    try:
        return TIME_SLOT_LABELS[TimeSlot(value)]
    except ValueError:
        return None


def frequency_label(frequency: str) -> str:
    try:
        return FREQUENCY_LABELS[Frequency(frequency)]
    except ValueError:
        return FREQUENCY_LABELS[Frequency.ONE_TIME]


def format_service_date(value: date) -> str:
    # e.g. "Tuesday, October 20, 2026"
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def generate_booking_number() -> str:
    timestamp = str(int(time.time() * 1000))
    suffix = f"{random.randint(0, 999):03d}"
    return f"HM{timestamp[-6:]}{suffix}"

"""Built-in UAE seller dates: holidays, sales seasons and cultural events."""

import math
from datetime import date, timedelta
from typing import Optional

from seller_calendar.constants import BUILT_IN_SOURCE
from seller_calendar.models.event import SpecialDate

# Base year for the Islamic holiday approximation
BASE_YEAR = 2024

# The Islamic calendar moves back by approx. 10.875 days each Gregorian year
LUNAR_DRIFT_DAYS = -10.875

# Islamic holidays observed in the base year: name -> (month, day)
ISLAMIC_BASE_DATES = {
    "Ramadan Begins (approx.)": (3, 11),
    "Eid Al Fitr (approx.)": (4, 10),
    "Eid Al Adha (approx.)": (6, 16),
    "Islamic New Year (approx.)": (7, 7),
    "Prophet's Birthday (approx.)": (9, 15),
}

# (month, day, name, category), in display order
FIXED_DATES_BEFORE_LUNAR = [
    (1, 1, "New Year's Day", "Global Event"),
    (2, 14, "Valentine's Day", "Commercial"),
    (3, 8, "International Women's Day", "Global Event"),
    (3, 21, "Mother's Day (UAE)", "Commercial"),
]

FIXED_DATES_AFTER_LUNAR = [
    (5, 1, "Summer Heat Starts", "Season"),
    (6, 21, "Father's Day", "Commercial"),
    (7, 15, "Amazon Prime Day (approx.)", "E-commerce Sale"),
    (8, 28, "Emirati Women's Day", "National Holiday"),
    (8, 20, "Back to School Season", "Commercial"),
    (10, 31, "Diwali (Commercial)", "Commercial"),
    (11, 1, "Start of Cool Weather", "Season"),
    (11, 11, "Singles' Day Sale (11.11)", "E-commerce Sale"),
    (11, 29, "White/Yellow Friday Sale", "E-commerce Sale"),
    (12, 1, "Commemoration Day", "National Holiday"),
    (12, 1, "Winter Starts", "Season"),
    (12, 2, "UAE National Day", "National Holiday"),
    (12, 3, "UAE National Day Holiday", "National Holiday"),
    (12, 12, "12.12 Sale", "E-commerce Sale"),
    (12, 15, "Dubai Shopping Festival Starts", "Commercial"),
    # Chinese holidays for sellers sourcing from or selling to China
    (4, 4, "Qingming Festival (China)", "Cultural"),
    (5, 1, "Labour Day (China)", "Cultural"),
    (10, 1, "National Day (China)", "Cultural"),
]

# Lunisolar holidays cannot be approximated linearly; exact dates for known years
CHINESE_LUNAR_HOLIDAYS = {
    2024: [
        (date(2024, 2, 10), "Chinese New Year"),
        (date(2024, 6, 10), "Dragon Boat Festival (China)"),
        (date(2024, 9, 17), "Mid-Autumn Festival (China)"),
    ],
    2025: [
        (date(2025, 1, 29), "Chinese New Year"),
        (date(2025, 5, 31), "Dragon Boat Festival (China)"),
        (date(2025, 10, 6), "Mid-Autumn Festival (China)"),
    ],
    2026: [
        (date(2026, 2, 17), "Chinese New Year"),
        (date(2026, 6, 19), "Dragon Boat Festival (China)"),
        (date(2026, 9, 25), "Mid-Autumn Festival (China)"),
    ],
    2027: [
        (date(2027, 2, 6), "Chinese New Year"),
        (date(2027, 6, 9), "Dragon Boat Festival (China)"),
        (date(2027, 9, 15), "Mid-Autumn Festival (China)"),
    ],
}


def lunar_day_shift(year: int) -> int:
    """Days to shift a base-year Islamic date to reach ``year``.

    Rounds halves towards positive infinity.
    """
    return math.floor((year - BASE_YEAR) * LUNAR_DRIFT_DAYS + 0.5)


def approximate_islamic_date(month: int, day: int, year: int) -> Optional[date]:
    """Shift a base-year Islamic holiday into ``year``.

    Returns None when the shifted date falls outside the supported range.
    """
    try:
        return date(year, month, day) + timedelta(days=lunar_day_shift(year))
    except OverflowError:
        return None


def get_special_dates(year: int) -> list[SpecialDate]:
    """
    Return the built-in named dates for a year.

    Pure and deterministic. Islamic holidays are approximations; Chinese
    lunisolar holidays are only included for years in the lookup table.

    Args:
        year: Gregorian year (1-9999)

    Returns:
        List of SpecialDate with source "built-in"
    """
    entries: list[tuple[date, str, str]] = []

    for month, day, name, category in FIXED_DATES_BEFORE_LUNAR:
        entries.append((date(year, month, day), name, category))

    for name, (month, day) in ISLAMIC_BASE_DATES.items():
        shifted = approximate_islamic_date(month, day, year)
        if shifted is not None:
            entries.append((shifted, name, "Religious"))

    for month, day, name, category in FIXED_DATES_AFTER_LUNAR:
        entries.append((date(year, month, day), name, category))

    for holiday_date, name in CHINESE_LUNAR_HOLIDAYS.get(year, []):
        entries.append((holiday_date, name, "Cultural"))

    return [
        SpecialDate(date=d, name=name, category=category, source=BUILT_IN_SOURCE)
        for d, name, category in entries
    ]

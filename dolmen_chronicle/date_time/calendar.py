"""
Dolmenwood Calendar System.

Defines the 12 months and 4 seasons of the 352-day Dolmenwood year, and the
fixed moments (epoch and campaign default) the clock is measured from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dolmen_chronicle.date_time.model import GameDateTime


class DolmenwoodSeason(str, Enum):
    """The four seasons of the Dolmenwood year."""

    WINTER = "winter"  # Grimvold, Lymewald, Haggryme
    SPRING = "spring"  # Symswald, Harchment, Iggwyld
    SUMMER = "summer"  # Chysting, Lillipythe, Haelhold
    AUTUMN = "autumn"  # Reedwryme, Obthryme, Braghold


@dataclass(frozen=True)
class DolmenwoodMonth:
    """
    A month in the Dolmenwood calendar.

    Attributes:
        number: 1-12
        name: Month name (e.g., "Grimvold")
        season: The season this month belongs to
        days: Number of days (28-31)
    """

    number: int
    name: str
    season: DolmenwoodSeason
    days: int


# The 12 months of the Dolmenwood calendar
MONTHS: dict[int, DolmenwoodMonth] = {
    # WINTER
    1: DolmenwoodMonth(1, "Grimvold", DolmenwoodSeason.WINTER, 30),
    2: DolmenwoodMonth(2, "Lymewald", DolmenwoodSeason.WINTER, 28),
    3: DolmenwoodMonth(3, "Haggryme", DolmenwoodSeason.WINTER, 30),
    # SPRING
    4: DolmenwoodMonth(4, "Symswald", DolmenwoodSeason.SPRING, 29),
    5: DolmenwoodMonth(5, "Harchment", DolmenwoodSeason.SPRING, 29),
    6: DolmenwoodMonth(6, "Iggwyld", DolmenwoodSeason.SPRING, 30),
    # SUMMER
    7: DolmenwoodMonth(7, "Chysting", DolmenwoodSeason.SUMMER, 31),
    8: DolmenwoodMonth(8, "Lillipythe", DolmenwoodSeason.SUMMER, 29),
    9: DolmenwoodMonth(9, "Haelhold", DolmenwoodSeason.SUMMER, 28),
    # AUTUMN
    10: DolmenwoodMonth(10, "Reedwryme", DolmenwoodSeason.AUTUMN, 30),
    11: DolmenwoodMonth(11, "Obthryme", DolmenwoodSeason.AUTUMN, 28),
    12: DolmenwoodMonth(12, "Braghold", DolmenwoodSeason.AUTUMN, 30),
}

MONTHS_PER_YEAR = len(MONTHS)

# Lookup by name for convenience
MONTH_BY_NAME: dict[str, DolmenwoodMonth] = {m.name.lower(): m for m in MONTHS.values()}

# First moment from which all others are tracked (timestamp 0)
CALENDAR_EPOCH = GameDateTime(year=1, month=1, day=1, hour=0, turn=1, round=1)

# Campaign Book p14
DEFAULT_CURRENT_YEAR = 1089

DEFAULT_DATE_TIME = GameDateTime(year=DEFAULT_CURRENT_YEAR, month=1, day=1, hour=12, turn=1)


def days_in_month(month_number: int) -> int:
    """Get the number of days in a month (1-12)."""
    if month_number not in MONTHS:
        raise ValueError(f"Invalid month number: {month_number}")
    return MONTHS[month_number].days


def get_season_for_month(month_number: int) -> DolmenwoodSeason:
    """Get the season for a given month number (1-12)."""
    if month_number not in MONTHS:
        raise ValueError(f"Invalid month number: {month_number}")
    return MONTHS[month_number].season


def get_month_by_name(name: str) -> Optional[DolmenwoodMonth]:
    """Get a month by its name (case-insensitive)."""
    return MONTH_BY_NAME.get(name.lower())


def get_year_length() -> int:
    """Get the total number of days in the Dolmenwood year."""
    return sum(m.days for m in MONTHS.values())

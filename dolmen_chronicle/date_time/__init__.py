"""
Dolmenwood Calendar and Clock.

Converts between round-count timestamps and calendar date-times, and does
calendar-aware arithmetic over the 352-day Dolmenwood year.
"""

from dolmen_chronicle.date_time.model import (
    DateTimeUnit,
    GameDateTime,
    GameTimestamp,
    ROUNDS_PER_TURN,
    TURNS_PER_HOUR,
    HOURS_PER_DAY,
    DAYS_IN_YEAR,
    ROUNDS_PER_HOUR,
    ROUNDS_PER_DAY,
    ROUNDS_PER_YEAR,
)
from dolmen_chronicle.date_time.calendar import (
    DolmenwoodMonth,
    DolmenwoodSeason,
    MONTHS,
    MONTH_BY_NAME,
    CALENDAR_EPOCH,
    DEFAULT_CURRENT_YEAR,
    DEFAULT_DATE_TIME,
    days_in_month,
    get_month_by_name,
    get_season_for_month,
    get_year_length,
)
from dolmen_chronicle.date_time.date_math import (
    to_timestamp,
    from_timestamp,
    add,
    add_rounds,
    add_turns,
    add_hours,
    add_days,
    add_months,
    add_years,
    compare,
    difference,
)

__all__ = [
    # Model
    "DateTimeUnit",
    "GameDateTime",
    "GameTimestamp",
    "ROUNDS_PER_TURN",
    "TURNS_PER_HOUR",
    "HOURS_PER_DAY",
    "DAYS_IN_YEAR",
    "ROUNDS_PER_HOUR",
    "ROUNDS_PER_DAY",
    "ROUNDS_PER_YEAR",
    # Calendar
    "DolmenwoodMonth",
    "DolmenwoodSeason",
    "MONTHS",
    "MONTH_BY_NAME",
    "CALENDAR_EPOCH",
    "DEFAULT_CURRENT_YEAR",
    "DEFAULT_DATE_TIME",
    "days_in_month",
    "get_month_by_name",
    "get_season_for_month",
    "get_year_length",
    # Arithmetic
    "to_timestamp",
    "from_timestamp",
    "add",
    "add_rounds",
    "add_turns",
    "add_hours",
    "add_days",
    "add_months",
    "add_years",
    "compare",
    "difference",
]

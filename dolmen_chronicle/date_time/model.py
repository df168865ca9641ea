"""
Date and time types for Dolmenwood's timekeeping system.

A moment in the game world is stored as a GameTimestamp (rounds since the
calendar epoch) and shown to people as a GameDateTime.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Number of rounds since the calendar epoch (i.e. the "first moment" tracked)
GameTimestamp = int

# Time unit conversions per Dolmenwood rules
ROUNDS_PER_TURN = 60  # 1 Turn = 10 minutes, 1 Round = 10 seconds
TURNS_PER_HOUR = 6
HOURS_PER_DAY = 24
DAYS_IN_YEAR = 352

ROUNDS_PER_HOUR = ROUNDS_PER_TURN * TURNS_PER_HOUR
ROUNDS_PER_DAY = ROUNDS_PER_HOUR * HOURS_PER_DAY
ROUNDS_PER_YEAR = ROUNDS_PER_DAY * DAYS_IN_YEAR


class DateTimeUnit(str, Enum):
    """Units used to track dates and times in Dolmenwood."""

    ROUND = "round"  # 10 seconds
    TURN = "turn"  # 10 minutes
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"  # 28-31 days
    YEAR = "year"  # 352 days


@dataclass(frozen=True)
class GameDateTime:
    """
    A date and time in Dolmenwood's calendar.

    Attributes:
        year: Numeric year (1 or later)
        month: Month of the year (1-12)
        day: Day of the month (1-31, depending on the month)
        hour: Hour of the day (0-23)
        turn: Ten-minute turn of the hour (1-6)
        round: Ten-second round of the turn (1-60). Only used during
            encounters; None is stored as 1.
    """

    year: int
    month: int
    day: int
    hour: int
    turn: int
    round: Optional[int] = 1

    def __post_init__(self):
        if self.round is None:
            object.__setattr__(self, "round", 1)

    def validate(self) -> None:
        """
        Check every field is within its range.

        Raises:
            ValueError: Naming the first field found out of range
        """
        from dolmen_chronicle.date_time.calendar import MONTHS

        if self.year < 1:
            raise ValueError(f"Invalid year: {self.year}")
        if self.month not in MONTHS:
            raise ValueError(f"Invalid month number: {self.month}")
        if not 1 <= self.day <= MONTHS[self.month].days:
            raise ValueError(
                f"Invalid day {self.day} for {MONTHS[self.month].name} "
                f"(1-{MONTHS[self.month].days})"
            )
        if not 0 <= self.hour < HOURS_PER_DAY:
            raise ValueError(f"Invalid hour: {self.hour}")
        if not 1 <= self.turn <= TURNS_PER_HOUR:
            raise ValueError(f"Invalid turn: {self.turn}")
        if not 1 <= self.round <= ROUNDS_PER_TURN:
            raise ValueError(f"Invalid round: {self.round}")

    def __str__(self) -> str:
        from dolmen_chronicle.date_time.calendar import MONTHS

        month = MONTHS[self.month].name if self.month in MONTHS else f"Month {self.month}"
        return (
            f"{self.day} {month} {self.year}, {self.hour:02d}:{(self.turn - 1) * 10:02d} "
            f"(turn {self.turn}, round {self.round})"
        )

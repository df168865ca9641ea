"""
Date and time arithmetic for the Dolmenwood calendar.

Every moment is converted to a GameTimestamp (rounds since the calendar
epoch) for arithmetic and converted back for display. Month lengths vary,
so month and year calculations follow the calendar rather than dividing
round counts:

- add_months() walks the month table, adding the length of each month crossed
- difference() in months or years compares (year, month, day) and ignores
  time of day, with month-end clamping for months

Moving before the epoch is not an error: results clamp to CALENDAR_EPOCH.
"""

from typing import Union

from dolmen_chronicle.date_time.calendar import CALENDAR_EPOCH, MONTHS, MONTHS_PER_YEAR
from dolmen_chronicle.date_time.model import (
    DateTimeUnit,
    GameDateTime,
    GameTimestamp,
    ROUNDS_PER_DAY,
    ROUNDS_PER_HOUR,
    ROUNDS_PER_TURN,
    ROUNDS_PER_YEAR,
)


UnitLike = Union[DateTimeUnit, str]

# Round counts for the units with a fixed length
_FIXED_UNIT_ROUNDS: dict[DateTimeUnit, int] = {
    DateTimeUnit.ROUND: 1,
    DateTimeUnit.TURN: ROUNDS_PER_TURN,
    DateTimeUnit.HOUR: ROUNDS_PER_HOUR,
    DateTimeUnit.DAY: ROUNDS_PER_DAY,
    DateTimeUnit.YEAR: ROUNDS_PER_YEAR,
}


def _days_before_month(month: int) -> int:
    """Total days in the months from the start of the year up to `month` (exclusive)."""
    return sum(MONTHS[m].days for m in range(1, month))


def _truncate_div(value: int, divisor: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def to_timestamp(date_time: GameDateTime) -> GameTimestamp:
    """
    Convert a GameDateTime to the number of rounds since the calendar epoch.

    Exact inverse of from_timestamp(). A missing round counts as round 1.
    """
    year_rounds = (date_time.year - CALENDAR_EPOCH.year) * ROUNDS_PER_YEAR
    month_rounds = _days_before_month(date_time.month) * ROUNDS_PER_DAY
    day_rounds = (date_time.day - 1) * ROUNDS_PER_DAY
    hour_rounds = date_time.hour * ROUNDS_PER_HOUR
    turn_rounds = (date_time.turn - 1) * ROUNDS_PER_TURN
    rounds_in_turn = (date_time.round or 1) - 1

    return year_rounds + month_rounds + day_rounds + hour_rounds + turn_rounds + rounds_in_turn


def from_timestamp(timestamp: GameTimestamp) -> GameDateTime:
    """
    Convert a number of rounds since the calendar epoch to a GameDateTime.

    from_timestamp(0) is CALENDAR_EPOCH exactly; from_timestamp(1) is one
    round later, and so on.

    Raises:
        ValueError: If the timestamp is negative
    """
    if timestamp < 0:
        raise ValueError(f"Timestamp cannot be before the calendar epoch: {timestamp}")

    year = CALENDAR_EPOCH.year + timestamp // ROUNDS_PER_YEAR
    rounds_after_years = timestamp % ROUNDS_PER_YEAR

    # Month lengths vary, so walk the table instead of dividing
    month = 1
    day = 1 + rounds_after_years // ROUNDS_PER_DAY
    while day > MONTHS[month].days:
        day -= MONTHS[month].days
        month += 1
        if month > MONTHS_PER_YEAR:
            month = 1

    rounds_after_days = rounds_after_years % ROUNDS_PER_DAY
    hour = rounds_after_days // ROUNDS_PER_HOUR
    rounds_after_hours = rounds_after_days % ROUNDS_PER_HOUR

    return GameDateTime(
        year=year,
        month=month,
        day=day,
        hour=hour,
        turn=rounds_after_hours // ROUNDS_PER_TURN + 1,
        round=rounds_after_hours % ROUNDS_PER_TURN + 1,
    )


def add_rounds(date_time: GameDateTime, delta: int) -> GameDateTime:
    """Add rounds (may be negative). Clamps at the calendar epoch."""
    return from_timestamp(max(0, to_timestamp(date_time) + delta))


def add_turns(date_time: GameDateTime, delta: int) -> GameDateTime:
    """Add ten-minute turns (may be negative)."""
    return add_rounds(date_time, delta * ROUNDS_PER_TURN)


def add_hours(date_time: GameDateTime, delta: int) -> GameDateTime:
    """Add hours (may be negative)."""
    return add_rounds(date_time, delta * ROUNDS_PER_HOUR)


def add_days(date_time: GameDateTime, delta: int) -> GameDateTime:
    """Add days (may be negative)."""
    return add_rounds(date_time, delta * ROUNDS_PER_DAY)


def add_months(date_time: GameDateTime, delta: int) -> GameDateTime:
    """
    Add calendar months (may be negative).

    Each month moved forward adds the length of the month being left, starting
    with the current month; each month moved backward subtracts the length of
    the preceding month. Adding one month from a 28-day month therefore
    advances fewer days than from a 31-day month, and adding then subtracting
    a month does not always return to the same day.
    """
    rounds_delta = 0
    current_month = date_time.month

    if delta > 0:
        for _ in range(delta):
            rounds_delta += MONTHS[current_month].days * ROUNDS_PER_DAY
            current_month = current_month % MONTHS_PER_YEAR + 1
    elif delta < 0:
        for _ in range(-delta):
            current_month = (current_month - 2) % MONTHS_PER_YEAR + 1
            rounds_delta -= MONTHS[current_month].days * ROUNDS_PER_DAY

    return add_rounds(date_time, rounds_delta)


def add_years(date_time: GameDateTime, delta: int) -> GameDateTime:
    """Add 352-day years (may be negative)."""
    return add_rounds(date_time, delta * ROUNDS_PER_YEAR)


def add(date_time: GameDateTime, delta: int, unit: UnitLike) -> GameDateTime:
    """Add `delta` of any unit to a GameDateTime."""
    unit = DateTimeUnit(unit)
    if unit == DateTimeUnit.MONTH:
        return add_months(date_time, delta)
    return add_rounds(date_time, delta * _FIXED_UNIT_ROUNDS[unit])


def compare(a: GameDateTime, b: GameDateTime) -> int:
    """Return -1, 0 or 1 as `a` is before, equal to, or after `b`."""
    difference_rounds = to_timestamp(a) - to_timestamp(b)
    return (difference_rounds > 0) - (difference_rounds < 0)


def difference(from_: GameDateTime, to: GameDateTime, unit: UnitLike) -> int:
    """
    Compute the signed difference between two date-times in whole units.

    The result is positive if `to` is later than `from_`, negative if it is
    earlier, and 0 if they are fewer than one whole unit apart.

    - round, turn, hour, day: the difference in rounds divided by the unit
      length, truncated toward zero (-74 rounds is -1 turn).
    - month, year: calendar arithmetic on (year, month, day) only; time of day
      is ignored and partial months/years are discarded. For months, a start
      day past the end of the end month is satisfied by that month's last day
      (day 30 of Grimvold to day 28 of Lymewald is one month).

    Args:
        from_: The reference date-time
        to: The date-time compared against `from_`
        unit: Unit in which to express the result

    Returns:
        Signed number of whole units
    """
    unit = DateTimeUnit(unit)
    difference_rounds = to_timestamp(to) - to_timestamp(from_)

    if unit == DateTimeUnit.MONTH:
        direction = 1 if difference_rounds >= 0 else -1
        start, end = (from_, to) if direction > 0 else (to, from_)

        months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
        effective_start_day = min(start.day, MONTHS[end.month].days)
        if end.day < effective_start_day:
            months -= 1

        return months * direction

    if unit == DateTimeUnit.YEAR:
        direction = 1 if difference_rounds >= 0 else -1
        start, end = (from_, to) if direction > 0 else (to, from_)

        years = end.year - start.year
        if (end.month, end.day) < (start.month, start.day):
            years -= 1

        return years * direction

    return _truncate_div(difference_rounds, _FIXED_UNIT_ROUNDS[unit])

"""
Tests for the Dolmenwood calendar and the GameDateTime model.
"""

import pytest

from dolmen_chronicle.date_time import (
    DAYS_IN_YEAR,
    DEFAULT_CURRENT_YEAR,
    DEFAULT_DATE_TIME,
    DolmenwoodSeason,
    GameDateTime,
    MONTHS,
    days_in_month,
    get_month_by_name,
    get_season_for_month,
    get_year_length,
)


class TestCalendar:
    """Tests for the month table."""

    def test_twelve_months(self):
        assert sorted(MONTHS) == list(range(1, 13))

    def test_year_length(self):
        """Month lengths add up to the 352-day year."""
        assert get_year_length() == DAYS_IN_YEAR == 352

    @pytest.mark.parametrize(
        "month,days",
        [(1, 30), (2, 28), (3, 30), (4, 29), (5, 29), (6, 30),
         (7, 31), (8, 29), (9, 28), (10, 30), (11, 28), (12, 30)],
    )
    def test_month_lengths(self, month, days):
        assert days_in_month(month) == days

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            days_in_month(13)
        with pytest.raises(ValueError):
            get_season_for_month(0)

    def test_seasons(self):
        assert get_season_for_month(1) == DolmenwoodSeason.WINTER
        assert get_season_for_month(4) == DolmenwoodSeason.SPRING
        assert get_season_for_month(7) == DolmenwoodSeason.SUMMER
        assert get_season_for_month(12) == DolmenwoodSeason.AUTUMN

    def test_month_by_name(self):
        """Month names are case-insensitive."""
        assert get_month_by_name("chysting").number == 7
        assert get_month_by_name("LYMEWALD").days == 28
        assert get_month_by_name("Smarch") is None

    def test_default_date(self):
        assert DEFAULT_CURRENT_YEAR == 1089
        assert DEFAULT_DATE_TIME == GameDateTime(1089, 1, 1, 12, 1)


class TestGameDateTime:
    """Tests for GameDateTime validation and display."""

    def test_valid_date(self):
        GameDateTime(1089, 7, 31, 23, 6, round=60).validate()

    @pytest.mark.parametrize(
        "fields",
        [
            dict(year=0, month=1, day=1, hour=0, turn=1),
            dict(year=1089, month=13, day=1, hour=0, turn=1),
            dict(year=1089, month=2, day=29, hour=0, turn=1),
            dict(year=1089, month=1, day=1, hour=24, turn=1),
            dict(year=1089, month=1, day=1, hour=0, turn=7),
            dict(year=1089, month=1, day=1, hour=0, turn=1, round=61),
        ],
    )
    def test_invalid_fields(self, fields):
        with pytest.raises(ValueError):
            GameDateTime(**fields).validate()

    def test_str(self):
        date = GameDateTime(1089, 7, 31, 9, 3, round=12)
        assert str(date) == "31 Chysting 1089, 09:20 (turn 3, round 12)"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_DATE_TIME.day = 2

"""
Tests for add_months().

Adding a month adds the length of the month being left, so results depend on
where in the year the date falls.
"""

from dolmen_chronicle.date_time import GameDateTime, add_months


class TestAddMonthsForward:
    """Tests for adding months."""

    def test_without_year_rollover(self):
        result = add_months(GameDateTime(1, 3, 15, 0, 1), 3)
        assert (result.year, result.month) == (1, 6)

    def test_from_lymewald_keeps_day(self):
        """Lymewald is 28 days, so the day of the month is kept."""
        date = GameDateTime(1, 2, 15, 12, 3, round=30)
        assert add_months(date, 1) == GameDateTime(1, 3, 15, 12, 3, round=30)

    def test_year_rollover(self):
        result = add_months(GameDateTime(1, 10, 15, 0, 1), 5)
        assert (result.year, result.month) == (2, 3)

    def test_twelve_months_is_a_year(self):
        date = GameDateTime(3, 7, 20, 0, 1)
        assert add_months(date, 12) == GameDateTime(4, 7, 20, 0, 1)

    def test_end_of_month_overflows_shorter_month(self):
        """Grimvold 30 plus 30 days overshoots 28-day Lymewald."""
        assert add_months(GameDateTime(1, 1, 30, 0, 1), 1) == GameDateTime(1, 3, 2, 0, 1)

    def test_last_day_of_chysting(self, midsummer):
        """Chysting 31 plus 31 days overshoots 29-day Lillipythe into Haelhold."""
        result = add_months(midsummer, 1)
        assert (result.month, result.day) == (9, 2)

    def test_preserves_time_of_day(self):
        result = add_months(GameDateTime(1, 5, 15, 18, 4, round=35), 3)
        assert result.month == 8
        assert (result.hour, result.turn, result.round) == (18, 4, 35)

    def test_many_months(self):
        """50 months is 4 years and 2 months."""
        result = add_months(GameDateTime(1, 1, 1, 0, 1), 50)
        assert (result.year, result.month, result.day) == (5, 3, 1)

    def test_braghold_to_grimvold(self):
        assert add_months(GameDateTime(1089, 12, 1, 0, 1), 1) == GameDateTime(1090, 1, 1, 0, 1)

    def test_zero(self, midsummer):
        assert add_months(midsummer, 0) == midsummer


class TestAddMonthsBackward:
    """Tests for subtracting months."""

    def test_without_year_change(self):
        result = add_months(GameDateTime(1, 8, 15, 0, 1), -2)
        assert (result.year, result.month) == (1, 6)

    def test_year_rollback(self):
        result = add_months(GameDateTime(5, 2, 15, 0, 1), -5)
        assert (result.year, result.month) == (4, 9)

    def test_grimvold_wraps_to_braghold(self):
        """The month before Grimvold is Braghold (30 days) of the previous year."""
        assert add_months(GameDateTime(1089, 1, 1, 0, 1), -1) == GameDateTime(1088, 12, 1, 0, 1)

    def test_subtracts_preceding_month_length(self):
        """Haggryme 29 minus Lymewald's 28 days stays in Haggryme."""
        assert add_months(GameDateTime(1, 3, 29, 0, 1), -1) == GameDateTime(1, 3, 1, 0, 1)

    def test_forward_then_back_is_not_symmetric(self, midsummer):
        """Chysting 31 forward a month lands on Haelhold 2; back a month lands on Lillipythe 2."""
        forward = add_months(midsummer, 1)
        back = add_months(forward, -1)
        assert back == GameDateTime(1089, 8, 2, 12, 1)
        assert back != midsummer

    def test_clamps_at_epoch(self):
        assert add_months(GameDateTime(1, 2, 1, 0, 1), -3) == GameDateTime(1, 1, 1, 0, 1)

"""Tests for giftlist.dates pure functions."""

from datetime import date, datetime, timedelta

import pytest

from giftlist.dates import (
    date_to_iso,
    days_in_month,
    is_leap_year,
    is_valid_date,
    iso_to_date,
    matches_date_pattern,
)

YEAR = 2025


class TestIsValidDate:
    """Tests for is_valid_date."""

    def test_leap_day_in_leap_year(self) -> None:
        """Should accept 29 February in a leap year."""
        assert is_valid_date("29/02/2024", current_year=YEAR) is True

    def test_leap_day_in_non_leap_year(self) -> None:
        """Should reject 29 February in a non-leap year."""
        assert is_valid_date("29/02/2023", current_year=YEAR) is False

    @pytest.mark.parametrize("value", ["31/02/2024", "00/01/2020", "01/13/2020", "32/01/2020", "31/04/2020", "01/00/2020"])
    def test_impossible_dates(self, value: str) -> None:
        """Should reject days and months outside the calendar."""
        assert is_valid_date(value, current_year=YEAR) is False

    @pytest.mark.parametrize("value", ["1/1/2020", "01-01-2020", "2020-01-01", "01/01/20", " 01/01/2020", "aa/bb/cccc", ""])
    def test_wrong_format(self, value: str) -> None:
        """Should fail fast on anything but DD/MM/YYYY."""
        assert is_valid_date(value, current_year=YEAR) is False

    def test_year_bounds(self) -> None:
        """Should accept 1900 to the current year inclusive."""
        assert is_valid_date("01/01/1900", current_year=YEAR) is True
        assert is_valid_date("31/12/1899", current_year=YEAR) is False
        assert is_valid_date("31/12/2025", current_year=YEAR) is True
        assert is_valid_date("01/01/2026", current_year=YEAR) is False

    def test_current_year_is_injectable(self) -> None:
        """Should move the upper bound with current_year."""
        assert is_valid_date("15/06/2030", current_year=2029) is False
        assert is_valid_date("15/06/2030", current_year=2030) is True

    def test_defaults_to_wall_clock_year(self) -> None:
        """Should use today's year when current_year is not given."""
        this_year = datetime.now().year
        assert is_valid_date(f"01/01/{this_year}") is True
        assert is_valid_date(f"01/01/{this_year + 1}") is False

    def test_all_days_of_a_year(self) -> None:
        """Should accept exactly the days that exist."""
        day = date(2024, 1, 1)
        while day.year == 2024:
            assert is_valid_date(day.strftime("%d/%m/%Y"), current_year=YEAR) is True
            day += timedelta(days=1)


class TestDaysInMonth:
    """Tests for days_in_month and is_leap_year."""

    def test_february(self) -> None:
        """Should apply the Gregorian leap year rule."""
        assert days_in_month(2, 2024) == 29
        assert days_in_month(2, 2023) == 28
        assert days_in_month(2, 1900) == 28  # divisible by 100
        assert days_in_month(2, 2000) == 29  # divisible by 400

    def test_thirty_and_thirty_one_day_months(self) -> None:
        assert days_in_month(4, 2025) == 30
        assert days_in_month(12, 2025) == 31

    def test_invalid_month_raises_valueerror(self) -> None:
        with pytest.raises(ValueError):
            days_in_month(13, 2025)

    def test_is_leap_year(self) -> None:
        assert is_leap_year(2024) is True
        assert is_leap_year(2100) is False


class TestMatchesDatePattern:
    """Tests for matches_date_pattern."""

    def test_shape_only(self) -> None:
        """Should check shape, not calendar."""
        assert matches_date_pattern("99/99/9999") is True
        assert matches_date_pattern("9/9/9999") is False


class TestDateToIso:
    """Tests for date_to_iso."""

    def test_utc_midnight_with_milliseconds(self) -> None:
        """Should produce an ISO instant at UTC midnight."""
        assert date_to_iso("29/02/2024") == "2024-02-29T00:00:00.000Z"
        assert date_to_iso("05/01/1990") == "1990-01-05T00:00:00.000Z"

    def test_day_overflow_rolls_into_next_month(self) -> None:
        """Should roll 31 February over into March."""
        assert date_to_iso("31/02/2024") == "2024-03-02T00:00:00.000Z"

    def test_month_overflow_rolls_into_next_year(self) -> None:
        assert date_to_iso("01/13/2020") == "2021-01-01T00:00:00.000Z"

    def test_day_zero_is_last_day_of_previous_month(self) -> None:
        assert date_to_iso("00/01/2020") == "2019-12-31T00:00:00.000Z"

    def test_unparseable_raises_valueerror(self) -> None:
        """Should not hide garbage input."""
        with pytest.raises(ValueError):
            date_to_iso("not a date")


class TestIsoToDate:
    """Tests for iso_to_date."""

    def test_utc_instant(self) -> None:
        assert iso_to_date("2024-02-29T00:00:00.000Z") == "29/02/2024"

    def test_offset_is_converted_to_utc(self) -> None:
        """Should read the date in UTC, not in the given offset."""
        assert iso_to_date("2024-02-29T23:30:00-03:00") == "01/03/2024"

    def test_naive_is_read_as_utc(self) -> None:
        assert iso_to_date("1990-01-05T00:00:00") == "05/01/1990"

    def test_zero_pads_components(self) -> None:
        assert iso_to_date("0999-03-04T00:00:00.000Z") == "04/03/0999"

    def test_invalid_raises_valueerror(self) -> None:
        with pytest.raises(ValueError):
            iso_to_date("29/02/2024")


class TestRoundTrip:
    """Display -> ISO -> display for valid dates."""

    @pytest.mark.parametrize("year", [1900, 1999, 2000, 2024, 2025])
    def test_every_day_round_trips(self, year: int) -> None:
        """Should return the original display date."""
        day = date(year, 1, 1)
        while day.year == year:
            display = day.strftime("%d/%m/%Y")
            assert is_valid_date(display, current_year=YEAR)
            assert iso_to_date(date_to_iso(display)) == display
            day += timedelta(days=1)

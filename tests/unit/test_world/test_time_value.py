"""
Unit tests for TimeValue.
"""

import pytest
from settings import DAY_LENGTH_TICKS
from world.time.time_value import TimeValue, time_of_day


class TestTimeValueConstruction:
    """Tests for normalisation of ticks and fraction."""

    def test_negative_fraction_borrows_from_ticks(self):
        """Test that a negative fraction is carried into the tick count."""
        assert TimeValue(5, -0.25) == TimeValue(4, 0.75)

    def test_fraction_above_one_carries(self):
        """Test that a fraction of 1 or more is carried into the tick count."""
        value = TimeValue(5, 2.5)
        assert value.ticks == 7
        assert value.fraction == 0.5

    def test_from_float(self):
        """Test splitting a float into ticks and fraction."""
        assert TimeValue.from_float(12.75) == TimeValue(12, 0.75)
        assert TimeValue.from_float(-0.5) == TimeValue(-1, 0.5)
        assert float(TimeValue(3, 0.5)) == 3.5


class TestTimeValueArithmetic:
    """Tests for add, subtract and divide."""

    def test_add_carries_fraction(self):
        """Test that fractional parts add up and carry."""
        assert TimeValue(1, 0.5) + 0.75 == TimeValue(2, 0.25)
        assert TimeValue(1, 0.5).add(TimeValue(2, 0.5)) == TimeValue(4, 0.0)

    def test_subtract_borrows(self):
        """Test that subtraction borrows a tick for the fraction."""
        assert TimeValue(10, 0.25) - TimeValue(3, 0.5) == TimeValue(6, 0.75)

    def test_large_tick_counts_keep_fraction(self):
        """Test that huge tick counts don't swallow the fraction."""
        value = TimeValue(2_000_000_000, 0.25) + 0.5
        assert value == TimeValue(2_000_000_000, 0.75)

    def test_divide(self):
        """Test dividing two times."""
        assert TimeValue(3).divide(TimeValue(6)) == 0.5
        assert TimeValue(1, 0.5).divide(3) == 0.5


class TestTimeValueDay:
    """Tests for time-of-day helpers."""

    def test_time_of_day(self):
        """Test reducing to time of day keeps the fraction."""
        value = TimeValue(DAY_LENGTH_TICKS * 3 + 100, 0.5)
        assert value.time_of_day() == TimeValue(100, 0.5)

    def test_time_of_day_helper_on_negative_ticks(self):
        """Test that the module helper wraps negatives into the day."""
        assert time_of_day(-1) == DAY_LENGTH_TICKS - 1

    def test_day(self):
        """Test the whole-day count."""
        assert TimeValue(DAY_LENGTH_TICKS * 2).day() == 2
        assert TimeValue(DAY_LENGTH_TICKS * 2 - 1, 0.9).day() == 1

    def test_ordering(self):
        """Test lexicographic comparison on (ticks, fraction)."""
        assert TimeValue(1, 0.9) < TimeValue(2, 0.0)
        assert TimeValue(2, 0.1) > TimeValue(2, 0.0)
        assert TimeValue(2, 0.5) == TimeValue(2, 0.5)


class TestBetweenMod:
    """Tests for the modular interval check."""

    def test_plain_interval_is_half_open(self):
        """Test that [start, end) includes start and excludes end."""
        assert TimeValue(0).between_mod(0, 12000) is True
        assert TimeValue(100).between_mod(0, 12000) is True
        assert TimeValue(12000).between_mod(0, 12000) is False

    def test_wrapping_interval(self):
        """Test an interval that wraps through the end of the day."""
        assert TimeValue(23600).between_mod(23500, 12500) is True
        assert TimeValue(100).between_mod(23500, 12500) is True
        assert TimeValue(13000).between_mod(23500, 12500) is False

    def test_reduces_modulo_day(self):
        """Test that absolute times are compared by time of day."""
        assert TimeValue(DAY_LENGTH_TICKS * 4 + 100).between_mod(0, 12000) is True
        assert TimeValue(DAY_LENGTH_TICKS * 4 + 13000).between_mod(0, 12000) is False

    def test_empty_interval(self):
        """Test that an interval with equal ends contains nothing."""
        assert TimeValue(500).between_mod(500, 500) is False


class TestCrossedMorning:
    """Tests for the start-of-day check."""

    @pytest.mark.parametrize(
        "old, new, expected",
        [
            (TimeValue(23999, 0.5), TimeValue(24000, 0.1), True),
            (TimeValue(100), TimeValue(23999), False),
            (TimeValue(23000), TimeValue(24000), True),
            (TimeValue(48000), TimeValue(48001), False),
        ],
    )
    def test_crossed_morning(self, old, new, expected):
        """Test detection of a new day."""
        assert TimeValue.crossed_morning(old, new) is expected

"""Tests for duration, byte and rate formatting."""

import pytest
from datetime import timedelta

from tickprogress.utils.formatting import (
    format_bytes,
    format_duration,
    format_fixed,
    format_rate,
    whole_seconds
)


class TestFormatDuration:
    """Test duration formatting."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0.0s"),
        (59, "59.0s"),
        (60, "1m00s"),
        (244, "4m04s"),
        (3599, "59m59s"),
        (3600, "1h00m"),
        (8542, "2h22m"),
        (86399, "23h59m"),
        (86400, "1d00h"),
        (135091, "1d13h"),
    ])
    def test_unit_boundaries(self, seconds, expected):
        """Durations use the two most significant units."""
        assert format_duration(timedelta(seconds=seconds)) == expected

    def test_fractions_are_dropped(self):
        """Only whole seconds are shown."""
        assert format_duration(timedelta(milliseconds=1999)) == "1.0s"

    def test_whole_seconds(self):
        """whole_seconds floors to the second."""
        assert whole_seconds(timedelta(milliseconds=61500)) == 61


class TestFormatBytes:
    """Test byte formatting."""

    @pytest.mark.parametrize("ticks,expected", [
        (0, "0 B"),
        (999, "999 B"),
        (1000, "1.00kB"),
        (1_500_000, "1.50MB"),
        (10 ** 9, "1.00GB"),
        (10 ** 12, "1.00TB"),
        (10 ** 15, "1.00PB"),
        (10 ** 18, "1000.00PB"),
    ])
    def test_decimal_units(self, ticks, expected):
        """Sizes scale by powers of 1000."""
        assert format_bytes(ticks) == expected

    def test_undefined(self):
        """Undefined progress renders a placeholder."""
        assert format_bytes(123, undefined=True) == " ~ B"


class TestFormatRate:
    """Test rate formatting."""

    @pytest.mark.parametrize("rate,expected", [
        (0.0, "0.0 B/s"),
        (250.0, "250.0 B/s"),
        (1000.0, "1.0kB/s"),
        (200200.0, "200.2kB/s"),
        (166833500.0, "166.8MB/s"),
        (1e12, "1.0TB/s"),
        (1.111e17, "111.1PB/s"),
    ])
    def test_decimal_units(self, rate, expected):
        """Rates scale by powers of 1000 with one decimal."""
        assert format_rate(rate) == expected


class TestFormatFixed:
    """Test fixed-point rounding."""

    @pytest.mark.parametrize("value,digits,expected", [
        (12.35, 1, "12.4"),
        (12.34, 1, "12.3"),
        (1.005, 2, "1.01"),
        (2.675, 2, "2.68"),
        (0.0, 1, "0.0"),
        (1000.0, 2, "1000.00"),
        (250, 1, "250.0"),
    ])
    def test_rounds_half_up(self, value, digits, expected):
        """Ties round up on the shortest decimal form."""
        assert format_fixed(value, digits) == expected

    def test_byte_ties(self):
        """Byte sizes round ties up."""
        assert format_bytes(1005) == "1.01kB"
        assert format_bytes(2_675_000) == "2.68MB"

    def test_rate_ties(self):
        """Rates round ties up."""
        assert format_rate(12.25) == "12.3 B/s"
        assert format_rate(1250.0) == "1.3kB/s"

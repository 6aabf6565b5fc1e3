"""Unit tests for compact number formatting."""
from __future__ import annotations

import pytest

from free_collateral.formatting import compact_number, format_usd


class TestCompactNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (0.5, "0.5"),
            (1.234, "1.2"),
            (0.0123, "0.012"),
            (2.5, "2.5"),
            (9.95, "10"),
            (12.5, "13"),
            (123.456, "123"),
            (999, "999"),
        ],
    )
    def test_below_thousand(self, value: float, expected: str) -> None:
        assert compact_number(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1000, "1K"),
            (1234, "1.2K"),
            (1500, "1.5K"),
            (1050, "1.1K"),
            (1950, "2K"),
            (12345, "12K"),
            (123456, "123K"),
            (1_000_000, "1M"),
            (1.2e9, "1.2B"),
            (1e12, "1T"),
        ],
    )
    def test_suffixes(self, value: float, expected: str) -> None:
        assert compact_number(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(999.5, "1K"), (99999, "100K"), (999999, "1M")],
    )
    def test_rounding_promotes_suffix(self, value: float, expected: str) -> None:
        assert compact_number(value) == expected

    def test_beyond_trillions_stays_in_t(self) -> None:
        assert compact_number(1.5e15) == "1500T"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(-500, "-500"), (-1500, "-1.5K"), (-2000, "-2K"), (-0.004, "-0.004")],
    )
    def test_negative(self, value: float, expected: str) -> None:
        assert compact_number(value) == expected


class TestFormatUsd:
    def test_appends_unit(self) -> None:
        assert format_usd(1234) == "1.2K USD"

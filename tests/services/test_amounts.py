import random
from decimal import Decimal

import pytest

from eth_bridge.services.amounts import (
    format_ether,
    get_random_amount,
    parse_decimals,
    parse_ether,
    parse_max_amount,
    parse_positive_amount,
)


class TestRandomAmount:
    def test_values_stay_on_grid_and_in_range(self):
        values = [get_random_amount("0.001", "0.002", 4) for _ in range(1000)]

        for value in values:
            assert Decimal("0.001") <= Decimal(value) <= Decimal("0.002")
            assert len(value.split(".")[1]) == 4
        assert len(set(values)) > 1

    def test_bounds_are_floored_onto_grid(self):
        rng = random.Random(7)
        values = {get_random_amount("0.0015", "0.0029", 3, rng=rng) for _ in range(200)}

        assert values <= {"0.001", "0.002"}

    def test_equal_bounds_return_that_value(self):
        assert get_random_amount("0.5", "0.5", 2) == "0.50"

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            get_random_amount("2", "1", 2)


class TestEtherConversion:
    def test_parse_ether(self):
        assert parse_ether("0.00005") == 50_000_000_000_000
        assert parse_ether("1") == 10**18

    def test_parse_ether_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_ether("abc")

    @pytest.mark.parametrize(
        "wei,expected",
        [
            (10**18, "1.0"),
            (0, "0.0"),
            ("10000000000000000", "0.01"),
            ("0x38d7ea4c68000", "0.001"),
            (123, "0.000000000000000123"),
        ],
    )
    def test_format_ether(self, wei, expected):
        assert format_ether(wei) == expected


class TestPromptValidators:
    @pytest.mark.parametrize("value", ["0", "-1", "abc", "", "nan"])
    def test_invalid_positive_amount(self, value):
        assert parse_positive_amount(value) == "Please enter a valid positive number."

    def test_valid_positive_amount(self):
        assert parse_positive_amount("0.00005") is None

    def test_max_must_exceed_min(self):
        assert parse_max_amount("0.1", "0.1") == "Maximum amount must be greater than minimum amount."
        assert parse_max_amount("0.2", "0.1") is None

    @pytest.mark.parametrize("value", ["0", "19", "x"])
    def test_invalid_decimals(self, value):
        assert parse_decimals(value) == "Please enter a number between 1 and 18."

    @pytest.mark.parametrize("value", ["1", "5", "18"])
    def test_valid_decimals(self, value):
        assert parse_decimals(value) is None

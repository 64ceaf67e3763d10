"""Amount parsing, formatting and randomisation for ETH values."""

from __future__ import annotations

import random
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Optional, Union

from eth_utils import from_wei, to_wei

MIN_DECIMALS = 1
MAX_DECIMALS = 18

Number = Union[str, int, float, Decimal]


def _to_decimal(value: Number) -> Decimal:
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def parse_ether(amount: Number) -> int:
    """ETH amount → wei."""
    return int(to_wei(_to_decimal(amount), "ether"))


def format_ether(wei: Union[int, str]) -> str:
    """Wei (int, decimal or hex string) → plain decimal ETH string."""
    if isinstance(wei, str):
        wei = int(wei, 16) if wei.startswith("0x") else int(wei)
    value = Decimal(from_wei(wei, "ether"))
    text = format(value.normalize(), "f")
    return text if "." in text else f"{text}.0"


def parse_positive_amount(value: str) -> Optional[str]:
    """Return an error message for prompts, or ``None`` when valid."""
    try:
        amount = _to_decimal(value)
    except ValueError:
        return "Please enter a valid positive number."
    if amount <= 0:
        return "Please enter a valid positive number."
    return None


def parse_max_amount(value: str, minimum: str) -> Optional[str]:
    error = parse_positive_amount(value)
    if error:
        return error
    if _to_decimal(value) <= _to_decimal(minimum):
        return "Maximum amount must be greater than minimum amount."
    return None


def parse_decimals(value: str) -> Optional[str]:
    try:
        decimals = int(value.strip())
    except ValueError:
        return f"Please enter a number between {MIN_DECIMALS} and {MAX_DECIMALS}."
    if decimals < MIN_DECIMALS or decimals > MAX_DECIMALS:
        return f"Please enter a number between {MIN_DECIMALS} and {MAX_DECIMALS}."
    return None


def get_random_amount(
    minimum: Number,
    maximum: Number,
    decimals: int,
    *,
    rng: Optional[random.Random] = None,
) -> str:
    """Uniform random amount on the ``10**-decimals`` grid between the bounds.

    Both bounds are floored onto the grid first; the result always carries
    exactly ``decimals`` fractional digits.
    """
    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    rng = rng or random.SystemRandom()
    multiplier = Decimal(10) ** decimals
    low = int((_to_decimal(minimum) * multiplier).to_integral_value(rounding=ROUND_FLOOR))
    high = int((_to_decimal(maximum) * multiplier).to_integral_value(rounding=ROUND_FLOOR))
    if high < low:
        raise ValueError("maximum must not be below minimum")
    value = Decimal(rng.randint(low, high)) / multiplier
    return f"{value:.{decimals}f}"

"""Fixed-point base-unit parsing and conversion helpers."""

from __future__ import annotations

from fractions import Fraction
import re

_DOMAIN_BASE_UNITS_PATTERN = re.compile(r"^[0-9]+$")
_DOMAIN_MAX_DECIMALS = 255


def domain_parse_base_units(value: object) -> int:
    """Parse one ledger amount string into an unsigned integer.

    Args:
        value: Base-10 integer string as reported by the ledger.

    Returns:
        int: Parsed non-negative base-unit amount.

    Raises:
        ValueError: Raised when value is not a plain unsigned base-10 integer.
    """

    if isinstance(value, bool):
        raise ValueError(f"invalid base-unit amount: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"invalid base-unit amount: {value!r}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"invalid base-unit amount: {value!r}")

    normalized_value = value.strip()
    if not _DOMAIN_BASE_UNITS_PATTERN.match(normalized_value):
        raise ValueError(f"invalid base-unit amount: {value!r}")
    return int(normalized_value)


def domain_validate_decimals(decimals: int) -> int:
    """Validate one token decimals exponent.

    Args:
        decimals: Candidate exponent.

    Returns:
        int: Validated exponent.

    Raises:
        ValueError: Raised when exponent is outside the ERC-20 `uint8` range.
    """

    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ValueError(f"decimals must be an integer, got {decimals!r}")
    if decimals < 0 or decimals > _DOMAIN_MAX_DECIMALS:
        raise ValueError(f"decimals must be within 0..{_DOMAIN_MAX_DECIMALS}, got {decimals}")
    return decimals


def domain_units_to_decimal(base_units: int, decimals: int) -> float:
    """Convert signed base units into a decimal token amount.

    The quotient is built as an exact rational and rounded to float once, so
    large balances never lose precision before the division.

    Args:
        base_units: Signed integer amount in base units.
        decimals: Token decimals exponent.

    Returns:
        float: `base_units / 10**decimals` correctly rounded to double precision.

    Raises:
        ValueError: Raised when decimals is invalid.
    """

    domain_validate_decimals(decimals)
    return float(Fraction(int(base_units), 10**decimals))


__all__ = ["domain_parse_base_units", "domain_units_to_decimal", "domain_validate_decimals"]

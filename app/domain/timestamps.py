"""Ledger epoch normalization helpers.

The ledger reports `created` either in seconds or in milliseconds. Every date
derived from a raw ledger event goes through `domain_normalize_epoch_ms` so the
heuristic is applied identically across cashflow building and reporting.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_DOMAIN_MILLISECONDS_THRESHOLD = 10**12
_DOMAIN_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def domain_normalize_epoch_ms(created: int | float) -> int:
    """Normalize one raw ledger epoch value into milliseconds.

    Args:
        created: Raw epoch value in seconds or milliseconds.

    Returns:
        int: Epoch milliseconds.

    Raises:
        ValueError: Raised when value is negative or not numeric.
    """

    if isinstance(created, bool) or not isinstance(created, (int, float)):
        raise ValueError(f"created must be numeric, got {created!r}")
    if created < 0:
        raise ValueError(f"created must be >= 0, got {created}")
    if created > _DOMAIN_MILLISECONDS_THRESHOLD:
        return int(created)
    return int(created * 1000)


def domain_epoch_to_datetime(created: int | float) -> datetime:
    """Convert one raw ledger epoch value into an offset-aware UTC datetime.

    Args:
        created: Raw epoch value in seconds or milliseconds.

    Returns:
        datetime: UTC datetime for the event.

    Raises:
        ValueError: Raised when value is negative or not numeric.
    """

    epoch_ms = domain_normalize_epoch_ms(created)
    return _DOMAIN_UNIX_EPOCH + timedelta(milliseconds=epoch_ms)


__all__ = ["domain_epoch_to_datetime", "domain_normalize_epoch_ms"]

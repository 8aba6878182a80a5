"""Tests for XIRR solving on known-rate and degenerate cashflow series."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import math

import pytest

from app.domain import CashflowEntry, DecimalCashflow
from app.ledger import xirr_apy, xirr_newton, xirr_npv, xirr_solve, xirr_year_fraction

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
ONE_YEAR = timedelta(days=365.2425)


@pytest.mark.parametrize(
    ("expected_rate", "terminal_value"),
    [(0.05, 1050), (0.2, 1200), (1.0, 2000), (-0.3, 700)],
)
def test_ledger_xirr_recovers_known_one_year_rate(expected_rate: float, terminal_value: int) -> None:
    """Recover the rate of a one-year deposit and terminal valuation within 1e-6.

    Args:
        expected_rate: Rate implied by the terminal value.
        terminal_value: Value after exactly one year.

    Returns:
        None: Assertions validate solver accuracy.

    Raises:
        AssertionError: Raised when the solver misses the rate.
    """

    cashflows = [CashflowEntry(occurred_at=START, amount_base_units=-1000)]

    rate = xirr_solve(cashflows, START + ONE_YEAR, terminal_value, decimals=0)

    assert rate is not None
    assert abs(rate - expected_rate) < 1e-6


def test_ledger_xirr_two_year_series_with_intermediate_withdrawal() -> None:
    """Solve a multi-flow series whose cashflows are generated from a 10% rate.

    Returns:
        None: Assertions validate multi-flow solving.

    Raises:
        AssertionError: Raised when the solver misses the rate.
    """

    rate = 0.1
    cashflows = [
        CashflowEntry(occurred_at=START, amount_base_units=-1_000 * 10**6),
        CashflowEntry(occurred_at=START + ONE_YEAR, amount_base_units=500 * 10**6),
    ]
    remaining = (1_000 * (1 + rate) - 500) * (1 + rate)

    solved = xirr_apy(cashflows, START + 2 * ONE_YEAR, int(round(remaining * 10**6)), decimals=6)

    assert abs(solved - rate) < 1e-6


def test_ledger_xirr_returns_zero_without_both_flow_signs() -> None:
    """Return exactly 0.0 for series lacking an outflow or an inflow.

    Returns:
        None: Assertions validate degenerate handling.

    Raises:
        AssertionError: Raised when degenerate series produce a rate.
    """

    deposits_only = [CashflowEntry(occurred_at=START, amount_base_units=-1000)]
    withdrawals_only = [CashflowEntry(occurred_at=START, amount_base_units=1000)]

    assert xirr_solve(deposits_only, START + ONE_YEAR, 0, decimals=0) == 0.0
    assert xirr_solve(withdrawals_only, START + ONE_YEAR, 500, decimals=0) == 0.0
    assert xirr_apy([], START + ONE_YEAR, 500, decimals=0) == 0.0


def test_ledger_xirr_break_even_series_solves_to_zero() -> None:
    """Solve a deposit fully returned one year later to a zero rate.

    Returns:
        None: Assertions validate break-even behavior.

    Raises:
        AssertionError: Raised when break-even rate is non-zero.
    """

    cashflows = [CashflowEntry(occurred_at=START, amount_base_units=-1000)]

    assert abs(xirr_apy(cashflows, START + ONE_YEAR, 1000, decimals=0)) < 1e-6


def test_ledger_xirr_npv_guards_invalid_rates() -> None:
    """Return NaN when the discount base is not positive.

    Returns:
        None: Assertions validate NPV guard.

    Raises:
        AssertionError: Raised when invalid rates are evaluated.
    """

    flows = [
        DecimalCashflow(occurred_at=START, amount=-1.0),
        DecimalCashflow(occurred_at=START + ONE_YEAR, amount=2.0),
    ]

    assert math.isnan(xirr_npv(-1.0, flows))
    assert math.isnan(xirr_npv(-2.5, flows))
    assert xirr_npv(1.0, flows) == pytest.approx(0.0)
    assert xirr_newton([]) is None
    assert xirr_year_fraction(START, START + ONE_YEAR) == pytest.approx(1.0)

"""Annualized internal rate of return for irregular cashflow series.

The solver is a plain Newton-Raphson iteration with a forward-difference
derivative. It has no bracketing and no multi-start fallback: series with
several sign changes may converge to a non-principal root or not at all, in
which case the caller reports a zero rate.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
import math
from typing import Final

from app.domain import CashflowEntry, DecimalCashflow, domain_units_to_decimal

XIRR_DAYS_PER_YEAR: Final[float] = 365.2425
XIRR_DEFAULT_GUESS: Final[float] = 0.2
XIRR_MAX_ITERATIONS: Final[int] = 100
XIRR_TOLERANCE: Final[float] = 1e-7
XIRR_DERIVATIVE_STEP: Final[float] = 1e-6
XIRR_MIN_DERIVATIVE: Final[float] = 1e-12

_SECONDS_PER_YEAR: Final[float] = XIRR_DAYS_PER_YEAR * 24 * 60 * 60


def xirr_year_fraction(start: datetime, end: datetime) -> float:
    """Return signed years between two datetimes using a 365.2425-day year."""

    return (end - start).total_seconds() / _SECONDS_PER_YEAR


def xirr_npv(rate: float, flows: Sequence[DecimalCashflow]) -> float:
    """Return net present value of flows discounted to the first flow's date.

    Args:
        rate: Candidate annual rate.
        flows: Date-ordered cashflows.

    Returns:
        float: NPV, NaN when `1 + rate` is not positive.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not flows:
        return 0.0

    base = 1.0 + rate
    if not math.isfinite(base) or base <= 0.0:
        return math.nan

    start = flows[0].occurred_at
    total = 0.0
    for flow in flows:
        if flow.amount == 0.0:
            continue
        exponent = xirr_year_fraction(start, flow.occurred_at)
        try:
            total += flow.amount * base ** (-exponent)
        except OverflowError:
            total += math.copysign(math.inf, flow.amount)
    return total


def xirr_newton(flows: Sequence[DecimalCashflow], guess: float = XIRR_DEFAULT_GUESS) -> float | None:
    """Solve `xirr_npv(rate, flows) == 0` with Newton-Raphson.

    Args:
        flows: Date-ordered cashflows.
        guess: Starting rate.

    Returns:
        float | None: Converged rate, None when the iteration budget is exhausted,
        the derivative degenerates or the result is not finite.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    rate = guess
    for _ in range(XIRR_MAX_ITERATIONS):
        value = xirr_npv(rate, flows)
        shifted_value = xirr_npv(rate + XIRR_DERIVATIVE_STEP, flows)
        derivative = (shifted_value - value) / XIRR_DERIVATIVE_STEP
        if not math.isfinite(derivative) or abs(derivative) < XIRR_MIN_DERIVATIVE:
            break

        next_rate = rate - value / derivative
        if abs(next_rate - rate) < XIRR_TOLERANCE:
            return next_rate if math.isfinite(next_rate) else None
        rate = next_rate
    return None


def xirr_solve(
    cashflows: Sequence[CashflowEntry],
    valuation_date: datetime,
    valuation_amount_base_units: int,
    decimals: int,
    guess: float = XIRR_DEFAULT_GUESS,
) -> float | None:
    """Solve the annualized rate of a cashflow series liquidated at valuation date.

    The current holding is appended as a terminal positive cashflow. A series
    without both a strictly negative and a strictly positive entry has no
    reportable yield and returns `0.0`.

    Args:
        cashflows: Signed base-unit cashflows, deposits negative.
        valuation_date: Date of the terminal valuation, usually now.
        valuation_amount_base_units: Current holding in base units.
        decimals: Token decimals exponent.
        guess: Starting rate.

    Returns:
        float | None: Annual rate (`0.12` is 12%), `0.0` for an unsolvable
        shape, None when the iteration fails.

    Raises:
        ValueError: Raised when decimals is invalid.
    """

    flows = [
        DecimalCashflow(
            occurred_at=entry.occurred_at,
            amount=domain_units_to_decimal(entry.amount_base_units, decimals),
        )
        for entry in cashflows
    ]
    flows.append(
        DecimalCashflow(
            occurred_at=valuation_date,
            amount=domain_units_to_decimal(valuation_amount_base_units, decimals),
        )
    )
    flows.sort(key=lambda flow: flow.occurred_at)

    has_outflow = any(flow.amount < 0 for flow in flows)
    has_inflow = any(flow.amount > 0 for flow in flows)
    if not has_outflow or not has_inflow:
        return 0.0

    rate = xirr_newton(flows, guess=guess)
    if rate is None or not math.isfinite(rate):
        return None
    return rate


def xirr_apy(
    cashflows: Sequence[CashflowEntry],
    valuation_date: datetime,
    valuation_amount_base_units: int,
    decimals: int,
) -> float:
    """Return the solved annual rate, mapping a failed solve to `0.0`."""

    if not cashflows:
        return 0.0
    rate = xirr_solve(cashflows, valuation_date, valuation_amount_base_units, decimals)
    return 0.0 if rate is None else rate


__all__ = [
    "XIRR_DAYS_PER_YEAR",
    "XIRR_DEFAULT_GUESS",
    "xirr_apy",
    "xirr_newton",
    "xirr_npv",
    "xirr_solve",
    "xirr_year_fraction",
]

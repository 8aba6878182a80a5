"""Human-readable rendering of portfolio snapshots."""

from __future__ import annotations

from .models import PortfolioStats

DEFAULT_SNAPSHOT_TITLE = "Portfolio snapshot"


def domain_format_amount(value: float) -> str:
    """Format one token amount with thousands separators and 4 decimals."""

    return f"{value:,.4f}"


def domain_format_stats_lines(
    stats: PortfolioStats,
    deposit_symbol: str = "USDT",
    balance_symbol: str = "mUSD",
    title: str = DEFAULT_SNAPSHOT_TITLE,
) -> list[str]:
    """Render one stats snapshot as display lines.

    Args:
        stats: Computed portfolio stats.
        deposit_symbol: Symbol label for deposited amounts.
        balance_symbol: Symbol label for the current balance.
        title: Heading line.

    Returns:
        list[str]: Title followed by one line per metric.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return [
        title,
        f"Total deposited ({deposit_symbol}): {domain_format_amount(stats.deposited)}",
        f"Total balance ({balance_symbol}): {domain_format_amount(stats.balance)}",
        f"Total yield: {domain_format_amount(stats.yield_value)}",
        f"APY: {stats.apy * 100:.2f}%",
    ]


__all__ = ["DEFAULT_SNAPSHOT_TITLE", "domain_format_amount", "domain_format_stats_lines"]

"""Typed interfaces for ledger-layer computations."""

from collections.abc import Iterable
from typing import Protocol

from app.domain import PortfolioStats


class PortfolioStatsPort(Protocol):
    """Port definition for portfolio stats computation."""

    async def metrics_compute_stats(self, addresses: Iterable[str]) -> PortfolioStats:
        """Compute one stats snapshot for an address set.

        Args:
            addresses: Tracked addresses.

        Returns:
            PortfolioStats: Fully populated snapshot, zeros for an empty set.

        Raises:
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when the computation or a request times out.
        """


class TokenBalancesPort(Protocol):
    """Port definition for per-token balance totals."""

    async def balance_total_decimal_by_token(
        self,
        owners: Iterable[str],
        token_addresses: Iterable[str],
    ) -> dict[str, float]:
        """Return per-token decimal totals summed over owners.

        Args:
            owners: Owner addresses.
            token_addresses: Token contract addresses.

        Returns:
            dict[str, float]: Totals keyed by normalized token address.

        Raises:
            RuntimeError: Implementations report failed lookups as zero balances.
        """

"""Portfolio stats composition from ledger cashflows, totals and balances."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
import logging

from app.domain import PortfolioStats, domain_normalize_address_set, domain_units_to_decimal

from .aggregator import LedgerAggregator
from .balances import TokenBalanceCollector
from .cashflows import CashflowBuilder
from .concurrency import ledger_gather_or_cancel
from .xirr import xirr_apy

logger = logging.getLogger(__name__)


class StatsTimeoutError(TimeoutError):
    """Raised when one stats computation exceeds its configured timeout."""


@dataclass(frozen=True)
class PortfolioMetricsConfig:
    """Configuration values for stats computation.

    Attributes:
        denomination_token_address: Token in which deposits and balances are denominated.
        stats_timeout_seconds: Optional bound on one whole computation.
    """

    denomination_token_address: str
    stats_timeout_seconds: float | None = None


def _metrics_utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PortfolioMetricsService:
    """Compose deposited, balance, yield and APY for a set of addresses."""

    def __init__(
        self,
        cashflow_builder: CashflowBuilder,
        aggregator: LedgerAggregator,
        balance_collector: TokenBalanceCollector,
        config: PortfolioMetricsConfig,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize metrics service dependencies.

        Args:
            cashflow_builder: Builder of signed cashflow series.
            aggregator: Gross totals aggregator.
            balance_collector: On-chain balance collector.
            config: Stats configuration.
            clock: Optional provider of the valuation timestamp.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if cashflow_builder is None:
            raise ValueError("cashflow_builder must not be None")
        if aggregator is None:
            raise ValueError("aggregator must not be None")
        if balance_collector is None:
            raise ValueError("balance_collector must not be None")
        if not config.denomination_token_address.strip():
            raise ValueError("config.denomination_token_address must not be blank")
        if config.stats_timeout_seconds is not None and config.stats_timeout_seconds <= 0:
            raise ValueError("config.stats_timeout_seconds must be > 0")

        self._cashflow_builder = cashflow_builder
        self._aggregator = aggregator
        self._balance_collector = balance_collector
        self._config = config
        self._clock = clock or _metrics_utc_now

    async def metrics_compute_stats(self, addresses: Iterable[str]) -> PortfolioStats:
        """Compute the stats snapshot of an address set.

        An empty set short-circuits to all-zero stats without any network call.

        Args:
            addresses: Tracked addresses, any case, duplicates allowed.

        Returns:
            PortfolioStats: Fully populated snapshot.

        Raises:
            StatsTimeoutError: Raised when the configured timeout expires.
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when a ledger request times out.
            ValueError: Raised when a ledger payload is malformed.
            RuntimeError: Raised when the ledger reports query errors.
            BalanceReadError: Raised when token decimals cannot be resolved.
        """

        normalized_addresses = domain_normalize_address_set(addresses)
        if not normalized_addresses:
            return PortfolioStats()

        timeout_seconds = self._config.stats_timeout_seconds
        if timeout_seconds is None:
            return await self._metrics_compute(normalized_addresses)
        try:
            return await asyncio.wait_for(self._metrics_compute(normalized_addresses), timeout=timeout_seconds)
        except asyncio.TimeoutError as error:
            raise StatsTimeoutError(f"stats computation exceeded {timeout_seconds} seconds") from error

    async def _metrics_compute(self, addresses: list[str]) -> PortfolioStats:
        token_address = self._config.denomination_token_address
        decimals = await self._balance_collector.balance_resolve_decimals(token_address)

        cashflows, totals = await ledger_gather_or_cancel(
            self._cashflow_builder.cashflows_for_addresses(addresses),
            self._aggregator.aggregate_totals_for_addresses(addresses),
        )
        balance_base_units = await self._balance_collector.balance_total_base_units(token_address, addresses)

        yield_base_units = balance_base_units + totals.gross_withdrawn - totals.gross_deposited
        apy = xirr_apy(cashflows, self._clock(), balance_base_units, decimals)

        stats = PortfolioStats(
            deposited=domain_units_to_decimal(totals.gross_deposited, decimals),
            balance=domain_units_to_decimal(balance_base_units, decimals),
            yield_value=domain_units_to_decimal(yield_base_units, decimals),
            apy=apy,
            withdrawn=domain_units_to_decimal(totals.gross_withdrawn, decimals),
            address_count=len(addresses),
        )
        logger.info(
            "Computed stats for %d addresses: cashflows=%d deposited=%s balance=%s apy=%s",
            len(addresses),
            len(cashflows),
            stats.deposited,
            stats.balance,
            stats.apy,
        )
        return stats


__all__ = ["PortfolioMetricsConfig", "PortfolioMetricsService", "StatsTimeoutError"]

"""Gross and net deposit totals aggregated over ledger events."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain import AggregateTotals, LedgerEventKind, domain_normalize_address

from .concurrency import ledger_gather_or_cancel
from .event_sides import DEPOSIT_KINDS, WITHDRAWAL_KINDS, ledger_build_side_filter, ledger_event_amount_for_address
from .paginator import LedgerPaginator


class LedgerAggregator:
    """Sum unsigned deposit and withdrawal amounts per address and across sets.

    Totals are arbitrary-precision integers in base units, so summation order
    never changes the result.
    """

    def __init__(self, paginator: LedgerPaginator):
        if paginator is None:
            raise ValueError("paginator must not be None")
        self._paginator = paginator

    async def aggregate_gross_deposits_for_address(self, address: str) -> int:
        """Return gross deposits received by one address."""

        return await self._aggregate_side(domain_normalize_address(address), DEPOSIT_KINDS)

    async def aggregate_gross_withdrawals_for_address(self, address: str) -> int:
        """Return gross withdrawals sent by one address."""

        return await self._aggregate_side(domain_normalize_address(address), WITHDRAWAL_KINDS)

    async def aggregate_totals_for_address(self, address: str) -> AggregateTotals:
        """Return gross deposit and withdrawal totals of one address.

        Both sides are walked concurrently.

        Args:
            address: Tracked address, any case.

        Returns:
            AggregateTotals: Gross totals in base units.

        Raises:
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when a ledger request times out.
            ValueError: Raised when a ledger payload is malformed.
            RuntimeError: Raised when the ledger reports query errors.
        """

        gross_deposited, gross_withdrawn = await ledger_gather_or_cancel(
            self.aggregate_gross_deposits_for_address(address),
            self.aggregate_gross_withdrawals_for_address(address),
        )
        return AggregateTotals(gross_deposited=gross_deposited, gross_withdrawn=gross_withdrawn)

    async def aggregate_totals_for_addresses(self, addresses: Iterable[str]) -> AggregateTotals:
        """Return gross totals summed across an address set.

        Args:
            addresses: Tracked addresses.

        Returns:
            AggregateTotals: Summed gross totals in base units.

        Raises:
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when a ledger request times out.
            ValueError: Raised when a ledger payload is malformed.
            RuntimeError: Raised when the ledger reports query errors.
        """

        totals = AggregateTotals()
        for address in addresses:
            totals = totals + await self.aggregate_totals_for_address(address)
        return totals

    async def aggregate_gross_deposits(self, addresses: Iterable[str]) -> int:
        """Return gross deposits summed across an address set."""

        total = 0
        for address in addresses:
            total += await self.aggregate_gross_deposits_for_address(address)
        return total

    async def aggregate_gross_withdrawals(self, addresses: Iterable[str]) -> int:
        """Return gross withdrawals summed across an address set."""

        total = 0
        for address in addresses:
            total += await self.aggregate_gross_withdrawals_for_address(address)
        return total

    async def aggregate_net_deposits(self, addresses: Iterable[str]) -> int:
        """Return deposits minus withdrawals across an address set, possibly negative."""

        totals = await self.aggregate_totals_for_addresses(addresses)
        return totals.net_deposited

    async def _aggregate_side(self, address: str, kinds: tuple[LedgerEventKind, ...]) -> int:
        if not address:
            return 0

        total = 0
        async for event in self._paginator.paginator_iterate(ledger_build_side_filter(address, kinds)):
            amount = ledger_event_amount_for_address(event, address)
            if amount is not None:
                total += amount
        return total


__all__ = ["LedgerAggregator"]

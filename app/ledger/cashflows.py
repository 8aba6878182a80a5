"""Signed cashflow series built from paginated ledger events."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain import CashflowEntry, LedgerEventKind, domain_epoch_to_datetime, domain_normalize_address

from .event_sides import DEPOSIT_KINDS, WITHDRAWAL_KINDS, ledger_build_side_filter, ledger_event_signed_amount
from .paginator import LedgerPaginator


class CashflowBuilder:
    """Build date-sorted signed cashflows for XIRR from ledger events."""

    def __init__(self, paginator: LedgerPaginator):
        if paginator is None:
            raise ValueError("paginator must not be None")
        self._paginator = paginator

    async def cashflows_for_address(self, address: str) -> list[CashflowEntry]:
        """Build the cashflow series of one address.

        Deposits received by the address become negative entries and withdrawals
        sent by it become positive entries.

        Args:
            address: Tracked address, any case.

        Returns:
            list[CashflowEntry]: Entries sorted ascending by date.

        Raises:
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when a ledger request times out.
            ValueError: Raised when a ledger payload is malformed.
            RuntimeError: Raised when the ledger reports query errors.
        """

        normalized_address = domain_normalize_address(address)
        if not normalized_address:
            return []

        flows: list[CashflowEntry] = []
        for kinds in (DEPOSIT_KINDS, WITHDRAWAL_KINDS):
            flows.extend(await self._cashflows_for_side(normalized_address, kinds))

        flows.sort(key=lambda flow: flow.occurred_at)
        return flows

    async def cashflows_for_addresses(self, addresses: Iterable[str]) -> list[CashflowEntry]:
        """Build one merged, globally date-sorted series for many addresses.

        Args:
            addresses: Tracked addresses.

        Returns:
            list[CashflowEntry]: Concatenated entries sorted ascending by date.

        Raises:
            ConnectionError: Raised when the ledger transport fails.
            TimeoutError: Raised when a ledger request times out.
            ValueError: Raised when a ledger payload is malformed.
            RuntimeError: Raised when the ledger reports query errors.
        """

        flows: list[CashflowEntry] = []
        for address in addresses:
            flows.extend(await self.cashflows_for_address(address))
        flows.sort(key=lambda flow: flow.occurred_at)
        return flows

    async def _cashflows_for_side(
        self,
        address: str,
        kinds: tuple[LedgerEventKind, ...],
    ) -> list[CashflowEntry]:
        flows: list[CashflowEntry] = []
        async for event in self._paginator.paginator_iterate(ledger_build_side_filter(address, kinds)):
            signed_amount = ledger_event_signed_amount(event, address)
            if signed_amount is None:
                continue
            flows.append(
                CashflowEntry(
                    occurred_at=domain_epoch_to_datetime(event.created),
                    amount_base_units=signed_amount,
                )
            )
        return flows


__all__ = ["CashflowBuilder"]

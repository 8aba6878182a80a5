"""Tests for signed cashflow building and gross/net aggregation."""

from __future__ import annotations

import asyncio

from app.domain import LedgerEventKind
from app.ledger import CashflowBuilder, LedgerAggregator, LedgerPaginator, ledger_event_signed_amount

DAY_SECONDS = 24 * 60 * 60
ALICE = "0x00000000000000000000000000000000000000a1"
ALICE_MIXED_CASE = "0x00000000000000000000000000000000000000A1"
BOB = "0x00000000000000000000000000000000000000b2"
T0 = 1_700_000_000


def _build_events(event_factory):
    return [
        event_factory("0003", LedgerEventKind.DEPOSIT, "1000", T0 + 10 * DAY_SECONDS, to_address=ALICE),
        event_factory("0001", LedgerEventKind.SWAP_DEPOSIT, "500", T0, to_address=ALICE_MIXED_CASE),
        event_factory("0005", LedgerEventKind.WITHDRAWAL, "300", T0 + 5 * DAY_SECONDS, from_address=ALICE),
        event_factory("0006", LedgerEventKind.SWAP_WITHDRAWAL, "0", T0 + 6 * DAY_SECONDS, from_address=ALICE),
        event_factory("0007", LedgerEventKind.DEPOSIT, "12.5", T0 + 7 * DAY_SECONDS, to_address=ALICE),
        event_factory("0008", LedgerEventKind.TRANSFER, "999", T0 + 8 * DAY_SECONDS, to_address=ALICE),
        event_factory("0009", LedgerEventKind.DEPOSIT, "200", (T0 + 2 * DAY_SECONDS) * 1000, to_address=BOB),
    ]


def test_ledger_cashflows_sign_deposits_negative_and_sort_by_date(ledger_adapter_factory, event_factory) -> None:
    """Sign deposits negative, withdrawals positive and sort ascending by date.

    Returns:
        None: Assertions validate series construction.

    Raises:
        AssertionError: Raised when signs or ordering are wrong.
    """

    adapter = ledger_adapter_factory(_build_events(event_factory))
    builder = CashflowBuilder(paginator=LedgerPaginator(ledger_adapter=adapter, page_size=2))

    flows = asyncio.run(builder.cashflows_for_address(ALICE_MIXED_CASE))

    assert [flow.amount_base_units for flow in flows] == [-500, 300, -1000]
    assert flows == sorted(flows, key=lambda flow: flow.occurred_at)


def test_ledger_cashflows_merge_addresses_into_one_sorted_series(ledger_adapter_factory, event_factory) -> None:
    """Merge per-address series and normalize millisecond timestamps.

    Returns:
        None: Assertions validate merged ordering.

    Raises:
        AssertionError: Raised when merged series is out of order.
    """

    adapter = ledger_adapter_factory(_build_events(event_factory))
    builder = CashflowBuilder(paginator=LedgerPaginator(ledger_adapter=adapter, page_size=100))

    flows = asyncio.run(builder.cashflows_for_addresses([ALICE, BOB]))

    assert [flow.amount_base_units for flow in flows] == [-500, -200, 300, -1000]


def test_ledger_aggregator_sums_gross_and_net_totals(ledger_adapter_factory, event_factory) -> None:
    """Sum gross sides per address and across the set, skipping malformed amounts.

    Returns:
        None: Assertions validate aggregation.

    Raises:
        AssertionError: Raised when totals are wrong.
    """

    adapter = ledger_adapter_factory(_build_events(event_factory))
    aggregator = LedgerAggregator(paginator=LedgerPaginator(ledger_adapter=adapter, page_size=1))

    alice_totals = asyncio.run(aggregator.aggregate_totals_for_address(ALICE))
    set_deposits = asyncio.run(aggregator.aggregate_gross_deposits([ALICE, BOB]))
    set_withdrawals = asyncio.run(aggregator.aggregate_gross_withdrawals([ALICE, BOB]))
    set_net = asyncio.run(aggregator.aggregate_net_deposits([ALICE, BOB]))

    assert alice_totals.gross_deposited == 1500
    assert alice_totals.gross_withdrawn == 300
    assert set_deposits == 1700
    assert set_withdrawals == 300
    assert set_net == 1400


def test_ledger_aggregator_net_deposits_can_be_negative(ledger_adapter_factory, event_factory) -> None:
    """Report negative net deposits when withdrawals exceed deposits.

    Returns:
        None: Assertions validate signed net total.

    Raises:
        AssertionError: Raised when net total is clamped.
    """

    adapter = ledger_adapter_factory(
        [
            event_factory("01", LedgerEventKind.DEPOSIT, "100", T0, to_address=ALICE),
            event_factory("02", LedgerEventKind.WITHDRAWAL, "250", T0 + DAY_SECONDS, from_address=ALICE),
        ]
    )
    aggregator = LedgerAggregator(paginator=LedgerPaginator(ledger_adapter=adapter))

    assert asyncio.run(aggregator.aggregate_net_deposits([ALICE])) == -150


def test_ledger_event_signed_amount_ignores_wrong_side_and_transfers(event_factory) -> None:
    """Return None for events not on the tracked address side.

    Returns:
        None: Assertions validate side dispatch.

    Raises:
        AssertionError: Raised when side dispatch is wrong.
    """

    deposit_to_bob = event_factory("01", LedgerEventKind.DEPOSIT, "100", T0, to_address=BOB)
    transfer = event_factory("02", LedgerEventKind.TRANSFER, "100", T0, to_address=ALICE)

    assert ledger_event_signed_amount(deposit_to_bob, ALICE) is None
    assert ledger_event_signed_amount(deposit_to_bob, BOB) == -100
    assert ledger_event_signed_amount(transfer, ALICE) is None

"""Shared test doubles for ledger and on-chain reader boundaries."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from app.adapters import BalanceReadError
from app.domain import LedgerEvent, LedgerEventKind, LedgerQueryFilter


class InMemoryLedgerAdapter:
    """Ledger double applying filter, order, cursor and limit semantics to a fixed event list."""

    def __init__(self, events: Iterable[LedgerEvent]):
        self._events = list(events)
        self.calls: list[LedgerQueryFilter] = []

    def adapter_source_name(self) -> str:
        """Return deterministic source label."""

        return "in_memory_ledger"

    async def adapter_fetch_token_operations(self, query_filter: LedgerQueryFilter) -> list[LedgerEvent]:
        """Return one page of matching events ordered by id descending.

        Args:
            query_filter: Page filter.

        Returns:
            list[LedgerEvent]: Matching page.

        Raises:
            RuntimeError: This double does not raise runtime errors.
        """

        self.calls.append(query_filter)
        matches = [event for event in self._events if _matches(event, query_filter)]
        matches.sort(key=lambda event: event.event_id, reverse=True)
        if query_filter.before is not None:
            matches = [event for event in matches if event.event_id < query_filter.before]
        if query_filter.limit is not None:
            matches = matches[: query_filter.limit]
        return matches


def _matches(event: LedgerEvent, query_filter: LedgerQueryFilter) -> bool:
    if query_filter.to_address is not None and event.to_address.lower() != query_filter.to_address:
        return False
    if query_filter.from_address is not None and event.from_address.lower() != query_filter.from_address:
        return False
    if query_filter.kinds and event.kind not in query_filter.kinds:
        return False
    return True


class StaticTokenReader:
    """On-chain reader double backed by fixed balances and decimals."""

    def __init__(
        self,
        balances: dict[tuple[str, str], int] | None = None,
        decimals: dict[str, int] | None = None,
        failing_owners: set[str] | None = None,
    ):
        self._balances = {(token.lower(), owner.lower()): value for (token, owner), value in (balances or {}).items()}
        self._decimals = {token.lower(): value for token, value in (decimals or {}).items()}
        self._failing_owners = {owner.lower() for owner in (failing_owners or set())}
        self.balance_calls: list[tuple[str, str]] = []
        self.decimals_calls: list[str] = []

    def adapter_source_name(self) -> str:
        """Return deterministic source label."""

        return "static_token_reader"

    async def adapter_token_balance_of(self, token_address: str, owner: str) -> int:
        """Return configured balance or raise for failing owners."""

        self.balance_calls.append((token_address, owner))
        if owner.lower() in self._failing_owners:
            raise BalanceReadError("rpc unavailable", token_address=token_address, owner=owner)
        return self._balances.get((token_address.lower(), owner.lower()), 0)

    async def adapter_token_decimals(self, token_address: str) -> int:
        """Return configured decimals or raise when unknown."""

        self.decimals_calls.append(token_address)
        if token_address.lower() not in self._decimals:
            raise BalanceReadError("decimals unavailable", token_address=token_address)
        return self._decimals[token_address.lower()]


def make_event(
    event_id: str,
    kind: LedgerEventKind,
    value: str,
    created: int,
    from_address: str = "0x0000000000000000000000000000000000000000",
    to_address: str = "0x0000000000000000000000000000000000000000",
) -> LedgerEvent:
    """Build one ledger event with zero-address defaults."""

    return LedgerEvent(
        event_id=event_id,
        created=created,
        from_address=from_address,
        to_address=to_address,
        value=value,
        kind=kind,
    )


@pytest.fixture
def ledger_adapter_factory():
    """Return the in-memory ledger double constructor."""

    return InMemoryLedgerAdapter


@pytest.fixture
def token_reader_factory():
    """Return the static token reader double constructor."""

    return StaticTokenReader


@pytest.fixture
def event_factory():
    """Return the ledger event builder."""

    return make_event

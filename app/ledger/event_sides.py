"""Kind-to-side dispatch table for signing ledger events.

Deposits are mints received by the tracked address, withdrawals are burns sent
by it. `transfer` moves value between holders and never produces a cashflow.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Final

from app.domain import LedgerEvent, LedgerEventKind, LedgerQueryFilter, domain_parse_base_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEventSide:
    """Which address field identifies the tracked holder, and the cashflow sign.

    Attributes:
        side_field: `to_address` for receiver-side kinds, `from_address` for sender-side kinds.
        sign: `-1` for investor outflows (deposits), `+1` for inflows (withdrawals).
    """

    side_field: str
    sign: int


LEDGER_EVENT_SIDES: Final[dict[LedgerEventKind, LedgerEventSide]] = {
    LedgerEventKind.DEPOSIT: LedgerEventSide(side_field="to_address", sign=-1),
    LedgerEventKind.SWAP_DEPOSIT: LedgerEventSide(side_field="to_address", sign=-1),
    LedgerEventKind.WITHDRAWAL: LedgerEventSide(side_field="from_address", sign=1),
    LedgerEventKind.SWAP_WITHDRAWAL: LedgerEventSide(side_field="from_address", sign=1),
}

DEPOSIT_KINDS: Final[tuple[LedgerEventKind, ...]] = (LedgerEventKind.DEPOSIT, LedgerEventKind.SWAP_DEPOSIT)
WITHDRAWAL_KINDS: Final[tuple[LedgerEventKind, ...]] = (LedgerEventKind.WITHDRAWAL, LedgerEventKind.SWAP_WITHDRAWAL)


def ledger_build_side_filter(address: str, kinds: tuple[LedgerEventKind, ...]) -> LedgerQueryFilter:
    """Build the ledger filter selecting one address on the side of the given kinds.

    Args:
        address: Normalized tracked address.
        kinds: Kinds sharing one side field.

    Returns:
        LedgerQueryFilter: Filter on `to` for deposit kinds or `from` for withdrawal kinds.

    Raises:
        ValueError: Raised when kinds are empty, unsupported or mix sides.
    """

    side_fields = {LEDGER_EVENT_SIDES[kind].side_field for kind in kinds if kind in LEDGER_EVENT_SIDES}
    if not kinds or len(side_fields) != 1 or any(kind not in LEDGER_EVENT_SIDES for kind in kinds):
        raise ValueError(f"kinds must share one supported side, got {kinds}")

    if side_fields == {"to_address"}:
        return LedgerQueryFilter(to_address=address, kinds=kinds)
    return LedgerQueryFilter(from_address=address, kinds=kinds)


def ledger_event_amount_for_address(event: LedgerEvent, address: str) -> int | None:
    """Return the unsigned amount an event contributes to one address.

    Args:
        event: Ledger event.
        address: Normalized tracked address.

    Returns:
        int | None: Parsed base units, None when the event does not belong to the
        address side, has an unsupported kind or a malformed amount.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    side = LEDGER_EVENT_SIDES.get(event.kind)
    if side is None:
        return None
    if getattr(event, side.side_field).strip().lower() != address:
        return None

    try:
        return domain_parse_base_units(event.value)
    except ValueError:
        logger.warning("Bad uint value (%s %s): %r", event.kind.value, event.event_id, event.value)
        return None


def ledger_event_signed_amount(event: LedgerEvent, address: str) -> int | None:
    """Return the signed cashflow amount of one event for one address.

    Args:
        event: Ledger event.
        address: Normalized tracked address.

    Returns:
        int | None: Negative deposit or positive withdrawal amount; None when the
        event contributes nothing.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    amount = ledger_event_amount_for_address(event, address)
    if not amount:
        return None
    return LEDGER_EVENT_SIDES[event.kind].sign * amount


__all__ = [
    "DEPOSIT_KINDS",
    "LEDGER_EVENT_SIDES",
    "LedgerEventSide",
    "WITHDRAWAL_KINDS",
    "ledger_build_side_filter",
    "ledger_event_amount_for_address",
    "ledger_event_signed_amount",
]

"""Typed domain models shared across runtime layers.

This module provides the data contracts that flow between the ledger adapter,
the portfolio engine and the presentation surfaces. Amounts stay in integer
base units until the metrics layer converts them with the token decimals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class AppMetadata:
    """Static application metadata for runtime identification.

    Attributes:
        application_name: Human-readable app name.
        environment_name: Runtime environment label.
    """

    application_name: str
    environment_name: str


class LedgerEventKind(str, Enum):
    """Closed set of token-operation kinds reported by the ledger."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    SWAP_DEPOSIT = "swapDeposit"
    SWAP_WITHDRAWAL = "swapWithdrawal"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class LedgerEvent:
    """One token operation row returned by the ledger.

    Attributes:
        event_id: Opaque ledger identifier, also used as pagination cursor.
        created: Raw epoch value, seconds or milliseconds.
        from_address: Sender address as reported upstream.
        to_address: Receiver address as reported upstream.
        value: Unsigned base-unit amount as a base-10 string.
        kind: Operation kind.
        token_address: Token contract the operation belongs to.
        transaction_hash: Optional on-chain transaction hash.
    """

    event_id: str
    created: int
    from_address: str
    to_address: str
    value: str
    kind: LedgerEventKind
    token_address: str = ""
    transaction_hash: str | None = None


@dataclass(frozen=True)
class LedgerQueryFilter:
    """Filter contract for one token-operations ledger request.

    Attributes:
        token_address: Optional token contract filter.
        sender: Optional transaction sender filter.
        from_address: Optional event `from` filter.
        to_address: Optional event `to` filter.
        kinds: Operation kinds to select, empty for all.
        limit: Page size.
        before: Pagination cursor, last event id of the previous page.
        order: Sort order, `asc` or `desc`.
    """

    token_address: str | None = None
    sender: str | None = None
    from_address: str | None = None
    to_address: str | None = None
    kinds: tuple[LedgerEventKind, ...] = ()
    limit: int | None = None
    before: str | None = None
    order: str | None = None

    def to_variables(self) -> dict[str, object]:
        """Serialize filter into the upstream `TokenOperationsFilter` input shape.

        Returns:
            dict[str, object]: GraphQL input object with unset keys omitted.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        payload: dict[str, object] = {
            "tokenAddress": self.token_address,
            "sender": self.sender,
            "from": self.from_address,
            "to": self.to_address,
            "limit": self.limit,
            "before": self.before,
            "order": self.order,
        }
        if self.kinds:
            payload["type"] = [kind.value for kind in self.kinds]
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class CashflowEntry:
    """Signed dated cashflow in integer base units.

    Attributes:
        occurred_at: UTC event time.
        amount_base_units: Negative for deposits, positive for withdrawals.
    """

    occurred_at: datetime
    amount_base_units: int


@dataclass(frozen=True)
class DecimalCashflow:
    """Signed dated cashflow in decimal token units used by the XIRR solver."""

    occurred_at: datetime
    amount: float


@dataclass(frozen=True)
class AggregateTotals:
    """Gross deposit and withdrawal totals in integer base units.

    Attributes:
        gross_deposited: Sum of all deposit-side events.
        gross_withdrawn: Sum of all withdrawal-side events.
    """

    gross_deposited: int = 0
    gross_withdrawn: int = 0

    @property
    def net_deposited(self) -> int:
        """Return deposits minus withdrawals, negative when more was withdrawn."""

        return self.gross_deposited - self.gross_withdrawn

    def __add__(self, other: AggregateTotals) -> AggregateTotals:
        if not isinstance(other, AggregateTotals):
            return NotImplemented
        return AggregateTotals(
            gross_deposited=self.gross_deposited + other.gross_deposited,
            gross_withdrawn=self.gross_withdrawn + other.gross_withdrawn,
        )


@dataclass(frozen=True)
class TokenBalance:
    """On-chain balance of one owner for one token.

    Attributes:
        owner: Owner address.
        token_address: Token contract address.
        balance_base_units: Raw `balanceOf` value.
        decimals: Token decimals exponent.
    """

    owner: str
    token_address: str
    balance_base_units: int
    decimals: int


@dataclass(frozen=True)
class PortfolioStats:
    """Point-in-time portfolio snapshot returned by the metrics engine.

    Attributes:
        deposited: Gross deposited total in token units.
        balance: Current on-chain balance in token units.
        yield_value: Profit and loss since inception, `balance + withdrawn - deposited`.
        apy: Annualized rate from XIRR, `0.12` meaning 12%, `0.0` when unsolvable.
        withdrawn: Gross withdrawn total in token units.
        address_count: Number of distinct addresses the snapshot covers.
    """

    deposited: float = 0.0
    balance: float = 0.0
    yield_value: float = 0.0
    apy: float = 0.0
    withdrawn: float = field(default=0.0)
    address_count: int = field(default=0)

    def to_payload(self) -> dict[str, object]:
        """Serialize stats into a JSON-compatible mapping.

        Returns:
            dict[str, object]: Stats payload.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "deposited": self.deposited,
            "withdrawn": self.withdrawn,
            "balance": self.balance,
            "yield_value": self.yield_value,
            "apy": self.apy,
            "address_count": self.address_count,
        }

"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol

from app.domain import LedgerEvent, LedgerQueryFilter


class LedgerQueryPort(Protocol):
    """Port definition for fetching one page of token operations."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics and health output.

        Returns:
            str: Human-readable upstream source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    async def adapter_fetch_token_operations(self, query_filter: LedgerQueryFilter) -> list[LedgerEvent]:
        """Fetch one page of ledger events matching the filter.

        Args:
            query_filter: Filter including page size, order and cursor.

        Returns:
            list[LedgerEvent]: Events in upstream order, empty when exhausted.

        Raises:
            ConnectionError: Raised when upstream connection or HTTP status fails.
            TimeoutError: Raised when request exceeds timeout.
            ValueError: Raised when the payload cannot be decoded.
            RuntimeError: Raised when upstream reports GraphQL errors.
        """


class TokenReaderPort(Protocol):
    """Port definition for ERC-20 `balanceOf` and `decimals` reads."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics and health output.

        Returns:
            str: Human-readable upstream source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    async def adapter_token_balance_of(self, token_address: str, owner: str) -> int:
        """Return raw token balance of one owner in base units.

        Args:
            token_address: Token contract address.
            owner: Owner address.

        Returns:
            int: Unsigned balance in base units.

        Raises:
            BalanceReadError: Raised when the on-chain call fails.
        """

    async def adapter_token_decimals(self, token_address: str) -> int:
        """Return token decimals exponent.

        Args:
            token_address: Token contract address.

        Returns:
            int: Decimals exponent.

        Raises:
            BalanceReadError: Raised when the on-chain call fails.
        """

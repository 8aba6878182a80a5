"""Project-native typed exceptions for ledger and on-chain adapter failures."""

from __future__ import annotations


class LedgerAdapterError(Exception):
    """Base exception for token-operations ledger failures.

    Attributes:
        status_code: Optional upstream HTTP status code.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LedgerTransportError(LedgerAdapterError, ConnectionError):
    """Transport-level connectivity failure during ledger communication."""


class LedgerTimeoutError(LedgerAdapterError, TimeoutError):
    """Ledger request exceeded its configured timeout."""


class LedgerHttpError(LedgerTransportError):
    """Ledger endpoint answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message=message, status_code=status_code)
        self.body = body


class LedgerPayloadError(LedgerAdapterError, ValueError):
    """Ledger response could not be decoded into the expected contract."""


class LedgerGraphQLError(LedgerAdapterError, RuntimeError):
    """Ledger answered with a GraphQL `errors` payload.

    Attributes:
        messages: Upstream error messages in response order.
    """

    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages) or "GraphQL request failed")
        self.messages = list(messages)


class BalanceReadError(RuntimeError):
    """On-chain `balanceOf` or `decimals` read failed for one token."""

    def __init__(self, message: str, token_address: str, owner: str | None = None):
        super().__init__(message)
        self.token_address = token_address
        self.owner = owner

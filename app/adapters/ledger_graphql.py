"""GraphQL token-operations ledger adapter implementation."""

from __future__ import annotations

import json
from typing import Any, Final

import httpx

from app.domain import LedgerEvent, LedgerEventKind, LedgerQueryFilter, domain_epoch_to_datetime

from .errors import (
    LedgerGraphQLError,
    LedgerHttpError,
    LedgerPayloadError,
    LedgerTimeoutError,
    LedgerTransportError,
)
from .interfaces import LedgerQueryPort


class GraphQLLedgerAdapter(LedgerQueryPort):
    """Adapter implementation for the `tokenOperations` GraphQL query."""

    _USER_AGENT: Final[str] = "portfolio-yield-engine/1.0 (Python/httpx)"
    _TOKEN_OPERATIONS_QUERY: Final[str] = """
    query TokenOps($filter: TokenOperationsFilter!) {
      tokenOperations(filter: $filter) {
        _id
        transaction
        created
        from
        to
        value
        type
        tokenAddress
      }
    }
    """
    _KIND_BY_WIRE_VALUE: Final[dict[str, LedgerEventKind]] = {kind.value: kind for kind in LedgerEventKind}

    def __init__(
        self,
        endpoint_url: str,
        request_timeout_seconds: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize GraphQL ledger adapter.

        Args:
            endpoint_url: GraphQL HTTP endpoint.
            request_timeout_seconds: Per-request timeout in seconds.
            client: Optional pre-built async HTTP client; created lazily when omitted.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_endpoint_url = endpoint_url.strip()
        if not normalized_endpoint_url:
            raise ValueError("endpoint_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._endpoint_url = normalized_endpoint_url
        self._request_timeout_seconds = request_timeout_seconds
        self._client = client
        self._owns_client = client is None

    def adapter_source_name(self) -> str:
        """Return stable adapter source label.

        Returns:
            str: Source identifier.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return "graphql_token_operations"

    async def adapter_fetch_token_operations(self, query_filter: LedgerQueryFilter) -> list[LedgerEvent]:
        """Fetch one page of token operations.

        Args:
            query_filter: Filter including page size, order and cursor.

        Returns:
            list[LedgerEvent]: Parsed events in upstream order.

        Raises:
            ConnectionError: Raised for network and non-success HTTP status.
            TimeoutError: Raised when request exceeds timeout.
            ValueError: Raised when the payload does not match the contract.
            RuntimeError: Raised when upstream returns GraphQL errors.
        """

        data = await self._adapter_post(
            query=self._TOKEN_OPERATIONS_QUERY,
            variables={"filter": query_filter.to_variables()},
        )
        rows = data.get("tokenOperations")
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise LedgerPayloadError("tokenOperations must be a list")
        return [self._adapter_parse_event(row) for row in rows]

    async def aclose(self) -> None:
        """Close the HTTP client when this adapter created it."""

        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _adapter_post(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute one GraphQL POST and return its `data` object.

        Args:
            query: GraphQL document.
            variables: GraphQL variables.

        Returns:
            dict[str, Any]: Response `data` object.

        Raises:
            LedgerTimeoutError: Raised when request timed out.
            LedgerTransportError: Raised for network failures.
            LedgerHttpError: Raised for non-success HTTP status.
            LedgerPayloadError: Raised for undecodable or empty payloads.
            LedgerGraphQLError: Raised when payload carries GraphQL errors.
        """

        client = self._adapter_get_client()
        try:
            response = await client.post(
                self._endpoint_url,
                json={"query": query, "variables": variables},
                headers={"content-type": "application/json", "user-agent": self._USER_AGENT},
                timeout=self._request_timeout_seconds,
            )
        except httpx.TimeoutException as error:
            raise LedgerTimeoutError("Ledger request timed out") from error
        except httpx.HTTPError as error:
            raise LedgerTransportError(f"Ledger transport request failed: {error}") from error

        if response.status_code < 200 or response.status_code >= 300:
            raise LedgerHttpError(
                f"GraphQL HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise LedgerPayloadError("Ledger response is not valid JSON", status_code=response.status_code) from error

        if not isinstance(payload, dict):
            raise LedgerPayloadError("Ledger response must be a JSON object", status_code=response.status_code)

        errors = payload.get("errors")
        if errors:
            raise LedgerGraphQLError(self._adapter_extract_error_messages(errors))

        data = payload.get("data")
        if not data:
            raise LedgerPayloadError("Empty GraphQL response", status_code=response.status_code)
        if not isinstance(data, dict):
            raise LedgerPayloadError("GraphQL data must be an object", status_code=response.status_code)
        return data

    def _adapter_get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._request_timeout_seconds)
            self._owns_client = True
        return self._client

    def _adapter_extract_error_messages(self, errors: object) -> list[str]:
        """Extract error messages from a GraphQL `errors` array.

        Args:
            errors: Raw `errors` value.

        Returns:
            list[str]: Error messages, stringified when message is missing.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if not isinstance(errors, list):
            return [str(errors)]
        messages: list[str] = []
        for error in errors:
            if isinstance(error, dict) and error.get("message") is not None:
                messages.append(str(error["message"]))
            else:
                messages.append(str(error))
        return messages

    def _adapter_parse_event(self, row: object) -> LedgerEvent:
        """Parse one `tokenOperations` row into a typed ledger event.

        The `value` field is kept as text; amount parsing happens per item in the
        engine so one malformed amount does not fail the whole page.

        Args:
            row: Raw row object.

        Returns:
            LedgerEvent: Typed event.

        Raises:
            LedgerPayloadError: Raised when required fields are missing or malformed.
        """

        if not isinstance(row, dict):
            raise LedgerPayloadError("tokenOperations row must be an object")

        event_id = row.get("_id")
        if not isinstance(event_id, str) or not event_id.strip():
            raise LedgerPayloadError("tokenOperations row is missing `_id`")

        kind = self._KIND_BY_WIRE_VALUE.get(str(row.get("type")))
        if kind is None:
            raise LedgerPayloadError(f"unsupported operation type={row.get('type')!r} for _id={event_id}")

        return LedgerEvent(
            event_id=event_id,
            created=self._adapter_parse_created(row.get("created"), event_id=event_id),
            from_address=str(row.get("from") or ""),
            to_address=str(row.get("to") or ""),
            value="" if row.get("value") is None else str(row.get("value")),
            kind=kind,
            token_address=str(row.get("tokenAddress") or ""),
            transaction_hash=None if row.get("transaction") is None else str(row.get("transaction")),
        )

    def _adapter_parse_created(self, created: object, event_id: str) -> int:
        """Parse one `created` value into a non-negative epoch inside the datetime range.

        Args:
            created: Raw `created` value, number or numeric string.
            event_id: Row id used in error messages.

        Returns:
            int: Raw epoch in seconds or milliseconds.

        Raises:
            LedgerPayloadError: Raised when value is not numeric, negative or out of range.
        """

        if isinstance(created, bool) or not isinstance(created, (int, float, str)):
            raise LedgerPayloadError(f"invalid created value for _id={event_id}")
        try:
            parsed_created = int(float(created.strip())) if isinstance(created, str) else int(created)
            domain_epoch_to_datetime(parsed_created)
        except (ValueError, OverflowError) as error:
            raise LedgerPayloadError(f"invalid created value={created!r} for _id={event_id}") from error
        return parsed_created


__all__ = ["GraphQLLedgerAdapter"]

"""Tests for GraphQL ledger adapter request shape, parsing and error mapping."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.adapters import (
    GraphQLLedgerAdapter,
    LedgerAdapterError,
    LedgerGraphQLError,
    LedgerHttpError,
    LedgerPayloadError,
    LedgerTimeoutError,
    LedgerTransportError,
)
from app.domain import LedgerEventKind, LedgerQueryFilter

ENDPOINT = "https://ledger.test/graphql"


def _adapter_for(handler) -> GraphQLLedgerAdapter:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GraphQLLedgerAdapter(endpoint_url=ENDPOINT, request_timeout_seconds=5.0, client=client)


def _fetch(adapter: GraphQLLedgerAdapter, query_filter: LedgerQueryFilter | None = None):
    return asyncio.run(adapter.adapter_fetch_token_operations(query_filter or LedgerQueryFilter()))


def test_adapters_ledger_graphql_posts_filter_and_parses_rows() -> None:
    """Send the filter as GraphQL variables and parse typed events.

    Returns:
        None: Assertions validate request and parsing.

    Raises:
        AssertionError: Raised when request or parsing is wrong.
    """

    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "data": {
                    "tokenOperations": [
                        {
                            "_id": "65a1",
                            "transaction": "0xhash",
                            "created": 1700000000000,
                            "from": "0x0000000000000000000000000000000000000000",
                            "to": "0x00000000000000000000000000000000000000A1",
                            "value": "1000000000000000000000",
                            "type": "swapDeposit",
                            "tokenAddress": "0xtoken",
                        },
                        {
                            "_id": "65a0",
                            "created": "1700000000",
                            "from": "0x00000000000000000000000000000000000000a1",
                            "to": None,
                            "value": 5,
                            "type": "withdrawal",
                        },
                    ]
                }
            },
        )

    adapter = _adapter_for(handler)
    query_filter = LedgerQueryFilter(
        to_address="0xabc",
        kinds=(LedgerEventKind.DEPOSIT,),
        limit=2,
        before="65a2",
        order="desc",
    )

    events = _fetch(adapter, query_filter)

    body = captured["body"]
    assert "tokenOperations" in body["query"]
    assert body["variables"] == {
        "filter": {"to": "0xabc", "limit": 2, "before": "65a2", "order": "desc", "type": ["deposit"]}
    }
    assert [event.event_id for event in events] == ["65a1", "65a0"]
    assert events[0].kind is LedgerEventKind.SWAP_DEPOSIT
    assert events[0].value == "1000000000000000000000"
    assert events[0].transaction_hash == "0xhash"
    assert events[1].created == 1700000000
    assert events[1].to_address == ""
    assert events[1].value == "5"


def test_adapters_ledger_graphql_maps_non_success_status() -> None:
    """Raise an HTTP error carrying status code and body text.

    Returns:
        None: Assertions validate HTTP error mapping.

    Raises:
        AssertionError: Raised when mapping is wrong.
    """

    adapter = _adapter_for(lambda request: httpx.Response(503, text="upstream down"))

    with pytest.raises(LedgerHttpError) as error_info:
        _fetch(adapter)

    assert error_info.value.status_code == 503
    assert str(error_info.value) == "GraphQL HTTP 503: upstream down"
    assert isinstance(error_info.value, ConnectionError)


def test_adapters_ledger_graphql_joins_graphql_error_messages() -> None:
    """Raise one error joining all GraphQL error messages.

    Returns:
        None: Assertions validate GraphQL error mapping.

    Raises:
        AssertionError: Raised when messages are lost.
    """

    adapter = _adapter_for(
        lambda request: httpx.Response(200, json={"errors": [{"message": "bad filter"}, {"message": "rate limited"}]})
    )

    with pytest.raises(LedgerGraphQLError) as error_info:
        _fetch(adapter)

    assert str(error_info.value) == "bad filter; rate limited"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"data": None}),
        httpx.Response(200, json={}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"data": {"tokenOperations": [{"_id": "1", "type": "mint", "created": 1}]}}),
        httpx.Response(200, json={"data": {"tokenOperations": [{"type": "deposit", "created": 1}]}}),
        httpx.Response(200, json={"data": {"tokenOperations": [{"_id": "1", "type": "deposit", "created": -5}]}}),
        httpx.Response(200, json={"data": {"tokenOperations": [{"_id": "1", "type": "deposit", "created": 10**20}]}}),
        httpx.Response(200, json={"data": {"tokenOperations": [{"_id": "1", "type": "deposit", "created": "1e30"}]}}),
        httpx.Response(200, json={"data": {"tokenOperations": [{"_id": "1", "type": "deposit", "created": "soon"}]}}),
    ],
)
def test_adapters_ledger_graphql_rejects_malformed_payloads(response: httpx.Response) -> None:
    """Raise a payload error for empty, undecodable or contract-violating responses.

    Args:
        response: Malformed upstream response.

    Returns:
        None: Assertions validate payload validation.

    Raises:
        AssertionError: Raised when malformed payloads are accepted.
    """

    adapter = _adapter_for(lambda request: response)

    with pytest.raises(LedgerPayloadError):
        _fetch(adapter)


def test_adapters_ledger_graphql_payload_errors_are_ledger_adapter_errors() -> None:
    """Report out-of-range timestamps through the ledger error family.

    Returns:
        None: Assertions validate error taxonomy.

    Raises:
        AssertionError: Raised when a plain builtin error escapes.
    """

    adapter = _adapter_for(
        lambda request: httpx.Response(
            200,
            json={"data": {"tokenOperations": [{"_id": "1", "type": "withdrawal", "created": 10**20}]}},
        )
    )

    with pytest.raises(LedgerAdapterError) as error_info:
        _fetch(adapter)

    assert isinstance(error_info.value, LedgerPayloadError)
    assert "_id=1" in str(error_info.value)


def test_adapters_ledger_graphql_maps_timeouts_and_transport_failures() -> None:
    """Map client timeouts and connection failures to typed adapter errors.

    Returns:
        None: Assertions validate transport error mapping.

    Raises:
        AssertionError: Raised when mapping is wrong.
    """

    def timeout_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    def connect_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(LedgerTimeoutError):
        _fetch(_adapter_for(timeout_handler))
    with pytest.raises(LedgerTransportError):
        _fetch(_adapter_for(connect_handler))


def test_adapters_ledger_graphql_rejects_blank_endpoint() -> None:
    """Reject blank endpoint configuration.

    Returns:
        None: Assertions validate constructor guards.

    Raises:
        AssertionError: Raised when blank endpoint is accepted.
    """

    with pytest.raises(ValueError):
        GraphQLLedgerAdapter(endpoint_url="  ")
    assert GraphQLLedgerAdapter(endpoint_url=ENDPOINT).adapter_source_name() == "graphql_token_operations"

"""Adapter layer package for ledger and on-chain integration boundaries."""

from .errors import (
	BalanceReadError,
	LedgerAdapterError,
	LedgerGraphQLError,
	LedgerHttpError,
	LedgerPayloadError,
	LedgerTimeoutError,
	LedgerTransportError,
)
from .erc20_onchain import ERC20_ABI, Erc20OnchainAdapter
from .interfaces import LedgerQueryPort, TokenReaderPort
from .ledger_graphql import GraphQLLedgerAdapter

__all__ = [
	"BalanceReadError",
	"ERC20_ABI",
	"Erc20OnchainAdapter",
	"GraphQLLedgerAdapter",
	"LedgerAdapterError",
	"LedgerGraphQLError",
	"LedgerHttpError",
	"LedgerPayloadError",
	"LedgerQueryPort",
	"LedgerTimeoutError",
	"LedgerTransportError",
	"TokenReaderPort",
]

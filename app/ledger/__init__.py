"""Ledger layer package for cashflow, aggregation and yield engine boundaries."""

from .aggregator import LedgerAggregator
from .balances import FALLBACK_DECIMALS, TokenBalanceCollector
from .cashflows import CashflowBuilder
from .concurrency import ledger_gather_or_cancel
from .decimals_cache import TokenDecimalsCache
from .interfaces import PortfolioStatsPort, TokenBalancesPort
from .event_sides import (
	DEPOSIT_KINDS,
	LEDGER_EVENT_SIDES,
	WITHDRAWAL_KINDS,
	LedgerEventSide,
	ledger_build_side_filter,
	ledger_event_amount_for_address,
	ledger_event_signed_amount,
)
from .metrics import PortfolioMetricsConfig, PortfolioMetricsService, StatsTimeoutError
from .paginator import LedgerPageIterator, LedgerPaginator, PaginationCursor, paginator_advance_cursor
from .xirr import xirr_apy, xirr_newton, xirr_npv, xirr_solve, xirr_year_fraction

__all__ = [
	"CashflowBuilder",
	"DEPOSIT_KINDS",
	"FALLBACK_DECIMALS",
	"LEDGER_EVENT_SIDES",
	"LedgerAggregator",
	"LedgerEventSide",
	"LedgerPageIterator",
	"LedgerPaginator",
	"PaginationCursor",
	"PortfolioMetricsConfig",
	"PortfolioMetricsService",
	"PortfolioStatsPort",
	"StatsTimeoutError",
	"TokenBalanceCollector",
	"TokenBalancesPort",
	"TokenDecimalsCache",
	"WITHDRAWAL_KINDS",
	"ledger_build_side_filter",
	"ledger_event_amount_for_address",
	"ledger_event_signed_amount",
	"ledger_gather_or_cancel",
	"paginator_advance_cursor",
	"xirr_apy",
	"xirr_newton",
	"xirr_npv",
	"xirr_solve",
	"xirr_year_fraction",
]

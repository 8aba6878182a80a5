"""Domain models used across application layer boundaries."""

from .addresses import domain_is_evm_address, domain_normalize_address, domain_normalize_address_set
from .formatting import domain_format_amount, domain_format_stats_lines
from .models import (
    AggregateTotals,
    AppMetadata,
    CashflowEntry,
    DecimalCashflow,
    LedgerEvent,
    LedgerEventKind,
    LedgerQueryFilter,
    PortfolioStats,
    TokenBalance,
)
from .timestamps import domain_epoch_to_datetime, domain_normalize_epoch_ms
from .units import domain_parse_base_units, domain_units_to_decimal, domain_validate_decimals

__all__ = [
    "AggregateTotals",
    "AppMetadata",
    "CashflowEntry",
    "DecimalCashflow",
    "LedgerEvent",
    "LedgerEventKind",
    "LedgerQueryFilter",
    "PortfolioStats",
    "TokenBalance",
    "domain_epoch_to_datetime",
    "domain_format_amount",
    "domain_format_stats_lines",
    "domain_is_evm_address",
    "domain_normalize_address",
    "domain_normalize_address_set",
    "domain_normalize_epoch_ms",
    "domain_parse_base_units",
    "domain_units_to_decimal",
    "domain_validate_decimals",
]

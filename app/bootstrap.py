"""Application bootstrap wiring for startup validation and dependency assembly."""

from dataclasses import dataclass

from fastapi import FastAPI

from app.adapters import Erc20OnchainAdapter, GraphQLLedgerAdapter
from app.api import create_api_application
from app.config import AppSettings, config_load_settings
from app.ledger import (
    CashflowBuilder,
    LedgerAggregator,
    LedgerPaginator,
    PortfolioMetricsConfig,
    PortfolioMetricsService,
    TokenBalanceCollector,
    TokenDecimalsCache,
)


@dataclass(frozen=True)
class BootstrapComponents:
    """Fully wired runtime components shared by API and CLI surfaces.

    Attributes:
        settings: Validated runtime settings.
        ledger_adapter: GraphQL ledger adapter.
        token_reader: ERC-20 JSON-RPC adapter.
        balance_collector: Fault-tolerant balance collector.
        metrics_service: Stats engine.
    """

    settings: AppSettings
    ledger_adapter: GraphQLLedgerAdapter
    token_reader: Erc20OnchainAdapter
    balance_collector: TokenBalanceCollector
    metrics_service: PortfolioMetricsService

    def reported_token_addresses(self) -> tuple[str, ...]:
        """Return tokens reported by the balances endpoint."""

        tokens = [self.settings.denomination_token_address]
        if self.settings.secondary_token_address:
            tokens.append(self.settings.secondary_token_address)
        return tuple(tokens)

    async def aclose(self) -> None:
        """Release adapter-owned network resources."""

        try:
            await self.ledger_adapter.aclose()
        finally:
            await self.token_reader.aclose()


def bootstrap_create_components(settings: AppSettings | None = None) -> BootstrapComponents:
    """Assemble adapters and engine services from validated settings.

    Args:
        settings: Optional preloaded settings; loaded from environment when omitted.

    Returns:
        BootstrapComponents: Wired components.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    ledger_adapter = GraphQLLedgerAdapter(
        endpoint_url=resolved_settings.ledger_graphql_url,
        request_timeout_seconds=resolved_settings.ledger_request_timeout_seconds,
    )
    token_reader = Erc20OnchainAdapter(
        rpc_url=resolved_settings.rpc_url,
        request_timeout_seconds=resolved_settings.ledger_request_timeout_seconds,
    )
    paginator = LedgerPaginator(
        ledger_adapter=ledger_adapter,
        page_size=resolved_settings.ledger_page_size,
        max_pages=resolved_settings.ledger_max_pages,
    )
    decimals_overrides: dict[str, int] = {}
    if resolved_settings.denomination_decimals is not None:
        decimals_overrides[resolved_settings.denomination_token_address] = resolved_settings.denomination_decimals
    balance_collector = TokenBalanceCollector(
        token_reader=token_reader,
        decimals_cache=TokenDecimalsCache(),
        decimals_overrides=decimals_overrides,
    )
    metrics_service = PortfolioMetricsService(
        cashflow_builder=CashflowBuilder(paginator=paginator),
        aggregator=LedgerAggregator(paginator=paginator),
        balance_collector=balance_collector,
        config=PortfolioMetricsConfig(
            denomination_token_address=resolved_settings.denomination_token_address,
            stats_timeout_seconds=resolved_settings.stats_timeout_seconds,
        ),
    )
    return BootstrapComponents(
        settings=resolved_settings,
        ledger_adapter=ledger_adapter,
        token_reader=token_reader,
        balance_collector=balance_collector,
        metrics_service=metrics_service,
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    components = bootstrap_create_components(settings)
    return create_api_application(
        environment_name=components.settings.environment_name,
        stats_service=components.metrics_service,
        balances_service=components.balance_collector,
        token_addresses=components.reported_token_addresses(),
        ledger_adapter=components.ledger_adapter,
        token_reader=components.token_reader,
        shutdown_hook=components.aclose,
    )

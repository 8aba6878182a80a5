"""FastAPI application factory for the portfolio service.

This module defines API application composition used by the runtime.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.adapters import LedgerQueryPort, TokenReaderPort
from app.domain import AppMetadata
from app.ledger import PortfolioStatsPort, TokenBalancesPort

from .routers import api_create_health_router, api_create_portfolio_router

APPLICATION_NAME = "portfolio-yield-engine"


def create_api_application(
    environment_name: str,
    stats_service: PortfolioStatsPort,
    balances_service: TokenBalancesPort,
    token_addresses: tuple[str, ...],
    ledger_adapter: LedgerQueryPort,
    token_reader: TokenReaderPort,
    shutdown_hook: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        environment_name: Runtime environment label.
        stats_service: Engine computing stats snapshots.
        balances_service: Collector computing per-token balance totals.
        token_addresses: Tokens reported by the balances endpoint.
        ledger_adapter: Ledger adapter reported by health endpoint.
        token_reader: On-chain reader reported by health endpoint.
        shutdown_hook: Optional coroutine function awaited when the app stops.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    metadata = AppMetadata(application_name=APPLICATION_NAME, environment_name=environment_name)

    @asynccontextmanager
    async def lifespan(_application: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            if shutdown_hook is not None:
                await shutdown_hook()

    application = FastAPI(title="Portfolio Yield Engine", lifespan=lifespan)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service descriptor.

        Returns:
            dict[str, str]: Service name, status and environment.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": metadata.application_name,
            "status": "ready",
            "environment": metadata.environment_name,
        }

    application.include_router(
        api_create_health_router(metadata=metadata, ledger_adapter=ledger_adapter, token_reader=token_reader)
    )
    application.include_router(
        api_create_portfolio_router(
            stats_service=stats_service,
            balances_service=balances_service,
            token_addresses=token_addresses,
        )
    )

    return application

"""Portfolio API router composition for stats and balance snapshots."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.adapters import BalanceReadError, LedgerAdapterError
from app.domain import domain_format_stats_lines, domain_is_evm_address, domain_normalize_address_set
from app.ledger import PortfolioStatsPort, StatsTimeoutError, TokenBalancesPort

logger = logging.getLogger(__name__)


class PortfolioAddressesRequest(BaseModel):
    """Request body listing the addresses of one portfolio."""

    addresses: list[str] = Field(default_factory=list)


def api_create_portfolio_router(
    stats_service: PortfolioStatsPort,
    balances_service: TokenBalancesPort,
    token_addresses: tuple[str, ...],
) -> APIRouter:
    """Create portfolio router exposing stats and balance endpoints.

    Args:
        stats_service: Engine computing stats snapshots.
        balances_service: Collector computing per-token balance totals.
        token_addresses: Tokens reported by the balances endpoint.

    Returns:
        APIRouter: Router exposing `/portfolio/*` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if stats_service is None:
        raise ValueError("stats_service must not be None")
    if balances_service is None:
        raise ValueError("balances_service must not be None")
    if not token_addresses:
        raise ValueError("token_addresses must not be empty")

    router = APIRouter(prefix="/portfolio", tags=["portfolio"])

    @router.post("/stats")
    async def api_portfolio_stats(request: PortfolioAddressesRequest) -> JSONResponse:
        """Compute the stats snapshot of the requested addresses.

        Args:
            request: Addresses to include.

        Returns:
            JSONResponse: Stats payload with formatted display lines.

        Raises:
            RuntimeError: Raised when computation fails unexpectedly.
        """

        invalid_response = api_validate_addresses(request.addresses)
        if invalid_response is not None:
            return invalid_response

        try:
            stats = await stats_service.metrics_compute_stats(request.addresses)
        except StatsTimeoutError as error:
            logger.error("Stats computation timed out: %s", error)
            payload = {
                "status": "error",
                "code": "STATS_TIMEOUT",
                "message": "stats computation timed out, please try again later",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_504_GATEWAY_TIMEOUT)
        except (LedgerAdapterError, BalanceReadError) as error:
            logger.error("Failed to compute stats: %s", error)
            payload = {
                "status": "error",
                "code": "LEDGER_UNAVAILABLE",
                "message": "failed to compute stats, please try again later",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_502_BAD_GATEWAY)

        payload = {
            "stats": stats.to_payload(),
            "lines": domain_format_stats_lines(stats),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/balances")
    async def api_portfolio_balances(request: PortfolioAddressesRequest) -> JSONResponse:
        """Return current per-token balance totals of the requested addresses.

        Args:
            request: Addresses to include.

        Returns:
            JSONResponse: Totals keyed by token address.

        Raises:
            RuntimeError: Failed lookups are reported as zero balances.
        """

        invalid_response = api_validate_addresses(request.addresses)
        if invalid_response is not None:
            return invalid_response

        owners = domain_normalize_address_set(request.addresses)
        totals = await balances_service.balance_total_decimal_by_token(owners, token_addresses)
        payload = {
            "address_count": len(owners),
            "totals": totals,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_validate_addresses(addresses: list[str]) -> JSONResponse | None:
    """Return a 400 response when any address is not a valid EVM address.

    Args:
        addresses: Candidate addresses.

    Returns:
        JSONResponse | None: Error response, or None when all addresses are valid.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    invalid_addresses = [address for address in addresses if not domain_is_evm_address(address)]
    if not invalid_addresses:
        return None
    payload = {
        "status": "error",
        "code": "INVALID_ADDRESS",
        "message": f"invalid addresses: {', '.join(invalid_addresses)}",
    }
    return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)


__all__ = ["PortfolioAddressesRequest", "api_create_portfolio_router", "api_validate_addresses"]

"""Health endpoint router composition for app and upstream configuration checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.adapters import LedgerQueryPort, TokenReaderPort
from app.domain import AppMetadata


def api_create_health_router(
    metadata: AppMetadata,
    ledger_adapter: LedgerQueryPort,
    token_reader: TokenReaderPort,
) -> APIRouter:
    """Create health-check router reporting app state and upstream sources.

    Args:
        metadata: Static application metadata.
        ledger_adapter: Ledger adapter whose source label is reported.
        token_reader: On-chain reader whose source label is reported.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if metadata is None:
        raise ValueError("metadata must not be None")
    if ledger_adapter is None:
        raise ValueError("ledger_adapter must not be None")
    if token_reader is None:
        raise ValueError("token_reader must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health and configured upstream sources.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: Raised if adapter metadata is unavailable.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "application": metadata.application_name,
            "environment": metadata.environment_name,
            "ledger_source": ledger_adapter.adapter_source_name(),
            "balance_source": token_reader.adapter_source_name(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router

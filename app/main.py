"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service
or computes one stats snapshot from the command line.
"""

import argparse
import asyncio
import logging

import uvicorn

from app.adapters import BalanceReadError, LedgerAdapterError
from app.bootstrap import bootstrap_create_application, bootstrap_create_components
from app.config import AppSettings, SettingsLoadError, config_configure_logging, config_load_settings
from app.domain import domain_format_stats_lines, domain_is_evm_address
from app.ledger import StatsTimeoutError

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with code 1 when configuration or computation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Portfolio yield engine runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "stats"),
        help="Runtime command: `api` starts server, `stats` prints one portfolio snapshot",
        type=str,
    )
    argument_parser.add_argument(
        "addresses",
        nargs="*",
        help="Tracked addresses for `stats`",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    try:
        settings = config_load_settings()
    except SettingsLoadError as error:
        config_configure_logging()
        logger.error("%s", error)
        raise SystemExit(1) from error
    config_configure_logging(settings.log_level)

    if parsed_arguments.command == "stats":
        invalid_addresses = [address for address in parsed_arguments.addresses if not domain_is_evm_address(address)]
        if invalid_addresses:
            logger.error("Invalid addresses: %s", ", ".join(invalid_addresses))
            raise SystemExit(1)
        try:
            lines = asyncio.run(main_compute_stats_lines(parsed_arguments.addresses, settings))
        except (LedgerAdapterError, BalanceReadError, StatsTimeoutError) as error:
            logger.error("Failed to compute stats: %s", error)
            raise SystemExit(1) from error
        print("\n".join(lines))
        return

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


async def main_compute_stats_lines(addresses: list[str], settings: AppSettings) -> list[str]:
    """Compute one stats snapshot and render its display lines.

    Args:
        addresses: Tracked addresses.
        settings: Validated runtime settings.

    Returns:
        list[str]: Formatted snapshot lines.

    Raises:
        LedgerAdapterError: Raised when the ledger is unavailable.
        BalanceReadError: Raised when token decimals cannot be resolved.
        StatsTimeoutError: Raised when the configured timeout expires.
    """

    components = bootstrap_create_components(settings)
    try:
        stats = await components.metrics_service.metrics_compute_stats(addresses)
    finally:
        await components.aclose()
    return domain_format_stats_lines(stats)


if __name__ == "__main__":
    main()

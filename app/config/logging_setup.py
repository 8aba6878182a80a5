"""Process-wide logging setup for runtime entrypoints."""

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def config_configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the running process.

    Args:
        level: Logging level name.

    Returns:
        None: Configures the root logger as side effect.

    Raises:
        ValueError: Raised when level name is unknown.
    """

    resolved_level = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved_level, int):
        raise ValueError(f"unsupported log level={level}")
    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(resolved_level, logging.WARNING))

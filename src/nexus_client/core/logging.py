"""Logging setup for the Nexus client

The library logs through loguru. httpx logs through the standard library, so
a bridge handler forwards those records into loguru.
"""

import logging
import sys

from loguru import logger

_BRIDGED_LOGGERS = ("httpx", "httpcore")
_bridge_installed = False


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


def install_logging_bridge() -> None:
    """Bridge stdlib logging used by httpx into loguru once."""
    global _bridge_installed
    if _bridge_installed:
        return

    handler = _LoguruHandler()
    for name in _BRIDGED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.setLevel(logging.WARNING)
        std_logger.addHandler(handler)
        std_logger.propagate = False

    _bridge_installed = True


def configure_logging(
    level: str = "INFO",
    log_file: str | None = None,
) -> None:
    """Configure loguru sinks for applications embedding the client

    Args:
        level: Minimum level for the console sink
        log_file: Optional path template for a rotating file sink
    """
    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="30 days",
            compression="gz",
            level=level,
        )

    install_logging_bridge()
    logger.debug(f"Logging configured with level {level}")

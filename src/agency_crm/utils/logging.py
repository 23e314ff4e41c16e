"""
Rich logging for the CRM services.

Every module logger writes through one shared RichHandler so sync
messages from the route layer, the services and the backfill job
interleave in a single, colored stream.
"""
import logging
from typing import Optional
from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback
from agency_crm.core.config import settings

install_traceback(show_locals=False)

_console = Console()
_handler: Optional[RichHandler] = None


def _shared_handler() -> RichHandler:
    global _handler
    if _handler is None:
        _handler = RichHandler(
            console=_console,
            show_time=True,
            show_path=True,
            show_level=True,
            rich_tracebacks=True,
            markup=True,  # Enable rich markup in log messages
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        _handler.setFormatter(logging.Formatter(fmt="%(message)s"))
    return _handler


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with Rich formatting and colors.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override (defaults to settings.log_level)

    Returns:
        Configured logger instance with the shared RichHandler
    """
    logger = logging.getLogger(name)

    log_level = level.upper() if level else settings.log_level.upper()
    logger.setLevel(getattr(logging, log_level))

    handler = _shared_handler()
    if handler not in logger.handlers:
        logger.addHandler(handler)

    # Prevent propagation to root logger to avoid duplicate messages
    logger.propagate = False

    return logger


def get_shared_logger() -> logging.Logger:
    """
    Get the application-wide logger, for events that don't belong
    to a specific module (startup, shutdown, batch jobs).
    """
    return get_logger("agency_crm")


app_logger = get_shared_logger()

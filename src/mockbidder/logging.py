"""
Structured logging configuration for the mockbidder adapter.

Log entries are JSON by default and carry the OpenRTB auction id of the
request being processed, so adapter events can be joined with the host's
auction logs.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable, Iterator

import structlog

# OpenRTB BidRequest.id of the auction currently being processed
auction_id_var: ContextVar[str] = ContextVar("auction_id", default="")


def get_auction_id() -> str:
    """Get the current auction ID from context."""
    return auction_id_var.get()


@contextmanager
def auction_context(bid_request: dict[str, Any]) -> Iterator[str]:
    """
    Tag log entries emitted inside the block with the request's auction id.

    Only the auction id is reset on exit; context bound by the host is left
    alone.
    """
    token = auction_id_var.set(str(bid_request.get("id") or ""))
    try:
        yield auction_id_var.get()
    finally:
        auction_id_var.reset(token)


def add_auction_id(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to add the auction ID to log entries."""
    auction_id = get_auction_id()
    if auction_id:
        event_dict["auction_id"] = auction_id
    return event_dict


def add_service_info(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to add service info to log entries."""
    event_dict["service"] = "mockbidder"
    return event_dict


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    show_timestamps: bool = True,
) -> None:
    """
    Configure structured logging for the adapter.

    Logs go to stderr so stdout stays free for tool output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ('json' or 'console')
        show_timestamps: Whether to include timestamps
    """
    level = os.getenv("LOG_LEVEL", level).upper()
    format = os.getenv("LOG_FORMAT", format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_auction_id,
        add_service_info,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if show_timestamps:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if format == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    else:
        # Decimal prices render as strings
        processors.append(structlog.processors.JSONRenderer(default=str))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


def bidder_logger(bidder_code: str) -> structlog.stdlib.BoundLogger:
    """Get logger for bidder-specific events."""
    return get_logger("mockbidder.bidder").bind(bidder=bidder_code)


def currency_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for currency conversion events."""
    return get_logger("mockbidder.currency")


def config_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for configuration and assembly."""
    return get_logger("mockbidder.config")


def log_call_summary(logger: structlog.stdlib.BoundLogger):
    """
    Decorator for adapter entry points returning a ``Result``.

    Logs the call duration with the number of values and errors produced.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            result = func(*args, **kwargs)
            logger.debug(
                "Adapter call finished",
                call=func.__name__.lstrip("_"),
                values=len(result.value),
                errors=len(result.errors),
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return result
        return wrapper
    return decorator


# Initialize with defaults on module load
configure_logging()

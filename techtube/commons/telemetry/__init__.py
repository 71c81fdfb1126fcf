"""Telemetry module - structured logging and timing."""

from techtube.commons.telemetry.decorators import timed
from techtube.commons.telemetry.logger import (
    JsonFormatter,
    TextFormatter,
    bind_log_context,
    clear_log_context,
    configure_logging,
    get_log_context,
    get_logger,
    get_request_id,
    set_log_context,
    set_request_id,
)

__all__ = [
    # Decorators
    "timed",
    # Logger
    "get_logger",
    "configure_logging",
    "JsonFormatter",
    "TextFormatter",
    # Request ID
    "get_request_id",
    "set_request_id",
    # Log Context
    "bind_log_context",
    "get_log_context",
    "set_log_context",
    "clear_log_context",
]

"""Structured logging with request IDs and bound context."""

import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, ClassVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
# ContextVar has no default_factory, so a missing value means "no context".
log_context_var: ContextVar[dict[str, Any]] = ContextVar("log_context")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


def get_request_id() -> str | None:
    """Get the request ID bound to the current context."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Bind a request ID to the current context, generating one if needed."""
    rid = request_id or str(uuid.uuid4())
    request_id_var.set(rid)
    return rid


def get_log_context() -> dict[str, Any]:
    """Return a copy of the bound log context."""
    try:
        return log_context_var.get().copy()
    except LookupError:
        return {}


def set_log_context(**kwargs: Any) -> None:
    """Add key/value pairs to the bound log context."""
    log_context_var.set({**get_log_context(), **kwargs})


def clear_log_context() -> None:
    """Remove everything from the bound log context."""
    log_context_var.set({})


@contextmanager
def bind_log_context(**kwargs: Any) -> Iterator[None]:
    """Temporarily extend the log context, restoring it on exit.

    Example:
        >>> with bind_log_context(upload_id="uqid-1"):
        ...     logger.info("Uploading chunk")
    """
    token = log_context_var.set({**get_log_context(), **kwargs})
    try:
        yield
    finally:
        log_context_var.reset(token)


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def __init__(self, *, include_path: bool = True) -> None:
        """Initialize the formatter.

        Args:
            include_path: Include ``file:line`` of the call site.
        """
        super().__init__()
        self.include_path = include_path

    def format(self, record: logging.LogRecord) -> str:
        """Serialize the record, its ``extra`` fields and bound context."""
        payload: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        if self.include_path:
            payload["path"] = f"{record.pathname}:{record.lineno}"

        rid = get_request_id()
        if rid:
            payload["request_id"] = rid

        payload["message"] = record.getMessage()

        context = get_log_context()
        if context:
            payload["context"] = context

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = value

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Colored single-line output for local development."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Render ``time LEVEL [logger] [rid] message k=v ...``."""
        color = self.COLORS.get(record.levelname, "")
        parts = [
            datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S"),
            f"{color}{record.levelname:8}{self.RESET}",
            f"[{record.name}]",
        ]

        rid = get_request_id()
        if rid:
            parts.append(f"[{rid[:8]}]")

        parts.append(record.getMessage())
        parts.extend(f"{k}={v}" for k, v in get_log_context().items())

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    level: str = "INFO",
    format_type: str = "json",
    logger_name: str | None = None,
) -> logging.Logger:
    """Attach a single stdout handler with the chosen formatter.

    Args:
        level: Log level name.
        format_type: ``json`` or ``text``.
        logger_name: Logger to configure. Defaults to the root logger.

    Returns:
        The configured logger.
    """
    numeric_level = getattr(logging, level.upper())
    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(JsonFormatter() if format_type == "json" else TextFormatter())
    logger.addHandler(handler)

    if logger_name is not None:
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name (usually ``__name__``)."""
    return logging.getLogger(name)

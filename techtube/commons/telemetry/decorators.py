"""Timing decorator for service calls."""

import functools
import inspect
import logging
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar, overload

from techtube.commons.telemetry.logger import get_logger

P = ParamSpec("P")
R = TypeVar("R")


@overload
def timed(
    func: Callable[P, R],
) -> Callable[P, R]: ...


@overload
def timed(
    *,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
    threshold_ms: float | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]: ...


def timed(
    func: Callable[P, R] | None = None,
    *,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
    threshold_ms: float | None = None,
) -> Callable[P, R] | Callable[[Callable[P, R]], Callable[P, R]]:
    """Log how long the wrapped call took, sync or async.

    Usable bare (``@timed``) or configured (``@timed(level=logging.INFO)``).
    The duration is logged even when the call raises.

    Args:
        func: The function to decorate (bare usage).
        logger: Logger to use. Defaults to the function's module logger.
        level: Log level of the timing record.
        threshold_ms: Skip logging calls faster than this.
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        log = logger or get_logger(fn.__module__)

        def _report(started: float) -> None:
            elapsed_ms = (time.perf_counter() - started) * 1000
            if threshold_ms is None or elapsed_ms >= threshold_ms:
                log.log(
                    level,
                    f"{fn.__qualname__} completed",
                    extra={"duration_ms": round(elapsed_ms, 2)},
                )

        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                started = time.perf_counter()
                try:
                    return await fn(*args, **kwargs)  # type: ignore[misc, no-any-return]
                finally:
                    _report(started)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                _report(started)

        return sync_wrapper

    if func is not None:
        return decorator(func)
    return decorator

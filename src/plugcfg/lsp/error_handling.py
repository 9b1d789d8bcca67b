"""Error handling for LSP feature handlers."""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], Any],
) -> Callable[[F], F]:
    """
    Wrap an LSP feature handler so it never raises into the server loop.

    Exceptions are logged with traceback and replaced by the value of
    default_factory. Coroutine handlers are supported; cancellation is
    always re-raised so request cancellation keeps working.

    Args:
        logger: Logger for error reports.
        feature_name: LSP method name used in log messages.
        default_factory: Builds the fallback result.
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("Error in %s handler", feature_name)
                    return default_factory()

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s handler", feature_name)
                return default_factory()

        return wrapper  # type: ignore[return-value]

    return decorator

"""Store call guard: timeout + translation of driver failures into ``Unavailable``."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError

from app.core.config import get_settings
from app.core.errors import Unavailable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

STORE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, ConnectionError)


def store_operation(name: str) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Bound ``fn`` by ``store_timeout_seconds`` and surface store failures as Unavailable.

    The wrapped coroutine commits as its final step, so a timeout or driver error
    always means nothing was applied and the caller may retry.
    """

    def decorator(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            timeout = get_settings().store_timeout_seconds
            try:
                return await asyncio.wait_for(fn(*args, **kwargs), timeout=timeout)
            except asyncio.TimeoutError as exc:
                logger.warning("%s timed out after %.1fs", name, timeout)
                raise Unavailable(f"{name} timed out; please retry.") from exc
            except STORE_ERRORS as exc:
                logger.warning("%s failed on store I/O: %s", name, exc, exc_info=True)
                raise Unavailable(f"{name} could not reach the data store; please retry.") from exc

        return wrapper

    return decorator

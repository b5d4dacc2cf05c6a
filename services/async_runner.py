"""Hands coroutines from WSGI worker threads to the main asyncio loop."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from typing import Any, Coroutine, Optional, TypeVar

from core import get_logger

logger = get_logger(__name__)

_loop: Optional[asyncio.AbstractEventLoop] = None
T = TypeVar("T")


def set_main_loop(loop: asyncio.AbstractEventLoop) -> None:
    global _loop
    _loop = loop


def _report_failure(future: Future) -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"Background coroutine failed: {error}", exc_info=error)


def submit_coroutine(coro: Coroutine[Any, Any, T]) -> Future:
    """Schedule ``coro`` on the main loop without waiting for it."""
    if _loop is None:
        coro.close()
        raise RuntimeError("Asyncio loop is not initialized")
    future = asyncio.run_coroutine_threadsafe(coro, _loop)
    future.add_done_callback(_report_failure)
    return future

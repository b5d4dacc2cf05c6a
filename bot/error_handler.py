"""Centralized error handling for bot handlers."""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Callable

from aiogram import types

from bot import messages
from core import get_logger
from utils.performance import monitor

logger = get_logger(__name__)


def handle_command_errors(command: str) -> Callable:
    """Decorator reporting handler failures back to the chat.

    Any error escaping the handler is logged and answered with the generic
    failure message followed by the raw error text. The store connection is
    already back in the pool by then. Nothing is retried.

    Usage:
        @handle_command_errors("lucky")
        async def lucky(self, message, scope):
            ...
    """
    def decorator(func: Callable) -> Callable:
        accepted = set(inspect.signature(func).parameters)

        @wraps(func)
        async def wrapper(self, message: types.Message, *args: Any, **kwargs: Any):
            # aiogram may hand over its whole context; keep what the handler takes
            kwargs = {key: value for key, value in kwargs.items() if key in accepted}
            try:
                with monitor.track_command(command):
                    return await func(self, message, *args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error in /{command}: {e}",
                    exc_info=True,
                    extra={
                        "handler": func.__name__,
                        "user_id": message.from_user.id if message.from_user else None,
                        "chat_id": message.chat.id,
                    },
                )
                try:
                    await self.delivery.send_text(message.chat.id, messages.GENERIC_FAILURE)
                    await self.delivery.send_text(message.chat.id, messages.failure_details(e))
                except Exception as send_error:
                    logger.error(f"Failed to send error message: {send_error}")

        return wrapper
    return decorator

"""Drops commands that do not come from a person in a served chat."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Collection, Dict, Optional

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from core import get_logger

logger = get_logger(__name__)


def is_message_from_person(message: Message) -> bool:
    user = message.from_user
    return user is not None and not user.is_bot


class SenderGuardMiddleware(BaseMiddleware):
    """Validates the sender and resolves the storage scope of a message.

    With an allow-list every served chat shares ``master_scope``; other chats
    are ignored. Without one, each chat is its own scope.
    The resolved scope is passed to handlers as the ``scope`` argument.
    """

    def __init__(
        self,
        allowed_chat_ids: Collection[int] = (),
        master_scope: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.allowed_chat_ids = frozenset(allowed_chat_ids)
        self.master_scope = master_scope

    def resolve_scope(self, chat_id: int) -> Optional[str]:
        if self.allowed_chat_ids:
            return self.master_scope if chat_id in self.allowed_chat_ids else None
        return str(chat_id)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if not is_message_from_person(event):
            return None

        scope = self.resolve_scope(event.chat.id)
        if scope is None:
            logger.debug(f"Ignoring message from unknown chat {event.chat.id}")
            return None

        data["scope"] = scope
        return await handler(event, data)


def setup_sender_guard(router, allowed_chat_ids: Collection[int] = (), master_scope: Optional[str] = None) -> SenderGuardMiddleware:
    middleware = SenderGuardMiddleware(allowed_chat_ids=allowed_chat_ids, master_scope=master_scope)
    router.message.middleware(middleware)
    return middleware

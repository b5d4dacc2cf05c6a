"""Telegram bot wrapper around aiogram."""

from __future__ import annotations

from contextlib import suppress
from typing import Any, Dict, Optional

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand

from core import get_logger, BOT_COMMANDS

logger = get_logger(__name__)


class LotteryBot:
    """Owns the aiogram Bot and Dispatcher and the update intake mode.

    With a webhook URL the platform pushes updates to the web layer, which
    hands them to :meth:`feed_update`; otherwise the bot long-polls.
    """

    def __init__(self, token: str, webhook_url: str = "") -> None:
        self.bot = Bot(token=token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
        self.dispatcher = Dispatcher()
        self.webhook_url = webhook_url
        self._webhook_path = f"/bot{token}"

    @property
    def use_webhook(self) -> bool:
        return bool(self.webhook_url)

    async def publish_commands(self) -> None:
        await self.bot.set_my_commands(
            [BotCommand(command=command, description=description) for command, description in BOT_COMMANDS]
        )

    async def start(self) -> None:
        """Publish the command menu and start receiving updates.

        In webhook mode this returns after registering the webhook; in polling
        mode it blocks until polling stops.
        """
        await self.publish_commands()
        if self.use_webhook:
            await self.bot.set_webhook(f"{self.webhook_url}{self._webhook_path}")
            logger.info("Webhook registered")
            return
        await self.bot.delete_webhook(drop_pending_updates=False)
        logger.info("Starting long polling")
        await self.dispatcher.start_polling(self.bot, handle_signals=False)

    async def feed_update(self, payload: Dict[str, Any]) -> Optional[Any]:
        return await self.dispatcher.feed_raw_update(self.bot, payload)

    async def stop(self) -> None:
        if not self.use_webhook:
            with suppress(RuntimeError):  # polling never started
                await self.dispatcher.stop_polling()
        await self.bot.session.close()

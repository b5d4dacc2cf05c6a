"""Bot initialization module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logger import get_logger

if TYPE_CHECKING:
    from config import Config
    from services.delivery import DeliveryChannel
    from services.lottery import LotteryService

logger = get_logger(__name__)


class BotInitializer:
    """Builds the bot and wires handlers and middleware."""

    def __init__(self, config: Config, lottery: LotteryService):
        self.config = config
        self.lottery = lottery

    def initialize(self) -> tuple:
        """Create the bot; returns ``(LotteryBot, DeliveryChannel)``."""
        from bot import LotteryBot
        from bot.handlers import setup_lottery_handlers
        from bot.middleware import setup_sender_guard
        from services.delivery import DeliveryChannel

        bot = LotteryBot(token=self.config.bot_token, webhook_url=self.config.webhook_url)
        delivery = DeliveryChannel(
            bot.bot,
            celebration_video=self.config.celebration_video,
            rate_limit=self.config.bot_rate_limit,
        )

        handler = setup_lottery_handlers(bot.dispatcher, self.lottery, delivery)
        setup_sender_guard(
            handler.router,
            allowed_chat_ids=self.config.allowed_chat_ids,
            master_scope=self.config.master_scope or None,
        )
        logger.info("✅ Lottery handlers registered")

        if self.config.uses_allow_list:
            logger.info(f"Serving {len(self.config.allowed_chat_ids)} allowed chat(s) in scope {self.config.master_scope}")
        else:
            logger.info("Serving every chat in its own scope")

        return bot, delivery

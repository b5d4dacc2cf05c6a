"""Application initialization orchestrator."""

from __future__ import annotations

import asyncio
import os
from contextlib import suppress
from typing import Optional

from aiohttp import web as aiohttp_web
from aiohttp_wsgi import WSGIHandler

from config import Config, load_config, validate_config
from core.logger import get_logger
from database import close_db_pool, init_db_pool, run_migrations
from services.async_runner import set_main_loop, submit_coroutine
from services.lottery import LotteryService

logger = get_logger(__name__)


class ApplicationInitializer:
    """Orchestrates application initialization and lifecycle."""

    def __init__(self, config: Optional[Config] = None):
        self.config = validate_config(config or load_config())
        self.db_pool = None
        self.lottery: Optional[LotteryService] = None
        self.bot = None
        self.delivery = None
        self.scheduler = None
        self.web_runner = None
        self._stopped = asyncio.Event()

    async def initialize(self) -> None:
        """Initialize all application components."""
        set_main_loop(asyncio.get_running_loop())
        await self._init_database()
        self.lottery = LotteryService(tz=self.config.tzinfo)
        self._init_bot()
        self._init_scheduler()
        await self._init_web_server()

    async def run(self) -> None:
        """Run the application until cancelled."""
        if self.scheduler:
            await self.scheduler.start()
            logger.info(f"⏰ Scheduled draw at {self.config.scheduled_draw_time} ({self.config.timezone})")

        try:
            await self.bot.start()
            logger.info("🤖 Telegram bot started")
            if self.bot.use_webhook:
                await self._stopped.wait()
        finally:
            logger.info("Shutting down...")
            await self.cleanup()

    def stop(self) -> None:
        self._stopped.set()

    async def cleanup(self) -> None:
        """Cleanup resources."""
        with suppress(Exception):
            if self.scheduler:
                await self.scheduler.stop()
        with suppress(Exception):
            if self.bot:
                await self.bot.stop()
        with suppress(Exception):
            if self.web_runner:
                await self.web_runner.cleanup()
        with suppress(Exception):
            await close_db_pool()

    async def _init_database(self) -> None:
        """Initialize database pool and run migrations."""
        self.db_pool = await init_db_pool(
            database_path=self.config.database_path,
            pool_size=self.config.db_pool_size,
            busy_timeout_ms=self.config.db_busy_timeout,
        )
        await run_migrations(self.db_pool)
        logger.info("✅ Database initialized")

    def _init_bot(self) -> None:
        from bot.initializer import BotInitializer

        self.bot, self.delivery = BotInitializer(self.config, self.lottery).initialize()
        logger.info("✅ Bot initialized")

    def _init_scheduler(self) -> None:
        if not self.config.scheduler_enabled:
            logger.info("Scheduled draw disabled (MASTER_CHAT_ID not set)")
            return

        from services.scheduler import ScheduledDrawService

        hour, minute = self.config.draw_hour_minute
        self.scheduler = ScheduledDrawService(
            lottery=self.lottery,
            delivery=self.delivery,
            scope=self.config.master_scope,
            chat_id=self.config.master_chat_id,
            hour=hour,
            minute=minute,
            tz=self.config.tzinfo,
        )

    async def _init_web_server(self) -> None:
        """Serve the Flask app through aiohttp on the main loop."""
        from web import create_app

        update_sink = None
        if self.bot.use_webhook:
            bot = self.bot

            def update_sink(payload):
                return submit_coroutine(bot.feed_update(payload))

        flask_app = create_app(self.config, update_sink=update_sink)
        wsgi_handler = WSGIHandler(flask_app)

        aio_app = aiohttp_web.Application()
        aio_app.router.add_route("*", "/{path_info:.*}", wsgi_handler)

        self.web_runner = aiohttp_web.AppRunner(aio_app)
        await self.web_runner.setup()

        # Bind to PORT env var if present (Render/Heroku)
        effective_port = int(os.getenv("PORT", str(self.config.web_port)))
        effective_host = "0.0.0.0" if os.getenv("PORT") else self.config.web_host

        site = aiohttp_web.TCPSite(self.web_runner, effective_host, effective_port)
        await site.start()

        logger.info(f"🚀 Web server started on http://{effective_host}:{effective_port}")

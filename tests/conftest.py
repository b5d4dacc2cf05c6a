"""Pytest configuration and fixtures."""

from dataclasses import replace
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from config import Config
from database import close_db_pool, init_db_pool, run_migrations
from database.base_repository import BaseRepository
from services.lottery import LotteryService
from services.selection import RandomSelector

UTC = timezone.utc


BASE_CONFIG = Config(
    bot_token="123456:TEST_TOKEN",
    webhook_url="",
    environment="testing",
    debug=False,
    log_level="INFO",
    log_folder="logs",
    web_host="localhost",
    web_port=3000,
    database_path="data/test_lucky_draw.sqlite",
    db_pool_size=2,
    db_busy_timeout=2000,
    timezone="UTC",
    allowed_chat_ids=(),
    master_scope="",
    master_chat_id=None,
    scheduled_draw_time="12:00",
    celebration_video="assets/goat.mp4",
    bot_rate_limit=30,
)


def make_config(**overrides) -> Config:
    return replace(BASE_CONFIG, **overrides)


class MutableClock:
    """Clock returning a settable point in time."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class PickById(RandomSelector):
    """Deterministic selector choosing the candidate with the given id."""

    name = "pick"

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.seen = []

    def _pick(self, candidates):
        self.seen.append([c.id for c in candidates])
        return next(c for c in candidates if c.id == self.user_id)


class FakeDelivery:
    """Records what would be sent to Telegram."""

    def __init__(self) -> None:
        self.sent = []

    async def send_text(self, chat_id, text):
        self.sent.append(("text", chat_id, text))

    async def send_celebration(self, chat_id, caption):
        self.sent.append(("video", chat_id, caption))

    @property
    def texts(self):
        return [entry[2] for entry in self.sent]


def make_user(user_id: int, username=None, first_name="Test", is_bot=False):
    return SimpleNamespace(id=user_id, username=username, first_name=first_name, is_bot=is_bot)


class MockMessage:
    """Stand-in for an aiogram text message."""

    def __init__(self, text="/lucky", user=None, chat_id=-100500):
        self.text = text
        self.from_user = user or make_user(1, username="alice")
        self.chat = MagicMock()
        self.chat.id = chat_id
        self.answer = AsyncMock()


async def set_points(scope: str, user_id: int, points: int) -> None:
    await BaseRepository.execute(
        "UPDATE participants SET points=? WHERE scope=? AND user_id=?",
        (points, scope, user_id),
    )


async def insert_result(scope: str, draw_date: str, winner_id: int, kind: str = "daily") -> None:
    await BaseRepository.execute(
        """
        INSERT INTO results (scope, draw_date, kind, winner_id, winner_name, winner_points)
        VALUES (?, ?, ?, ?, 'someone', 0)
        """,
        (scope, draw_date, kind, winner_id),
    )


@pytest_asyncio.fixture
async def test_db(tmp_path):
    """Fresh SQLite database with the schema applied."""
    pool = await init_db_pool(
        database_path=str(tmp_path / "test_lucky_draw.sqlite"),
        pool_size=2,
        busy_timeout_ms=2000,
    )
    await run_migrations(pool)
    yield pool
    await close_db_pool()


@pytest.fixture
def clock():
    return MutableClock(datetime(2024, 1, 15, 12, 0, tzinfo=UTC))


@pytest.fixture
def lottery(clock):
    return LotteryService(tz=UTC, clock=clock)


@pytest.fixture
def delivery():
    return FakeDelivery()

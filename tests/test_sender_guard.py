"""Tests for sender validation and scope resolution."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from bot.middleware import SenderGuardMiddleware, is_message_from_person
from tests.conftest import make_user


def make_event(chat_id=-100500, user=None):
    return SimpleNamespace(chat=SimpleNamespace(id=chat_id), from_user=user)


def test_person_detection():
    assert is_message_from_person(make_event(user=make_user(1)))
    assert not is_message_from_person(make_event(user=make_user(2, is_bot=True)))
    assert not is_message_from_person(make_event(user=None))


@pytest.mark.asyncio
async def test_bot_sender_is_dropped():
    guard = SenderGuardMiddleware()
    handler = AsyncMock()

    result = await guard(handler, make_event(user=make_user(7, is_bot=True)), {})

    assert result is None
    handler.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_sender_is_dropped():
    guard = SenderGuardMiddleware()
    handler = AsyncMock()

    await guard(handler, make_event(user=None), {})

    handler.assert_not_awaited()


@pytest.mark.asyncio
async def test_each_chat_is_its_own_scope():
    guard = SenderGuardMiddleware()
    handler = AsyncMock(return_value="handled")
    data = {}

    result = await guard(handler, make_event(chat_id=-42, user=make_user(1)), data)

    assert result == "handled"
    assert data["scope"] == "-42"
    handler.assert_awaited_once()


@pytest.mark.asyncio
async def test_allowed_chats_share_master_scope():
    guard = SenderGuardMiddleware(allowed_chat_ids=[-1, -2], master_scope="goats")
    handler = AsyncMock()

    for chat_id in (-1, -2):
        data = {}
        await guard(handler, make_event(chat_id=chat_id, user=make_user(1)), data)
        assert data["scope"] == "goats"

    assert handler.await_count == 2


@pytest.mark.asyncio
async def test_chat_outside_allow_list_is_ignored():
    guard = SenderGuardMiddleware(allowed_chat_ids=[-1], master_scope="goats")
    handler = AsyncMock()
    data = {}

    result = await guard(handler, make_event(chat_id=-999, user=make_user(1)), data)

    assert result is None
    assert "scope" not in data
    handler.assert_not_awaited()

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError, TelegramRetryAfter

from app.bot.utils.broadcaster import StatusBoards, refresh_boards


def test_status_boards_tracking():
    boards = StatusBoards()
    boards.track(10, 100, "ENG")
    boards.track(10, 101, "RU")
    assert len(boards) == 1
    assert boards.get(10).message_id == 101
    boards.forget(10)
    boards.forget(10)
    assert boards.get(10) is None


@pytest.mark.asyncio
async def test_refresh_edits_changed_boards(service, clock):
    bot = MagicMock()
    bot.edit_message_text = AsyncMock()
    boards = StatusBoards()
    boards.track(10, 100, "ENG")

    service.start(1, 5)
    assert await refresh_boards(bot, service, boards) == 1
    kwargs = bot.edit_message_text.call_args.kwargs
    assert kwargs["chat_id"] == 10
    assert kwargs["message_id"] == 100
    assert "5:00 remaining" in kwargs["text"]

    # Время не изменилось: текст тот же, повторного редактирования нет
    assert await refresh_boards(bot, service, boards) == 0

    clock.advance(seconds=1)
    assert await refresh_boards(bot, service, boards) == 1
    assert "4:59 remaining" in bot.edit_message_text.call_args.kwargs["text"]


@pytest.mark.asyncio
async def test_forbidden_chat_is_forgotten(service):
    bot = MagicMock()
    bot.edit_message_text = AsyncMock(side_effect=TelegramForbiddenError(method=MagicMock(), message="bot was blocked"))
    boards = StatusBoards()
    boards.track(10, 100, "ENG")

    assert await refresh_boards(bot, service, boards) == 0
    assert boards.get(10) is None


@pytest.mark.asyncio
async def test_not_modified_is_ignored(service):
    bot = MagicMock()
    bot.edit_message_text = AsyncMock(
        side_effect=TelegramBadRequest(method=MagicMock(), message="Bad Request: message is not modified")
    )
    boards = StatusBoards()
    boards.track(10, 100, "ENG")

    await refresh_boards(bot, service, boards)
    assert boards.get(10) is not None
    assert boards.get(10).last_text is not None


@pytest.mark.asyncio
async def test_deleted_board_is_forgotten(service):
    bot = MagicMock()
    bot.edit_message_text = AsyncMock(
        side_effect=TelegramBadRequest(method=MagicMock(), message="Bad Request: message to edit not found")
    )
    boards = StatusBoards()
    boards.track(10, 100, "ENG")

    await refresh_boards(bot, service, boards)
    assert boards.get(10) is None


@pytest.mark.asyncio
async def test_retry_after_waits_and_retries_once(service, monkeypatch):
    sleep = AsyncMock()
    monkeypatch.setattr("app.bot.utils.broadcaster.asyncio.sleep", sleep)
    bot = MagicMock()
    bot.edit_message_text = AsyncMock(
        side_effect=[TelegramRetryAfter(method=MagicMock(), message="Flood control exceeded", retry_after=3), None]
    )
    boards = StatusBoards()
    boards.track(10, 100, "ENG")

    assert await refresh_boards(bot, service, boards) == 1
    assert bot.edit_message_text.await_count == 2
    sleep.assert_awaited_once_with(3)
    assert boards.get(10).last_text is not None


@pytest.mark.asyncio
async def test_retry_after_gives_up_after_second_failure(service, monkeypatch):
    monkeypatch.setattr("app.bot.utils.broadcaster.asyncio.sleep", AsyncMock())
    bot = MagicMock()
    bot.edit_message_text = AsyncMock(
        side_effect=TelegramRetryAfter(method=MagicMock(), message="Flood control exceeded", retry_after=1)
    )
    boards = StatusBoards()
    boards.track(10, 100, "ENG")

    assert await refresh_boards(bot, service, boards) == 0
    assert bot.edit_message_text.await_count == 2
    assert boards.get(10) is not None

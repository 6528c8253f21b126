import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from aiogram import Bot
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError, TelegramRetryAfter

from app.bot.board import render_board


@dataclass
class BoardMessage:
    message_id: int
    lang: str
    last_text: Optional[str] = None


class StatusBoards:
    """Сообщения с доской статуса, которые нужно обновлять по таймеру (одно на чат)."""

    def __init__(self):
        self._boards: Dict[int, BoardMessage] = {}

    def track(self, chat_id: int, message_id: int, lang: str, text: Optional[str] = None):
        self._boards[chat_id] = BoardMessage(message_id=message_id, lang=lang, last_text=text)

    def forget(self, chat_id: int):
        self._boards.pop(chat_id, None)

    def get(self, chat_id: int) -> Optional[BoardMessage]:
        return self._boards.get(chat_id)

    def items(self):
        return list(self._boards.items())

    def __len__(self):
        return len(self._boards)


async def _edit_board(bot: Bot, chat_id: int, board: BoardMessage, text: str, markup) -> bool:
    await bot.edit_message_text(text=text, chat_id=chat_id, message_id=board.message_id, reply_markup=markup)
    board.last_text = text
    return True


async def refresh_boards(bot: Bot, service, boards: StatusBoards) -> int:
    """
    Перерисовывает все отслеживаемые доски статуса.
    Неизменившиеся доски пропускаются, недоступные чаты перестают отслеживаться.
    """
    count = 0
    now = service.clock()

    for chat_id, board in boards.items():
        text, markup = render_board(service, board.lang, now)
        if text == board.last_text:
            continue

        try:
            await _edit_board(bot, chat_id, board, text, markup)
            count += 1
        except TelegramForbiddenError:
            logging.info(f"[Boards] Bot forbidden in chat {chat_id} — forgetting board.")
            boards.forget(chat_id)
        except TelegramRetryAfter as e:
            # Ждём указанное время и пробуем ещё раз для этого чата
            logging.warning(f"[Boards] RetryAfter for {chat_id}, sleeping {e.retry_after}s")
            await asyncio.sleep(e.retry_after)
            try:
                await _edit_board(bot, chat_id, board, text, markup)
                count += 1
            except Exception as e2:
                logging.error(f"[Boards] Failed to refresh board after retry in {chat_id}: {e2}")
        except TelegramBadRequest as e:
            if "message is not modified" in str(e):
                board.last_text = text
            else:
                logging.info(f"[Boards] Board in chat {chat_id} is gone ({e}) — forgetting it.")
                boards.forget(chat_id)
        except Exception as e:
            logging.error(f"[Boards] Refresh error for {chat_id}: {e}")

    if count:
        logging.debug(f"[Boards] Refreshed {count} boards.")
    return count

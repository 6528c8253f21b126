import logging
from typing import Optional

from aiogram import Router
from aiogram.fsm.context import FSMContext
from aiogram.types import ErrorEvent

from app.bot.keyboards import get_error_keyboard
from app.bot.utils.translate import get_lang_and_texts, get_texts
from app.config import config as cfg

errors_router = Router()


@errors_router.errors()
async def handle_error(event: ErrorEvent, state: Optional[FSMContext] = None):
    """
    Последний рубеж: логируем необработанную ошибку и показываем
    пользователю общее сообщение с кнопкой перезагрузки доски.
    """
    logging.error(f"[Bot] Uncaught error: {event.exception!r}", exc_info=event.exception)

    if state is not None:
        lang, t = await get_lang_and_texts(state)
    else:
        lang, t = cfg.DEFAULT_LANG, get_texts(cfg.DEFAULT_LANG)

    update = event.update
    message = None
    if update.callback_query is not None:
        message = update.callback_query.message
    elif update.message is not None:
        message = update.message
    if message is None:
        return True

    try:
        if update.callback_query is not None:
            await update.callback_query.answer()
        await message.answer(
            f"{t['error_title']}\n{t['error_details']}\n\n<code>{type(event.exception).__name__}</code>",
            reply_markup=get_error_keyboard(lang)
        )
    except Exception as e:
        logging.error(f"[Bot] Failed to deliver error message: {e}")
    return True

from aiogram import Router, F
from aiogram.filters import CommandStart
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from app.bot.keyboards import kb_welcom
from app.bot.handlers.machines import send_board
from app.bot.utils.broadcaster import StatusBoards
from app.bot.utils.translate import ALL_TEXTS
from app.services.machine_service import MachineService

language_router = Router()

@language_router.message(CommandStart())
async def cmd_start_initial(message: Message, state: FSMContext, service: MachineService, boards: StatusBoards):
    data = await state.get_data()
    if 'lang' not in data:
        await message.answer(
            ALL_TEXTS["RU"]["welcome_lang_choice"],  # Полный мультиязычный текст
            reply_markup=kb_welcom
        )
    else:
        await send_board(message, state, service, boards)

@language_router.callback_query(F.data == "change_lang")
async def change_language(callback: CallbackQuery):
    await callback.message.answer(ALL_TEXTS["RU"]["welcome_lang_choice"], reply_markup=kb_welcom)
    await callback.answer()

@language_router.callback_query(F.data.startswith("lang_"))
async def set_language(callback: CallbackQuery, state: FSMContext, service: MachineService, boards: StatusBoards):
    lang = callback.data.split("_")[1]
    if lang not in ALL_TEXTS:
        await callback.answer()
        return
    await state.update_data(lang=lang)
    # удаляем сообщение выбора языка и показываем доску
    await callback.message.delete()
    await send_board(callback.message, state, service, boards)
    await callback.answer()

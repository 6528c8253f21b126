# app/bot/handlers/machines.py
import logging
from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message
from aiogram.fsm.context import FSMContext
from aiogram.exceptions import TelegramBadRequest

from app.bot.board import render_board
from app.bot.callbacks import MachineCallback, DurationCallback
from app.bot.keyboards import get_duration_keyboard
from app.bot.states import StartMachine
from app.bot.utils.broadcaster import StatusBoards
from app.bot.utils.translate import get_lang_and_texts
from app.core.exceptions import InvalidTransition, UnknownMachine
from app.core.machine import Action
from app.services.machine_service import MachineService

machines_router = Router()


async def send_board(message: Message, state: FSMContext, service: MachineService, boards: StatusBoards):
    """Отправляет новую доску статуса и начинает её отслеживать."""
    lang, t = await get_lang_and_texts(state)
    text, markup = render_board(service, lang)
    sent = await message.answer(text, reply_markup=markup)
    boards.track(sent.chat.id, sent.message_id, lang, text)
    return sent


async def show_board(callback: CallbackQuery, state: FSMContext, service: MachineService, boards: StatusBoards):
    """Перерисовывает доску в сообщении, на котором нажали кнопку."""
    lang, t = await get_lang_and_texts(state)
    text, markup = render_board(service, lang)
    try:
        await callback.message.edit_text(text, reply_markup=markup)
    except TelegramBadRequest as e:
        if "message is not modified" not in str(e):
            raise e
    boards.track(callback.message.chat.id, callback.message.message_id, lang, text)


async def _reset_state(state: FSMContext):
    # Сбрасываем состояние, но сохраняем язык
    lang, _ = await get_lang_and_texts(state)
    await state.clear()
    await state.update_data(lang=lang)


@machines_router.message(Command("machines"))
async def cmd_machines(message: Message, state: FSMContext, service: MachineService, boards: StatusBoards):
    await _reset_state(state)
    await send_board(message, state, service, boards)


@machines_router.callback_query(F.data == "refresh")
async def refresh_board(callback: CallbackQuery, state: FSMContext, service: MachineService, boards: StatusBoards):
    await _reset_state(state)
    await show_board(callback, state, service, boards)
    await callback.answer()


@machines_router.callback_query(MachineCallback.filter(F.action == Action.START.value))
async def ask_duration(callback: CallbackQuery, callback_data: MachineCallback, state: FSMContext,
                       service: MachineService, boards: StatusBoards):
    lang, t = await get_lang_and_texts(state)
    machine_id = callback_data.machine_id

    if service.registry.get(machine_id) is None:
        await callback.answer(t["unknown_machine"], show_alert=True)
        return

    await state.update_data(machine_id=machine_id)
    await state.set_state(StartMachine.waiting_for_duration)
    # Доска превращается в окно ввода, по таймеру её больше не обновляем
    boards.forget(callback.message.chat.id)
    await callback.message.edit_text(
        t["duration_prompt"].format(id=machine_id),
        reply_markup=get_duration_keyboard(machine_id, lang, service.default_duration)
    )
    await callback.answer()


async def _start_machine(service: MachineService, machine_id: int, minutes, t: dict):
    """Запускает машину; возвращает текст ответа оператору."""
    try:
        machine = service.start(machine_id, minutes)
    except UnknownMachine:
        return t["unknown_machine"]
    except InvalidTransition as e:
        logging.info(f"[Machines] {e}")
        return t["action_not_available"]
    return t["machine_started"].format(id=machine.id, minutes=machine.duration_minutes)


@machines_router.callback_query(DurationCallback.filter(), StartMachine.waiting_for_duration)
async def pick_duration(callback: CallbackQuery, callback_data: DurationCallback, state: FSMContext,
                        service: MachineService, boards: StatusBoards):
    lang, t = await get_lang_and_texts(state)
    reply = await _start_machine(service, callback_data.machine_id, callback_data.minutes, t)
    await _reset_state(state)
    await callback.answer(reply)
    await show_board(callback, state, service, boards)


@machines_router.message(StartMachine.waiting_for_duration)
async def enter_duration(message: Message, state: FSMContext, service: MachineService, boards: StatusBoards):
    lang, t = await get_lang_and_texts(state)
    data = await state.get_data()
    machine_id = data.get("machine_id")
    await _reset_state(state)

    if machine_id is None:
        await send_board(message, state, service, boards)
        return

    # Некорректный ввод превращается в длительность по умолчанию
    reply = await _start_machine(service, machine_id, message.text, t)
    await message.answer(reply)
    await send_board(message, state, service, boards)


@machines_router.callback_query(MachineCallback.filter())
async def machine_action(callback: CallbackQuery, callback_data: MachineCallback, state: FSMContext,
                         service: MachineService, boards: StatusBoards):
    lang, t = await get_lang_and_texts(state)
    try:
        action = Action(callback_data.action)
        service.apply(callback_data.machine_id, action)
    except UnknownMachine:
        await callback.answer(t["unknown_machine"], show_alert=True)
        return
    except (InvalidTransition, ValueError) as e:
        # Старая клавиатура: действие уже недоступно
        logging.info(f"[Machines] Rejected {callback_data.action} on {callback_data.machine_id}: {e}")
        await callback.answer(t["action_not_available"], show_alert=True)
        await show_board(callback, state, service, boards)
        return

    await show_board(callback, state, service, boards)
    await callback.answer()

from aiogram.types import (InlineKeyboardMarkup,
                           InlineKeyboardButton)
from app.bot.callbacks import MachineCallback, DurationCallback
from app.bot.utils.translate import get_texts
from app.core.machine import Action

# Варианты длительности на кнопках (мин)
DURATION_PRESETS = (30, 60, 90, 150)

kb_welcom = InlineKeyboardMarkup(inline_keyboard=[
    [
        InlineKeyboardButton(text='RU', callback_data='lang_RU'),
        InlineKeyboardButton(text="ENG", callback_data='lang_ENG'),
        InlineKeyboardButton(text='CN', callback_data='lang_CN')
    ]
])


def _action_text(action: Action, evaluation, t: dict) -> str:
    if action == Action.START:
        # При доступном бонусе запуск означает новую стирку
        return t["btn_new_wash"] if evaluation.bonus_available else t["btn_start"]
    if action == Action.USE_BONUS:
        return t["btn_use_bonus"].format(time=evaluation.display)
    return t[f"btn_{action.value}"]


def get_board_keyboard(entries: list, lang: str) -> InlineKeyboardMarkup:
    """Кнопки допустимых действий по каждой машине, одна строка на машину."""
    t = get_texts(lang)
    buttons = []
    for machine, evaluation in entries:
        title = t["machine_title"].format(id=machine.id)
        row = [
            InlineKeyboardButton(
                text=f"{title}: {_action_text(action, evaluation, t)}",
                callback_data=MachineCallback(action=action.value, machine_id=machine.id).pack()
            )
            for action in evaluation.actions
        ]
        buttons.append(row)
    buttons.append([
        InlineKeyboardButton(text=t["btn_refresh"], callback_data="refresh"),
        InlineKeyboardButton(text=t["change_language"], callback_data="change_lang"),
    ])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_duration_keyboard(machine_id: int, lang: str, default: int) -> InlineKeyboardMarkup:
    t = get_texts(lang)
    presets = sorted(set(DURATION_PRESETS) | {default})
    buttons = [
        InlineKeyboardButton(
            text=t["duration_minutes"].format(minutes=m),
            callback_data=DurationCallback(machine_id=machine_id, minutes=m).pack()
        )
        for m in presets
    ]
    # По две кнопки в ряд
    rows = [buttons[i:i + 2] for i in range(0, len(buttons), 2)]
    rows.append([InlineKeyboardButton(text=t["btn_cancel"], callback_data="refresh")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def get_error_keyboard(lang: str) -> InlineKeyboardMarkup:
    t = get_texts(lang)
    return InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text=t["btn_reload"], callback_data="refresh")]])

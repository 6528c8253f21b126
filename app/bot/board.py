from aiogram.types import InlineKeyboardMarkup

from app.bot.keyboards import get_board_keyboard
from app.bot.utils.translate import get_texts
from app.core.machine import MachineStatus

STATUS_ICONS = {
    MachineStatus.AVAILABLE: "🟢",
    MachineStatus.IN_USE: "⏳",
    MachineStatus.OUT_OF_ORDER: "⚠️",
}


def machine_hint(evaluation, t: dict) -> str:
    if evaluation.status == MachineStatus.IN_USE:
        if evaluation.display is None:
            return t["status_in_use"]
        return t["hint_remaining"].format(time=evaluation.display)
    if evaluation.status == MachineStatus.OUT_OF_ORDER:
        return t["hint_unavailable"]
    if evaluation.bonus_available:
        return t["hint_bonus"].format(time=evaluation.display)
    return t["hint_ready"]


def render_board_text(entries: list, lang: str) -> str:
    t = get_texts(lang)
    lines = [t["board_title"], ""]
    for machine, evaluation in entries:
        title = t["machine_title"].format(id=machine.id)
        lines.append(f"{STATUS_ICONS[evaluation.status]} <b>{title}</b> · {t[evaluation.label_key]}")
        lines.append(f"      {machine_hint(evaluation, t)}")
    lines.append("")
    lines.append(f"<i>{t['board_footer']}</i>")
    return "\n".join(lines)


def render_board(service, lang: str, now: int = None) -> tuple[str, InlineKeyboardMarkup]:
    entries = service.board(now)
    return render_board_text(entries, lang), get_board_keyboard(entries, lang)

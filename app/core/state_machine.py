"""
Логика состояний стиральной машины.

Все функции чистые: получают запись и текущее время (мс с эпохи) и
возвращают словарь изменений, который применяет реестр. Ни одна функция
не читает часы сама, кроме now_ms().
"""
import math
import re
import time
from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import InvalidTransition
from app.core.machine import Action, Machine, MachineStatus

DEFAULT_DURATION = 150  # 2 hours 30 minutes
MS_PER_MINUTE = 60000
MS_PER_HOUR = 3600000

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

LABEL_KEYS = {
    MachineStatus.AVAILABLE: "status_available",
    MachineStatus.IN_USE: "status_in_use",
    MachineStatus.OUT_OF_ORDER: "status_out_of_order",
}


@dataclass(frozen=True)
class Evaluation:
    status: MachineStatus
    label_key: str
    remaining_ms: Optional[int]
    display: Optional[str]
    actions: tuple
    expired: bool = False

    @property
    def bonus_available(self) -> bool:
        return self.status == MachineStatus.AVAILABLE and self.remaining_ms is not None


def now_ms() -> int:
    return int(time.time() * 1000)


def format_remaining(ms: int) -> str:
    """H:MM:SS если остался хотя бы час, иначе M:SS."""
    h = ms // MS_PER_HOUR
    m = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    s = (ms % MS_PER_MINUTE) // 1000
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def parse_duration(raw, default: int = DEFAULT_DURATION) -> int:
    """
    Разбирает длительность, введённую оператором.
    Берётся ведущее целое ("45 min" -> 45, "12.5" -> 12); если его нет
    или оно не положительное, используется значение по умолчанию.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        minutes = raw
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return default
        minutes = int(match.group(1))
    return minutes if minutes > 0 else default


def evaluate(record: Machine, now: int) -> Evaluation:
    status = record.status

    if status == MachineStatus.OUT_OF_ORDER:
        return Evaluation(status, LABEL_KEYS[status], None, None, (Action.FIX,))

    if record.finish_time is not None:
        diff = record.finish_time - now
        if diff <= 0:
            # Отсчёт истёк, но тик ещё не применил обновление
            return Evaluation(
                MachineStatus.AVAILABLE,
                LABEL_KEYS[MachineStatus.AVAILABLE],
                None,
                None,
                (Action.START,),
                expired=True,
            )
        if status == MachineStatus.IN_USE:
            actions = (Action.FINISH_EARLY, Action.REPORT_BROKEN)
        else:
            actions = (Action.USE_BONUS, Action.START)
        return Evaluation(status, LABEL_KEYS[status], diff, format_remaining(diff), actions)

    if status == MachineStatus.IN_USE:
        # in_use без finish_time нарушает инвариант; даём только аварийные действия
        return Evaluation(status, LABEL_KEYS[status], None, None, (Action.FINISH_EARLY, Action.REPORT_BROKEN))

    return Evaluation(status, LABEL_KEYS[status], None, None, (Action.START,))


def tick(record: Machine, now: int) -> Optional[dict]:
    """Возвращает обновление, если отсчёт машины закончился, иначе None."""
    if not record.has_countdown:
        return None
    if record.finish_time - now <= 0:
        return {"status": MachineStatus.AVAILABLE, "bonus_minutes": 0, "finish_time": None}
    return None


def _ensure_allowed(record: Machine, action: Action, now: int) -> Evaluation:
    evaluation = evaluate(record, now)
    if action == Action.REPORT_BROKEN:
        # Сломанной машину можно отметить из любого рабочего состояния
        allowed = evaluation.status != MachineStatus.OUT_OF_ORDER
    else:
        allowed = action in evaluation.actions
    if not allowed:
        raise InvalidTransition(record.id, action.value, evaluation.status.value)
    return evaluation


def start(record: Machine, minutes, now: int, default: int = DEFAULT_DURATION) -> dict:
    _ensure_allowed(record, Action.START, now)
    minutes = parse_duration(minutes, default)
    return {
        "status": MachineStatus.IN_USE,
        "finish_time": now + minutes * MS_PER_MINUTE,
        "duration_minutes": minutes,
        "bonus_minutes": 0,
    }


def finish_early(record: Machine, now: int) -> dict:
    _ensure_allowed(record, Action.FINISH_EARLY, now)
    if record.finish_time is None:
        return {"status": MachineStatus.AVAILABLE, "bonus_minutes": 0}
    remaining = max(0, math.ceil((record.finish_time - now) / MS_PER_MINUTE))
    # finish_time не трогаем: оставшееся время становится бонусным
    return {"status": MachineStatus.AVAILABLE, "bonus_minutes": remaining}


def use_bonus(record: Machine, now: int) -> dict:
    _ensure_allowed(record, Action.USE_BONUS, now)
    return {"status": MachineStatus.IN_USE}


def report_broken(record: Machine, now: int) -> dict:
    _ensure_allowed(record, Action.REPORT_BROKEN, now)
    return {"status": MachineStatus.OUT_OF_ORDER, "finish_time": None, "duration_minutes": None, "bonus_minutes": 0}


def fix(record: Machine, now: int) -> dict:
    _ensure_allowed(record, Action.FIX, now)
    return {"status": MachineStatus.AVAILABLE, "finish_time": None, "duration_minutes": None, "bonus_minutes": 0}


COMMANDS = {
    Action.START: start,
    Action.USE_BONUS: use_bonus,
    Action.FINISH_EARLY: finish_early,
    Action.REPORT_BROKEN: report_broken,
    Action.FIX: fix,
}

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MachineStatus(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in_use"
    OUT_OF_ORDER = "out_of_order"


class Action(str, Enum):
    START = "start"
    USE_BONUS = "use_bonus"
    FINISH_EARLY = "finish_early"
    REPORT_BROKEN = "report_broken"
    FIX = "fix"


# Статусы, при которых у машины может идти обратный отсчёт
COUNTDOWN_STATUSES = (MachineStatus.IN_USE, MachineStatus.AVAILABLE)


@dataclass
class Machine:
    id: int
    status: MachineStatus = MachineStatus.AVAILABLE
    finish_time: Optional[int] = None  # timestamp in ms
    duration_minutes: Optional[int] = None
    bonus_minutes: Optional[int] = None

    @property
    def has_countdown(self) -> bool:
        return self.status in COUNTDOWN_STATUSES and self.finish_time is not None

    def __repr__(self):
        return f"<Machine(id={self.id}, status='{self.status.value}', finish_time={self.finish_time})>"

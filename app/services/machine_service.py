import logging
from typing import Callable, List, Optional, Tuple

from app.core import state_machine as sm
from app.core.exceptions import UnknownMachine
from app.core.machine import Action, Machine
from app.repositories.machine_repo import MachineRegistry


class MachineService:
    """
    Применяет команды оператора и тики таймера к реестру.
    Перед каждой командой запись переоценивается, чтобы истёкший отсчёт
    был применён до проверки допустимости действия.
    """

    def __init__(self, registry: MachineRegistry, clock: Callable[[], int] = sm.now_ms,
                 default_duration: int = sm.DEFAULT_DURATION):
        self.registry = registry
        self.clock = clock
        self.default_duration = default_duration

    def _now(self, now: Optional[int]) -> int:
        return self.clock() if now is None else now

    def _get(self, machine_id: int) -> Machine:
        machine = self.registry.get(machine_id)
        if machine is None:
            raise UnknownMachine(machine_id)
        return machine

    def board(self, now: Optional[int] = None) -> List[Tuple[Machine, sm.Evaluation]]:
        now = self._now(now)
        return [(m, sm.evaluate(m, now)) for m in self.registry.list()]

    def refresh(self, machine_id: int, now: Optional[int] = None) -> Machine:
        machine = self._get(machine_id)
        updates = sm.tick(machine, self._now(now))
        if updates:
            logging.info(f"[Machines] Countdown of machine {machine_id} expired")
            self.registry.update(machine_id, **updates)
        return machine

    def tick_all(self, now: Optional[int] = None) -> List[Machine]:
        """Применяет истёкшие отсчёты; возвращает машины, которые изменились."""
        now = self._now(now)
        expired = []
        for machine in self.registry.list():
            updates = sm.tick(machine, now)
            if updates:
                logging.info(f"[Machines] Countdown of machine {machine.id} expired")
                self.registry.update(machine.id, **updates)
                expired.append(machine)
        return expired

    def apply(self, machine_id: int, action: Action, minutes=None, now: Optional[int] = None) -> Machine:
        now = self._now(now)
        machine = self.refresh(machine_id, now)
        action = Action(action)
        if action == Action.START:
            updates = sm.start(machine, minutes, now, self.default_duration)
        else:
            updates = sm.COMMANDS[action](machine, now)
        logging.info(f"[Machines] {action.value} on machine {machine_id}")
        return self.registry.update(machine_id, **updates)

    def start(self, machine_id: int, minutes=None, now: Optional[int] = None) -> Machine:
        return self.apply(machine_id, Action.START, minutes, now)

    def finish_early(self, machine_id: int, now: Optional[int] = None) -> Machine:
        return self.apply(machine_id, Action.FINISH_EARLY, now=now)

    def use_bonus(self, machine_id: int, now: Optional[int] = None) -> Machine:
        return self.apply(machine_id, Action.USE_BONUS, now=now)

    def report_broken(self, machine_id: int, now: Optional[int] = None) -> Machine:
        return self.apply(machine_id, Action.REPORT_BROKEN, now=now)

    def fix(self, machine_id: int, now: Optional[int] = None) -> Machine:
        return self.apply(machine_id, Action.FIX, now=now)

import logging
from dataclasses import fields
from typing import Callable, Iterable, List, Optional

from app.core.machine import Machine

Observer = Callable[[Machine], None]

_MACHINE_FIELDS = {f.name for f in fields(Machine)}


class MachineRegistry:
    """
    Хранит записи машин в памяти процесса.
    Изменение записей идёт только через update(); после каждого изменения
    вызываются подписчики (обновление досок статуса, планировщик).
    """

    def __init__(self, machine_ids: Iterable[int]):
        self._machines: List[Machine] = []
        self._by_id = {}
        self._observers: List[Observer] = []
        for machine_id in machine_ids:
            if machine_id in self._by_id:
                raise ValueError(f"Duplicate machine id {machine_id}")
            machine = Machine(id=machine_id)
            self._machines.append(machine)
            self._by_id[machine_id] = machine

    @classmethod
    def seeded(cls, count: int) -> "MachineRegistry":
        return cls(range(1, count + 1))

    def list(self) -> List[Machine]:
        return list(self._machines)

    def get(self, machine_id: int) -> Optional[Machine]:
        return self._by_id.get(machine_id)

    def update(self, machine_id: int, **updates) -> Optional[Machine]:
        machine = self._by_id.get(machine_id)
        if machine is None:
            # Неизвестный id: ничего не делаем
            logging.debug(f"[Registry] Update for unknown machine {machine_id} ignored")
            return None

        unknown = set(updates) - _MACHINE_FIELDS
        if unknown:
            raise AttributeError(f"Machine has no fields {sorted(unknown)}")
        if "id" in updates and updates["id"] != machine_id:
            raise AttributeError("Machine id is immutable")

        old_status = machine.status
        for name, value in updates.items():
            setattr(machine, name, value)

        if machine.status != old_status:
            logging.info(f"[Registry] Machine {machine_id}: {old_status.value} -> {machine.status.value}")

        self._notify(machine)
        return machine

    def subscribe(self, observer: Observer):
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer):
        if observer in self._observers:
            self._observers.remove(observer)

    def has_countdowns(self) -> bool:
        return any(m.has_countdown for m in self._machines)

    def _notify(self, machine: Machine):
        for observer in list(self._observers):
            try:
                observer(machine)
            except Exception as e:
                logging.error(f"[Registry] Observer {observer!r} failed for machine {machine.id}: {e}")

import pytest

from app.core.machine import MachineStatus
from app.repositories.machine_repo import MachineRegistry
from app.services.machine_service import MachineService

NOW = 1_700_000_000_000


class FakeClock:
    """Ручные часы для тестов: время двигается только явно."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float = 0, minutes: float = 0):
        self.now += int(seconds * 1000 + minutes * 60000)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry():
    return MachineRegistry.seeded(3)


@pytest.fixture
def service(registry, clock):
    return MachineService(registry, clock=clock)


def _assert_timing_invariant(machine):
    """finish_time задан тогда и только тогда, когда у машины идёт отсчёт."""
    if machine.status == MachineStatus.OUT_OF_ORDER:
        assert machine.finish_time is None
    elif machine.status == MachineStatus.IN_USE:
        assert machine.finish_time is not None
    else:
        has_bonus = (machine.bonus_minutes or 0) > 0
        assert (machine.finish_time is not None) == has_bonus


@pytest.fixture
def assert_timing_invariant():
    return _assert_timing_invariant

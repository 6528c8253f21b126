import pytest

from app.core.exceptions import InvalidTransition, UnknownMachine
from app.core.machine import Action, MachineStatus

MINUTE = 60000


def test_scenario_a_start_then_expire(service, clock, assert_timing_invariant):
    """Запуск на 1 минуту, через 61 секунду тик освобождает машину."""
    started_at = clock.now
    machine = service.start(1, 1)
    assert machine.status == MachineStatus.IN_USE
    assert machine.finish_time == started_at + MINUTE
    assert_timing_invariant(machine)

    clock.advance(seconds=61)
    expired = service.tick_all()

    assert expired == [machine]
    assert machine.status == MachineStatus.AVAILABLE
    assert machine.bonus_minutes == 0
    assert machine.finish_time is None
    assert_timing_invariant(machine)


def test_scenario_b_finish_early_and_use_bonus(service, clock, assert_timing_invariant):
    service.start(1, 10)
    finish = service.registry.get(1).finish_time
    assert_timing_invariant(service.registry.get(1))

    machine = service.finish_early(1)
    assert machine.status == MachineStatus.AVAILABLE
    assert machine.bonus_minutes == 10
    assert machine.finish_time == finish
    assert_timing_invariant(machine)

    machine = service.use_bonus(1)
    assert machine.status == MachineStatus.IN_USE
    assert machine.finish_time == finish
    assert_timing_invariant(machine)


def test_scenario_c_report_broken_and_fix(service, assert_timing_invariant):
    machine = service.report_broken(1)
    assert machine.status == MachineStatus.OUT_OF_ORDER
    assert machine.finish_time is None
    assert_timing_invariant(machine)

    machine = service.fix(1)
    assert machine.status == MachineStatus.AVAILABLE
    assert_timing_invariant(machine)


def test_invariant_holds_for_every_machine_through_a_session(service, clock, assert_timing_invariant):
    service.start(1, 30)
    service.start(2, 5)
    clock.advance(minutes=2)
    service.finish_early(2)
    service.report_broken(3)
    for _ in range(8):
        clock.advance(minutes=1)
        service.tick_all()
        for machine in service.registry.list():
            assert_timing_invariant(machine)


def test_scenario_d_unparseable_duration(service, clock):
    machine = service.start(1, "abc")
    assert machine.duration_minutes == 150
    assert machine.finish_time == clock.now + 150 * MINUTE


def test_service_default_duration_is_configurable(registry, clock):
    from app.services.machine_service import MachineService

    service = MachineService(registry, clock=clock, default_duration=90)
    assert service.start(2, "").duration_minutes == 90


def test_tick_before_deadline_changes_nothing(service, clock):
    service.start(1, 1)
    clock.advance(seconds=59)
    assert service.tick_all() == []
    assert service.registry.get(1).status == MachineStatus.IN_USE


def test_bonus_countdown_expires(service, clock):
    service.start(1, 10)
    clock.advance(minutes=5)
    service.finish_early(1)
    clock.advance(minutes=5)
    service.tick_all()
    machine = service.registry.get(1)
    assert machine.status == MachineStatus.AVAILABLE
    assert machine.finish_time is None
    assert machine.bonus_minutes == 0


def test_command_applies_pending_expiry_first(service, clock):
    service.start(1, 10)
    service.finish_early(1)
    clock.advance(minutes=11)

    with pytest.raises(InvalidTransition):
        service.use_bonus(1)
    machine = service.registry.get(1)
    assert machine.status == MachineStatus.AVAILABLE
    assert machine.finish_time is None


def test_start_after_missed_ticks(service, clock):
    service.start(1, 1)
    clock.advance(minutes=30)
    # Тиков не было, но запуск видит уже свободную машину
    machine = service.start(1, 20)
    assert machine.finish_time == clock.now + 20 * MINUTE


def test_invalid_command_leaves_record_untouched(service):
    with pytest.raises(InvalidTransition):
        service.fix(1)
    assert service.registry.get(1).status == MachineStatus.AVAILABLE


def test_unknown_machine_command_raises(service):
    with pytest.raises(UnknownMachine):
        service.start(42, 10)


def test_apply_accepts_action_values(service):
    machine = service.apply(3, "report_broken")
    assert machine.status == MachineStatus.OUT_OF_ORDER
    assert service.apply(3, Action.FIX).status == MachineStatus.AVAILABLE


def test_board_lists_every_machine_with_evaluation(service, clock):
    service.start(2, 90)
    board = service.board()
    assert [m.id for m, _ in board] == [1, 2, 3]
    _, evaluation = board[1]
    assert evaluation.display == "1:30:00"
    assert evaluation.actions == (Action.FINISH_EARLY, Action.REPORT_BROKEN)


def test_registry_observers_see_commands(service):
    seen = []
    service.registry.subscribe(lambda m: seen.append((m.id, m.status)))
    service.start(1, 5)
    service.report_broken(1)
    assert seen == [(1, MachineStatus.IN_USE), (1, MachineStatus.OUT_OF_ORDER)]

from aiogram.filters.callback_data import CallbackData


class MachineCallback(CallbackData, prefix="machine"):
    action: str
    machine_id: int


class DurationCallback(CallbackData, prefix="duration"):
    machine_id: int
    minutes: int

from aiogram.fsm.state import StatesGroup, State

# --- Запуск машины ---
class StartMachine(StatesGroup):
    waiting_for_duration = State()  # Ждём длительность в минутах

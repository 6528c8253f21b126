import os
import logging
from dotenv import load_dotenv, find_dotenv

env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)  # Загрузка переменных окружения
else:
    logging.debug("[Config] .env file not found, using process environment")


def get_int(name: str, default: int) -> int:
    """Читает целое из окружения; некорректное или неположительное значение заменяется default."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning(f"[Config] {name}={raw!r} is not an integer, using {default}")
        return default
    if value <= 0:
        logging.warning(f"[Config] {name}={raw!r} must be positive, using {default}")
        return default
    return value


BOT_TOKEN = os.getenv("BOT_TOKEN")
MACHINE_COUNT = get_int("MACHINE_COUNT", 3)
DEFAULT_DURATION = get_int("DEFAULT_DURATION", 150)
TICK_SECONDS = get_int("TICK_SECONDS", 1)
DEFAULT_LANG = os.getenv("DEFAULT_LANG", "ENG")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

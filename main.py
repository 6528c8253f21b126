import aiohttp
import asyncio
import logging
import sys


from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramNetworkError

from app.config import config as cfg
from app.bot.handlers.errors import errors_router
from app.bot.handlers.language import language_router
from app.bot.handlers.machines import machines_router
from app.bot.scheduler import CountdownScheduler
from app.bot.utils.broadcaster import StatusBoards
from app.repositories.machine_repo import MachineRegistry
from app.services.machine_service import MachineService


def build_dispatcher(service: MachineService, boards: StatusBoards) -> Dispatcher:
    # service и boards попадают в хендлеры как именованные аргументы
    dp = Dispatcher(service=service, boards=boards)
    dp.include_router(errors_router)
    dp.include_router(language_router)
    dp.include_router(machines_router)
    return dp


async def main():
    registry = MachineRegistry.seeded(cfg.MACHINE_COUNT)
    service = MachineService(registry, default_duration=cfg.DEFAULT_DURATION)
    boards = StatusBoards()

    bot = Bot(token=cfg.BOT_TOKEN, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = build_dispatcher(service, boards)
    ticker = CountdownScheduler(bot, service, boards, interval=cfg.TICK_SECONDS)
    ticker.start()

    max_retries = 5
    try:
        for attempt in range(1, max_retries + 1):
            try:
                logging.info(f"[Bot] Starting polling, attempt {attempt}")
                await dp.start_polling(bot)
                break
            except (aiohttp.ClientConnectorError, TelegramNetworkError) as e:
                logging.error(f"[Bot] Network error on attempt {attempt}: {e}")
                if attempt < max_retries:
                    wait_time = 10 * attempt
                    logging.info(f"[Bot] Retrying after {wait_time} seconds...")
                    await asyncio.sleep(wait_time)
                else:
                    logging.error("[Bot] Max retries reached, exiting.")
                    raise
            except Exception as exc:
                logging.error(f"[Bot] Unexpected error: {exc}")
                raise
    finally:
        ticker.shutdown()
        await bot.session.close()


if __name__ == '__main__':
    logging.basicConfig(level=cfg.LOG_LEVEL)
    if not cfg.BOT_TOKEN:
        sys.exit("BOT_TOKEN is not set: add it to .env or the environment")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("[Bot] Bot stopped")

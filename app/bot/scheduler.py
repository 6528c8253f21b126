import asyncio
import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from aiogram import Bot

from app.bot.utils.broadcaster import StatusBoards, refresh_boards
from app.core.machine import Machine
from app.services.machine_service import MachineService

COUNTDOWN_JOB_ID = "countdown_tick"


def _safe_create_task(coro):
    """
    Обёртка для asyncio.create_task с логированием исключений,
    чтобы фоновые задачи не "глотали" ошибки без следа.
    """
    task = asyncio.create_task(coro)

    def _task_done(t):
        try:
            exc = t.exception()
            if exc:
                logging.error(f"Background task exception: {exc}")
        except asyncio.CancelledError:
            logging.info("Background task cancelled")

    task.add_done_callback(_task_done)
    return task


class CountdownScheduler:
    """
    Периодический тик (раз в interval секунд): применяет истёкшие отсчёты
    и перерисовывает доски. Задача ставится на паузу, когда ни у одной
    машины нет отсчёта, и снимается с паузы при появлении отсчёта.
    """

    def __init__(self, bot: Bot, service: MachineService, boards: StatusBoards,
                 interval: int = 1, scheduler: AsyncIOScheduler = None):
        self.bot = bot
        self.service = service
        self.boards = boards
        self.interval = interval
        self.scheduler = scheduler or AsyncIOScheduler()
        self._in_tick = False

    @property
    def job(self):
        return self.scheduler.get_job(COUNTDOWN_JOB_ID)

    @property
    def paused(self) -> bool:
        job = self.job
        return job is None or job.next_run_time is None

    async def tick(self):
        # Обновления реестра внутри тика не порождают отдельную перерисовку
        self._in_tick = True
        try:
            expired = self.service.tick_all()
        finally:
            self._in_tick = False
        for machine in expired:
            logging.info(f"[Scheduler] Machine {machine.id} finished its countdown")
        await refresh_boards(self.bot, self.service, self.boards)

    def start(self):
        # max_instances=1 и coalesce=True не дают тику наложиться сам на себя
        self.scheduler.add_job(
            self.tick,
            'interval',
            seconds=self.interval,
            id=COUNTDOWN_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        self.service.registry.subscribe(self.on_machine_update)
        self.sync()
        logging.info("[Scheduler] Countdown scheduler started")

    def sync(self):
        """Ставит тик на паузу или снимает с неё в зависимости от наличия отсчётов."""
        if self.job is None:
            return
        if self.service.registry.has_countdowns():
            if self.paused:
                self.scheduler.resume_job(COUNTDOWN_JOB_ID)
                logging.debug("[Scheduler] Countdown tick resumed")
        elif not self.paused:
            self.scheduler.pause_job(COUNTDOWN_JOB_ID)
            logging.debug("[Scheduler] Countdown tick paused")

    def on_machine_update(self, machine: Machine):
        self.sync()
        if self._in_tick:
            return
        # Другие чаты должны увидеть изменение, даже если тик на паузе
        _safe_create_task(refresh_boards(self.bot, self.service, self.boards))

    def shutdown(self):
        self.service.registry.unsubscribe(self.on_machine_update)
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logging.info("[Scheduler] Countdown scheduler stopped")

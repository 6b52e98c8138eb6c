from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from apscheduler.schedulers.background import BackgroundScheduler


LOGGER = logging.getLogger("cache_cleaner")


class CleanupRunner:
    """Runs cleanup work and delayed restarts on APScheduler's worker pool."""

    def __init__(self, *, max_workers: int = 2):
        self._scheduler = BackgroundScheduler(executors={"default": {"type": "threadpool", "max_workers": max_workers}})
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._scheduler.start()
        self._running = True

    def stop(self) -> None:
        if not self._running:
            return
        self._scheduler.shutdown(wait=False)
        self._running = False

    def submit(self, func: Callable[..., Any], *args: Any) -> None:
        self.start()
        self._scheduler.add_job(func, "date", args=list(args), misfire_grace_time=None)

    def schedule_in(self, seconds: float, func: Callable[..., Any], *args: Any) -> None:
        self.start()
        run_date = datetime.now(timezone.utc) + timedelta(seconds=float(seconds))
        self._scheduler.add_job(func, "date", run_date=run_date, args=list(args), misfire_grace_time=None)
        LOGGER.debug("[CLEANUP]: Scheduled %s in %.1fs", getattr(func, "__name__", func), float(seconds))


class SynchronousRunner:
    """Same surface as :class:`CleanupRunner`, but runs everything inline."""

    def __init__(self, *, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    @property
    def is_running(self) -> bool:
        return True

    def start(self) -> None:
        return None

    def stop(self) -> None:
        return None

    def submit(self, func: Callable[..., Any], *args: Any) -> None:
        func(*args)

    def schedule_in(self, seconds: float, func: Callable[..., Any], *args: Any) -> None:
        if seconds > 0:
            self._sleep(float(seconds))
        func(*args)

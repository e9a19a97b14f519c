"""Cancellable periodic callbacks on the asyncio event loop"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional
from uuid import uuid4

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


class ScheduledHandle(ABC):
    """Handle for a periodic callback. Once cancelled it never fires again."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the callback synchronously"""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """True after cancel()"""


class Scheduler(ABC):
    """Schedules periodic work on the single event loop"""

    @abstractmethod
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledHandle:
        """Invoke callback every interval_seconds until the handle is cancelled"""

    def shutdown(self) -> None:
        """Release scheduler resources on process exit"""


class _JobHandle(ScheduledHandle):

    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._job: Optional[Job] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def attach(self, job: Job) -> None:
        self._job = job

    async def run(self) -> None:
        # A run already handed to the executor may arrive after cancel()
        if self._cancelled:
            return
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        job, self._job = self._job, None
        if job is None:
            return
        try:
            job.remove()
        except JobLookupError:
            pass


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by APScheduler's AsyncIOScheduler.

    Jobs are submitted as coroutines so they execute on the event loop
    itself, never in APScheduler's thread pool. The underlying scheduler
    starts on the first call_every, which must come from the running loop.
    """

    def __init__(self, scheduler: Optional[AsyncIOScheduler] = None):
        self._scheduler = scheduler or AsyncIOScheduler()

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledHandle:
        if not self._scheduler.running:
            self._scheduler.start()

        handle = _JobHandle(callback)
        job = self._scheduler.add_job(
            handle.run,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id=f"periodic_{uuid4().hex}",
            name=getattr(callback, "__qualname__", repr(callback)),
            coalesce=True,
            max_instances=1,
        )
        handle.attach(job)
        logger.debug(f"Scheduled {job.name} every {interval_seconds}s")
        return handle

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

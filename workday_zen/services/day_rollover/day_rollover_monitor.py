"""Day-Rollover Monitor - forces a reset when the local calendar day changes"""
import logging
from typing import Callable, Optional

from workday_zen.config import DAY_CHECK_INTERVAL_SECONDS
from workday_zen.features.timer.domain import TimerState
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.features.timer.store import SessionStore
from workday_zen.services.scheduler import ScheduledHandle, Scheduler

logger = logging.getLogger(__name__)


class DayRolloverMonitor:
    """
    Compares the persisted last active day with today.

    A mismatch abandons the current session, including one still Running.
    """

    def __init__(
        self,
        machine: TimerStateMachine,
        store: SessionStore,
        scheduler: Scheduler,
        today: Callable[[], str],
        interval_seconds: float = DAY_CHECK_INTERVAL_SECONDS,
    ):
        self._machine = machine
        self._store = store
        self._scheduler = scheduler
        self._today = today
        self._interval = interval_seconds
        self._handle: Optional[ScheduledHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def recover_on_startup(self) -> bool:
        """
        Run the day comparison once, before the machine restores its state.

        Writes the Idle shape straight to the store so restore() never exposes
        yesterday's session.

        Returns:
            True if a rollover was detected
        """
        if not self._observe_today():
            return False
        self._store.save_timer_state(TimerState())
        return True

    def check(self) -> bool:
        """
        Periodic comparison. On rollover the machine is reset; auto-start then
        opens the new day's listening period.

        Returns:
            True if a rollover was detected
        """
        if not self._observe_today():
            return False
        self._machine.reset()
        return True

    def start(self) -> None:
        if self._handle is None:
            self._handle = self._scheduler.call_every(self._interval, self.check)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _observe_today(self) -> bool:
        """Record today; True only when a different day was stored before"""
        last_day = self._store.load_last_active_day()
        today = self._today()

        if last_day == today:
            return False

        self._store.save_last_active_day(today)
        if last_day is None:
            logger.info(f"First active day recorded: {today}")
            return False

        logger.info(f"Day rollover detected ({last_day} -> {today}), resetting session")
        return True

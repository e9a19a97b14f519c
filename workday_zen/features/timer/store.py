"""Typed access to the persisted session keys"""

import logging
from typing import Optional

from pydantic import ValidationError

from workday_zen.features.timer.domain import DEFAULT_DURATION_MS, TimerState, TimerStatus
from workday_zen.features.timer.repository import SettingsRepository

logger = logging.getLogger(__name__)

TIMER_STATE_KEY = "timer_state"
TOTAL_DURATION_KEY = "total_duration"
AUTO_START_KEY = "auto_start"
FOCUS_TASK_KEY = "focus_task"
LAST_ACTIVE_DAY_KEY = "last_active_day"
NOTIFICATION_PERMISSION_KEY = "notification_permission"


class SessionStore:
    """
    Reads and writes the session keys on top of SettingsRepository.

    Loading never raises: corrupt or missing values fall back to defaults.
    """

    def __init__(self, repository: SettingsRepository):
        self.repository = repository

    # ---- timer_state ----

    def load_timer_state(self, now_ms: int) -> TimerState:
        """
        Load the persisted timer state and repair it.

        Recovery rules:
        - missing or unparseable -> Idle
        - Running without a valid start/end pair -> Idle
        - Idle/Listening carrying stray times -> times cleared
        - any endTime already in the past -> Finished with times cleared

        Args:
            now_ms: Current epoch milliseconds

        Returns:
            A TimerState that satisfies the status invariants
        """
        raw = self.repository.get(TIMER_STATE_KEY)
        if raw is None:
            return TimerState()

        try:
            state = TimerState.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Stored timer state is corrupt, reinitializing to idle: {e}")
            return TimerState()

        if state.status in (TimerStatus.IDLE, TimerStatus.LISTENING) and state.has_times():
            state = TimerState(status=state.status)

        if state.end_time is not None and now_ms > state.end_time:
            logger.info("Stored session already expired, marking finished")
            return TimerState(status=TimerStatus.FINISHED)

        if not state.is_consistent():
            logger.warning(f"Stored timer state violates invariants, reinitializing to idle: {raw}")
            return TimerState()

        return state

    def save_timer_state(self, state: TimerState) -> None:
        self.repository.set(TIMER_STATE_KEY, state.model_dump_json(by_alias=True))

    # ---- total_duration ----

    def load_total_duration_ms(self) -> int:
        raw = self.repository.get(TOTAL_DURATION_KEY)
        if raw is None:
            return DEFAULT_DURATION_MS
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Stored duration '{raw}' is not an integer, using default")
            return DEFAULT_DURATION_MS
        if value <= 0:
            logger.warning(f"Stored duration {value} is not positive, using default")
            return DEFAULT_DURATION_MS
        return value

    def save_total_duration_ms(self, duration_ms: int) -> None:
        self.repository.set(TOTAL_DURATION_KEY, str(duration_ms))

    # ---- auto_start ----

    def load_auto_start(self) -> bool:
        raw = self.repository.get(AUTO_START_KEY)
        return True if raw is None else raw == "true"

    def save_auto_start(self, enabled: bool) -> None:
        self.repository.set(AUTO_START_KEY, "true" if enabled else "false")

    # ---- focus_task ----

    def load_focus_task(self) -> str:
        return self.repository.get(FOCUS_TASK_KEY) or ""

    def save_focus_task(self, focus_task: str) -> None:
        self.repository.set(FOCUS_TASK_KEY, focus_task)

    # ---- last_active_day ----

    def load_last_active_day(self) -> Optional[str]:
        return self.repository.get(LAST_ACTIVE_DAY_KEY)

    def save_last_active_day(self, day: str) -> None:
        self.repository.set(LAST_ACTIVE_DAY_KEY, day)

    # ---- notification_permission ----

    def load_notification_permission(self) -> Optional[str]:
        """The host's last permission decision, None if it was never asked"""
        return self.repository.get(NOTIFICATION_PERMISSION_KEY)

    def save_notification_permission(self, permission: str) -> None:
        self.repository.set(NOTIFICATION_PERMISSION_KEY, permission)

"""Timer feature module"""

from workday_zen.features.timer.domain import (
    DEFAULT_DURATION_MS,
    SessionConfig,
    TimerState,
    TimerStatus,
    Transition,
)
from workday_zen.features.timer.repository import SettingsRepository
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.features.timer.store import SessionStore

__all__ = [
    "DEFAULT_DURATION_MS",
    "SessionConfig",
    "SessionStore",
    "SettingsRepository",
    "TimerState",
    "TimerStateMachine",
    "TimerStatus",
    "Transition",
]

"""Domain models for the Timer feature"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DURATION_MS = 8 * 60 * 60 * 1000  # 8 hours


class TimerStatus(str, Enum):
    """Timer status enum"""
    IDLE = "IDLE"
    LISTENING = "LISTENING"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


class TimerState(BaseModel):
    """
    Persisted shape of the single session.
    Serialized with camelCase keys (startTime, endTime, status).
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start_time: Optional[int] = Field(default=None, alias="startTime")
    end_time: Optional[int] = Field(default=None, alias="endTime")
    status: TimerStatus = TimerStatus.IDLE

    def remaining_ms(self, now_ms: int) -> int:
        if self.end_time is None:
            return 0
        return max(0, self.end_time - now_ms)

    def has_times(self) -> bool:
        return self.start_time is not None or self.end_time is not None

    def is_consistent(self) -> bool:
        if self.status == TimerStatus.RUNNING:
            return (
                self.start_time is not None
                and self.end_time is not None
                and self.end_time >= self.start_time
            )
        if self.status in (TimerStatus.IDLE, TimerStatus.LISTENING):
            return not self.has_times()
        return True


class SessionConfig(BaseModel):
    """Session configuration owned by the process"""
    total_duration_ms: int = Field(default=DEFAULT_DURATION_MS, gt=0)


class Transition(BaseModel):
    """A status change delivered to enter/exit hooks"""
    model_config = ConfigDict(frozen=True)

    previous: Optional[TimerStatus]  # None when restoring at startup
    current: TimerStatus
    state: TimerState

"""API schemas for the Timer feature"""
from typing import Optional

from pydantic import BaseModel, Field

from workday_zen.features.timer.domain import TimerState
from workday_zen.services.activity.input_source import InputEventKind
from workday_zen.services.notifications.capability import PermissionState
from workday_zen.services.tips.models.productivity_tip import ProductivityTip
from workday_zen.utils.time_format import MS_PER_HOUR, MS_PER_MINUTE, TimeParts


class TimerSnapshot(BaseModel):
    """Everything a host window needs to render the session"""
    state: TimerState
    remaining_ms: int
    remaining: TimeParts
    progress_percent: float
    title: str
    badge: Optional[int] = None
    total_duration_ms: int
    auto_start: bool
    focus_task: str
    muted: bool
    listening_for_activity: bool
    wake_lock_active: bool
    notifications_enabled: bool
    tip: Optional[ProductivityTip] = None


class UpdateDurationRequest(BaseModel):
    """Either total_duration_ms, or hours and minutes as entered in settings"""
    total_duration_ms: Optional[int] = None
    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0, le=59)

    def to_duration_ms(self) -> int:
        if self.total_duration_ms is not None:
            return self.total_duration_ms
        return self.hours * MS_PER_HOUR + self.minutes * MS_PER_MINUTE


class AutoStartRequest(BaseModel):
    enabled: bool


class FocusTaskRequest(BaseModel):
    focus_task: str = Field(default="", max_length=500)


class MuteRequest(BaseModel):
    muted: bool


class VisibilityRequest(BaseModel):
    visible: bool


class ActivityRequest(BaseModel):
    kind: InputEventKind = InputEventKind.POINTER_MOVE


class PermissionResponse(BaseModel):
    permission: PermissionState
    notifications_enabled: bool


class VisibilityResponse(BaseModel):
    reacquired: bool
    wake_lock_active: bool

"""Formatting helpers for rendering the countdown in a host window"""
import math
from typing import Optional

from pydantic import BaseModel

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


class TimeParts(BaseModel):
    """Zero-padded hours, minutes and seconds"""
    h: str
    m: str
    s: str


def format_time(ms: int) -> TimeParts:
    """
    Split a millisecond duration into zero-padded display parts.

    Hours are not wrapped at 24, so a 30 hour duration renders as "30".
    """
    ms = max(0, int(ms))
    hours = ms // MS_PER_HOUR
    minutes = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (ms % MS_PER_MINUTE) // MS_PER_SECOND
    return TimeParts(h=f"{hours:02d}", m=f"{minutes:02d}", s=f"{seconds:02d}")


def ms_to_hours(ms: int) -> float:
    return ms / MS_PER_HOUR


def badge_hours(remaining_ms: int) -> Optional[int]:
    """Whole hours left, rounded up, for a taskbar badge"""
    if remaining_ms <= 0:
        return None
    return math.ceil(remaining_ms / MS_PER_HOUR)


def progress_percent(remaining_ms: int, total_duration_ms: int) -> float:
    """Elapsed share of the session in percent, clamped to [0, 100]"""
    if total_duration_ms <= 0:
        return 0.0
    return max(0.0, min(100.0, (1 - remaining_ms / total_duration_ms) * 100))

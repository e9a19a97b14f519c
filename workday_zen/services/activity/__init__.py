"""Activity detection: starts the session on the first user input"""

from workday_zen.services.activity.activity_detector import ACTIVITY_EVENT_KINDS, ActivityDetector
from workday_zen.services.activity.input_source import (
    InputEventKind,
    InputEventSource,
    LocalInputSource,
    PynputInputBridge,
)

__all__ = [
    "ACTIVITY_EVENT_KINDS",
    "ActivityDetector",
    "InputEventKind",
    "InputEventSource",
    "LocalInputSource",
    "PynputInputBridge",
]

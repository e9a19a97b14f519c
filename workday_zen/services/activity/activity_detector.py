"""Activity Detector - triggers exactly one start while Listening"""
import logging
from typing import List, Optional

from workday_zen.features.timer.domain import TimerStatus, Transition
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.services.activity.input_source import (
    InputEventKind,
    InputEventSource,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

ACTIVITY_EVENT_KINDS = (
    InputEventKind.POINTER_MOVE,
    InputEventKind.POINTER_DOWN,
    InputEventKind.KEY_DOWN,
    InputEventKind.TOUCH_START,
)


class ActivityDetector:
    """
    Subscribes to every activity event class on entry to Listening and drops
    all subscriptions on exit, whichever edge leaves Listening.
    """

    def __init__(self, machine: TimerStateMachine, source: InputEventSource):
        self._machine = machine
        self._source = source
        self._unsubscribers: List[Unsubscribe] = []

        machine.on_enter(TimerStatus.LISTENING, self._attach)
        machine.on_exit(TimerStatus.LISTENING, self._detach)

    @property
    def attached(self) -> bool:
        return bool(self._unsubscribers)

    def detach(self) -> None:
        self._detach()

    def _attach(self, transition: Transition) -> None:
        self._detach()
        self._unsubscribers = [
            self._source.subscribe(kind, self._handle_activity)
            for kind in ACTIVITY_EVENT_KINDS
        ]
        logger.info("Waiting for activity")

    def _detach(self, transition: Optional[Transition] = None) -> None:
        unsubscribers, self._unsubscribers = self._unsubscribers, []
        for unsubscribe in unsubscribers:
            unsubscribe()

    def _handle_activity(self, kind: InputEventKind) -> None:
        if not self._unsubscribers:
            return
        # Unsubscribe before anything else so a second event cannot start twice
        self._detach()
        logger.info(f"Activity detected ({kind.value}), starting session")
        self._machine.start()

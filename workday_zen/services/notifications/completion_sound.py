"""Completion sound played when the session finishes"""
import logging
from abc import ABC, abstractmethod

from workday_zen.features.timer.domain import TimerStatus, Transition
from workday_zen.features.timer.service import TimerStateMachine

logger = logging.getLogger(__name__)


class CompletionSound(ABC):

    @abstractmethod
    def play(self) -> None:
        """Play the closing bell"""


class SilentCompletionSound(CompletionSound):
    """Used when the host renders audio itself or has none"""

    def play(self) -> None:
        logger.debug("Completion sound requested (no audio backend)")


class CompletionChime:
    """Plays the completion sound on Running -> Finished unless muted"""

    def __init__(self, machine: TimerStateMachine, sound: CompletionSound):
        self._sound = sound
        self.muted = False

        machine.on_enter(TimerStatus.FINISHED, self._on_finished)

    def _on_finished(self, transition: Transition) -> None:
        if transition.previous != TimerStatus.RUNNING or self.muted:
            return
        try:
            self._sound.play()
        except Exception as e:
            logger.error(f"Audio playback failed: {e}")

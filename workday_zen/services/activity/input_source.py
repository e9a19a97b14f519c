"""Raw input event sources"""
import asyncio
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List, Optional

logger = logging.getLogger(__name__)


class InputEventKind(str, Enum):
    """Raw input event classes"""
    POINTER_MOVE = "pointer_move"
    POINTER_DOWN = "pointer_down"
    KEY_DOWN = "key_down"
    TOUCH_START = "touch_start"


InputCallback = Callable[[InputEventKind], None]
Unsubscribe = Callable[[], None]


class InputEventSource(ABC):
    """Something that delivers raw input events to subscribers"""

    @abstractmethod
    def subscribe(self, kind: InputEventKind, callback: InputCallback) -> Unsubscribe:
        """Register callback for one event class. Calling the result removes it."""


class LocalInputSource(InputEventSource):
    """
    In-process dispatcher. Events come from the host over the API or from
    PynputInputBridge, always on the event loop thread.
    """

    def __init__(self):
        self._subscribers: DefaultDict[InputEventKind, List[InputCallback]] = defaultdict(list)

    def subscribe(self, kind: InputEventKind, callback: InputCallback) -> Unsubscribe:
        self._subscribers[kind].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[kind]:
                self._subscribers[kind].remove(callback)

        return unsubscribe

    def has_subscribers(self, kind: Optional[InputEventKind] = None) -> bool:
        if kind is None:
            return any(self._subscribers.values())
        return bool(self._subscribers.get(kind))

    def emit(self, kind: InputEventKind) -> int:
        """Deliver one event; returns how many subscribers saw it"""
        callbacks = list(self._subscribers[kind])
        for callback in callbacks:
            # An earlier callback in this same event may have unsubscribed a later one
            if callback in self._subscribers[kind]:
                callback(kind)
        return len(callbacks)


class PynputInputBridge:
    """
    Forwards OS-wide mouse and keyboard events from pynput's listener threads
    onto the event loop. Touch has no desktop source here.
    """

    def __init__(self, source: LocalInputSource, loop: asyncio.AbstractEventLoop):
        self._source = source
        self._loop = loop
        self._listeners: List[Any] = []

    @property
    def running(self) -> bool:
        return bool(self._listeners)

    def start(self) -> bool:
        """
        Start the listeners.

        Returns:
            False when pynput has no usable backend (e.g. headless host)
        """
        try:
            # pynput picks its platform backend at import time
            from pynput import keyboard, mouse
        except Exception as e:
            logger.warning(f"Input listener unavailable, activity must be reported by the host: {e}")
            return False

        try:
            mouse_listener = mouse.Listener(on_move=self._on_move, on_click=self._on_click)
            keyboard_listener = keyboard.Listener(on_press=self._on_press)
            mouse_listener.start()
            keyboard_listener.start()
        except Exception as e:
            logger.warning(f"Failed to start input listeners: {e}")
            return False

        self._listeners = [mouse_listener, keyboard_listener]
        logger.info("Input listeners started")
        return True

    def stop(self) -> None:
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener.stop()

    def _forward(self, kind: InputEventKind) -> None:
        # Runs on a pynput thread; the subscriber check is re-done by emit on the loop
        if self._source.has_subscribers(kind) and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._source.emit, kind)

    def _on_move(self, x, y) -> None:
        self._forward(InputEventKind.POINTER_MOVE)

    def _on_click(self, x, y, button, pressed) -> None:
        if pressed:
            self._forward(InputEventKind.POINTER_DOWN)

    def _on_press(self, key) -> None:
        self._forward(InputEventKind.KEY_DOWN)

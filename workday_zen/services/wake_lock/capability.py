"""Screen wake-lock capability supplied by the host platform"""
from abc import ABC, abstractmethod
from typing import Callable, Optional


class WakeLockHandle(ABC):
    """An outstanding screen wake lock"""

    @property
    @abstractmethod
    def released(self) -> bool:
        """True once released, by us or by the platform"""

    @abstractmethod
    def add_release_listener(self, listener: Callable[[], None]) -> None:
        """Called when the platform releases the lock on its own (e.g. app backgrounded)"""


class WakeLockCapability(ABC):

    @abstractmethod
    async def acquire(self) -> Optional[WakeLockHandle]:
        """Request a screen wake lock; None when the platform has none to give"""

    @abstractmethod
    async def release(self, handle: WakeLockHandle) -> None:
        """Release a previously acquired lock"""


class UnavailableWakeLock(WakeLockCapability):
    """Default for hosts that do not provide a wake lock"""

    async def acquire(self) -> Optional[WakeLockHandle]:
        return None

    async def release(self, handle: WakeLockHandle) -> None:
        return None

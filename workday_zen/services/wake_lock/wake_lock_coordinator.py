"""Wake-Lock Coordinator - holds a screen wake lock exactly while Running"""
import asyncio
import logging
from typing import Coroutine, Optional, Set

from workday_zen.features.timer.domain import TimerStatus, Transition
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.services.wake_lock.capability import WakeLockCapability, WakeLockHandle

logger = logging.getLogger(__name__)


class WakeLockCoordinator:
    """
    Keeps at most one wake-lock handle.

    "Desired" follows the Running state; "active" is whether a handle is
    actually held. Failures degrade to inactive and are only logged.
    """

    def __init__(self, machine: TimerStateMachine, capability: WakeLockCapability):
        self._capability = capability
        self._handle: Optional[WakeLockHandle] = None
        self._desired = False
        self._tasks: Set[asyncio.Task] = set()

        machine.on_enter(TimerStatus.RUNNING, self._on_enter_running)
        machine.on_exit(TimerStatus.RUNNING, self._on_leave_running)
        machine.on_reset(self._on_reset)

    @property
    def desired(self) -> bool:
        return self._desired

    @property
    def active(self) -> bool:
        return self._handle is not None and not self._handle.released

    @property
    def status(self) -> str:
        return "active" if self.active else "inactive"

    async def acquire(self) -> bool:
        """
        Acquire the lock if it is still wanted and not already held.

        Returns:
            True if a lock is held afterwards
        """
        if self.active:
            return True

        try:
            handle = await self._capability.acquire()
        except Exception as e:
            logger.warning(f"Wake Lock unavailable: {e}")
            self._handle = None
            return False

        if handle is None:
            logger.warning("Wake Lock unavailable: capability not supported on this host")
            return False

        if not self._desired or self.active:
            # Left Running, or another request won, while this one was in flight
            await self._release_handle(handle)
            return self.active

        self._handle = handle
        handle.add_release_listener(lambda: self._on_external_release(handle))
        logger.info("Wake Lock acquired")
        return True

    async def release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            await self._release_handle(handle)

    async def on_visibility_change(self, visible: bool) -> bool:
        """
        Host regained (or lost) foreground. Platforms drop wake locks when
        backgrounded, so a still-wanted lock is taken again on return.

        Returns:
            True if a lock was re-acquired
        """
        if not visible or not self._desired or self.active:
            return False
        logger.info("Visible again with a wanted wake lock, re-acquiring")
        return await self.acquire()

    async def drain(self) -> None:
        """Wait for in-flight acquire/release requests"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _on_enter_running(self, transition: Transition) -> None:
        self._desired = True
        self._spawn(self.acquire())

    def _on_leave_running(self, transition: Transition) -> None:
        self._desired = False
        self._spawn(self.release())

    def _on_reset(self) -> None:
        if self._desired or self._handle is not None:
            self._desired = False
            self._spawn(self.release())

    def _on_external_release(self, handle: WakeLockHandle) -> None:
        if handle is self._handle:
            logger.info("Wake Lock released by the platform")
            self._handle = None

    async def _release_handle(self, handle: WakeLockHandle) -> None:
        try:
            await self._capability.release(handle)
            logger.info("Wake Lock released")
        except Exception as e:
            logger.warning(f"Failed to release Wake Lock: {e}")

    def _spawn(self, coro: Coroutine) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

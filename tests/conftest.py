"""Shared fakes and fixtures for the timer core tests."""

from typing import Any, Callable, Dict, List, Optional

import pytest

from workday_zen.db.session import create_session_factory
from workday_zen.features.timer.repository import SettingsRepository
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.features.timer.store import SessionStore
from workday_zen.runtime import SessionRuntime
from workday_zen.services.activity import LocalInputSource
from workday_zen.services.notifications import (
    CompletionSound,
    NotificationCapability,
    PermissionState,
)
from workday_zen.services.scheduler import ScheduledHandle, Scheduler
from workday_zen.services.tips import TipService
from workday_zen.services.wake_lock import WakeLockCapability, WakeLockHandle
from workday_zen.utils.clock import Clock

# 2024-01-01 09:00:00 UTC
START_MS = 1_704_099_600_000
HOUR_MS = 60 * 60 * 1000


class FakeClock(Clock):
    def __init__(self, now_ms: int = START_MS, day: str = "2024-01-01"):
        self.now = now_ms
        self.day = day

    def now_ms(self) -> int:
        return self.now

    def today(self) -> str:
        return self.day

    def advance(self, ms: int) -> None:
        self.now += ms


class ManualHandle(ScheduledHandle):
    def __init__(self, interval_seconds: float, callback: Callable[[], None]):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualScheduler(Scheduler):
    """Records periodic callbacks; tests fire them explicitly."""

    def __init__(self):
        self.handles: List[ManualHandle] = []

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ScheduledHandle:
        handle = ManualHandle(interval_seconds, callback)
        self.handles.append(handle)
        return handle

    def active(self, interval_seconds: Optional[float] = None) -> List[ManualHandle]:
        return [
            h for h in self.handles
            if not h.cancelled and (interval_seconds is None or h.interval_seconds == interval_seconds)
        ]

    def fire(self, interval_seconds: Optional[float] = None) -> int:
        fired = 0
        for handle in self.active(interval_seconds):
            if not handle.cancelled:
                handle.callback()
                fired += 1
        return fired


class FakeWakeLockHandle(WakeLockHandle):
    def __init__(self):
        self._released = False
        self._listeners: List[Callable[[], None]] = []

    @property
    def released(self) -> bool:
        return self._released

    def add_release_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def platform_release(self) -> None:
        self._released = True
        for listener in self._listeners:
            listener()


class FakeWakeLock(WakeLockCapability):
    def __init__(self, available: bool = True, error: Optional[Exception] = None):
        self.available = available
        self.error = error
        self.acquired: List[FakeWakeLockHandle] = []
        self.released: List[FakeWakeLockHandle] = []

    async def acquire(self) -> Optional[WakeLockHandle]:
        if self.error is not None:
            raise self.error
        if not self.available:
            return None
        handle = FakeWakeLockHandle()
        self.acquired.append(handle)
        return handle

    async def release(self, handle: WakeLockHandle) -> None:
        handle._released = True
        self.released.append(handle)

    @property
    def held(self) -> int:
        return len([h for h in self.acquired if not h.released])


class FakeNotifications(NotificationCapability):
    def __init__(self, permission: PermissionState = PermissionState.GRANTED, grant: bool = True):
        self.permission = permission
        self.grant = grant
        self.requests = 0
        self.shown: List[Dict[str, Any]] = []

    def query_permission(self) -> PermissionState:
        return self.permission

    async def request_permission(self) -> PermissionState:
        self.requests += 1
        self.permission = PermissionState.GRANTED if self.grant else PermissionState.DENIED
        return self.permission

    def show(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        self.shown.append({"title": title, "body": body, "options": options or {}})


class FakeSound(CompletionSound):
    def __init__(self):
        self.plays = 0

    def play(self) -> None:
        self.plays += 1


@pytest.fixture
def session_factory():
    return create_session_factory("sqlite://")


@pytest.fixture
def repository(session_factory):
    return SettingsRepository(session_factory)


@pytest.fixture
def store(repository):
    return SessionStore(repository)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_machine(store, scheduler, clock):
    def _make(auto_start: bool = False, total_duration_ms: Optional[int] = None) -> TimerStateMachine:
        store.save_auto_start(auto_start)
        if total_duration_ms is not None:
            store.save_total_duration_ms(total_duration_ms)
        return TimerStateMachine(store, scheduler, clock, tick_interval_seconds=1)
    return _make


@pytest.fixture
def wake_lock():
    return FakeWakeLock()


@pytest.fixture
def notifications():
    return FakeNotifications()


@pytest.fixture
def sound():
    return FakeSound()


@pytest.fixture
def make_runtime(store, scheduler, clock, wake_lock, notifications, sound):
    def _make(tip_service: Optional[TipService] = None) -> SessionRuntime:
        return SessionRuntime(
            store=store,
            scheduler=scheduler,
            clock=clock,
            input_source=LocalInputSource(),
            wake_lock_capability=wake_lock,
            notification_capability=notifications,
            completion_sound=sound,
            tip_service=tip_service or TipService(api_key=None),
            tick_interval_seconds=1,
            day_check_interval_seconds=60,
        )
    return _make

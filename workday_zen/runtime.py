"""Session runtime - wires the timer core to its collaborators"""
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from workday_zen.config import (
    DAY_CHECK_INTERVAL_SECONDS,
    ENABLE_DESKTOP_NOTIFICATIONS,
    TICK_INTERVAL_SECONDS,
)
from workday_zen.db.session import create_session_factory
from workday_zen.features.timer.domain import TimerStatus
from workday_zen.features.timer.repository import SettingsRepository
from workday_zen.features.timer.schemas import TimerSnapshot
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.features.timer.store import SessionStore
from workday_zen.services.activity import ActivityDetector, LocalInputSource
from workday_zen.services.day_rollover import DayRolloverMonitor
from workday_zen.services.notifications import (
    CompletionChime,
    CompletionSound,
    DesktopNotificationCapability,
    NotificationCapability,
    NotificationDispatcher,
    PermissionState,
    SilentCompletionSound,
)
from workday_zen.services.scheduler import AsyncioScheduler, Scheduler
from workday_zen.services.tips import TipProvider, TipService
from workday_zen.services.wake_lock import (
    UnavailableWakeLock,
    WakeLockCapability,
    WakeLockCoordinator,
)
from workday_zen.utils.clock import Clock
from workday_zen.utils.time_format import (
    badge_hours,
    format_time,
    ms_to_hours,
    progress_percent,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_TITLE = "WorkDay Zen Timer"
FINISHED_WINDOW_TITLE = "Day Complete! 🎉"


class SessionRuntime:
    """
    One active session and everything reacting to it.

    Call boot() on the event loop before exposing state, shutdown() on exit.
    """

    def __init__(
        self,
        store: SessionStore,
        scheduler: Scheduler,
        clock: Clock,
        input_source: LocalInputSource,
        wake_lock_capability: WakeLockCapability,
        notification_capability: NotificationCapability,
        completion_sound: CompletionSound,
        tip_service: TipService,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
        day_check_interval_seconds: float = DAY_CHECK_INTERVAL_SECONDS,
    ):
        self.store = store
        self.scheduler = scheduler
        self.clock = clock
        self.input_source = input_source

        self.machine = TimerStateMachine(store, scheduler, clock, tick_interval_seconds)
        self.activity_detector = ActivityDetector(self.machine, input_source)
        self.wake_lock = WakeLockCoordinator(self.machine, wake_lock_capability)
        self.notifications = NotificationDispatcher(self.machine, notification_capability)
        self.chime = CompletionChime(self.machine, completion_sound)
        self.day_monitor = DayRolloverMonitor(
            self.machine, store, scheduler, clock.today, day_check_interval_seconds
        )
        self.tips = TipProvider(tip_service)

        self._focus_task = store.load_focus_task()
        self._booted = False

        self.machine.on_config_change(lambda config: self.refresh_tip())

    @property
    def booted(self) -> bool:
        return self._booted

    @property
    def focus_task(self) -> str:
        return self._focus_task

    def boot(self) -> None:
        """Startup recovery: day check first, then restore, then periodic work."""
        if self._booted:
            return
        self.day_monitor.recover_on_startup()
        self.machine.restore()
        self.day_monitor.start()
        self.refresh_tip()
        self._booted = True
        logger.info(f"Session runtime started in {self.machine.status.value}")

    async def shutdown(self) -> None:
        self.day_monitor.stop()
        self.machine.stop()
        self.scheduler.shutdown()
        self.activity_detector.detach()
        await self.tips.close()
        await self.wake_lock.drain()
        await self.wake_lock.release()
        self._booted = False
        logger.info("Session runtime stopped")

    def set_focus_task(self, focus_task: str) -> None:
        self._focus_task = focus_task
        self.store.save_focus_task(focus_task)

    def tip_remaining_hours(self) -> float:
        """Hours left in the running session, or the configured total when nothing remains"""
        remaining = ms_to_hours(self.machine.remaining_ms())
        return remaining or ms_to_hours(self.machine.config.total_duration_ms)

    def refresh_tip(self) -> None:
        self.tips.refresh(self.tip_remaining_hours())

    def window_title(self) -> str:
        status = self.machine.status
        if status == TimerStatus.RUNNING:
            time = format_time(self.machine.remaining_ms())
            return f"{time.h}:{time.m} Left • Zen"
        if status == TimerStatus.FINISHED:
            return FINISHED_WINDOW_TITLE
        return DEFAULT_WINDOW_TITLE

    def badge(self) -> Optional[int]:
        if self.machine.status != TimerStatus.RUNNING:
            return None
        return badge_hours(self.machine.remaining_ms())

    def snapshot(self) -> TimerSnapshot:
        state = self.machine.state
        remaining = self.machine.remaining_ms()
        total = self.machine.config.total_duration_ms
        return TimerSnapshot(
            state=state,
            remaining_ms=remaining,
            remaining=format_time(remaining),
            progress_percent=progress_percent(remaining, total) if state.end_time is not None else 0.0,
            title=self.window_title(),
            badge=self.badge(),
            total_duration_ms=total,
            auto_start=self.machine.auto_start,
            focus_task=self._focus_task,
            muted=self.chime.muted,
            listening_for_activity=self.activity_detector.attached,
            wake_lock_active=self.wake_lock.active,
            notifications_enabled=self.notifications.enabled,
            tip=self.tips.current_tip,
        )


def load_permission(store: SessionStore) -> PermissionState:
    """Notification decision from an earlier run; PROMPT when absent or unreadable"""
    raw = store.load_notification_permission()
    if raw is None:
        return PermissionState.PROMPT
    try:
        return PermissionState(raw)
    except ValueError:
        logger.warning(f"Ignoring stored notification permission {raw!r}")
        return PermissionState.PROMPT


def create_runtime(
    session_factory: Optional[sessionmaker] = None,
    scheduler: Optional[Scheduler] = None,
    clock: Optional[Clock] = None,
    wake_lock_capability: Optional[WakeLockCapability] = None,
    notification_capability: Optional[NotificationCapability] = None,
    completion_sound: Optional[CompletionSound] = None,
    tip_service: Optional[TipService] = None,
) -> SessionRuntime:
    """Build a runtime with production defaults for anything not supplied."""
    store = SessionStore(SettingsRepository(session_factory or create_session_factory()))
    if notification_capability is None:
        notification_capability = DesktopNotificationCapability(
            allowed=ENABLE_DESKTOP_NOTIFICATIONS,
            permission=load_permission(store),
            on_decision=lambda permission: store.save_notification_permission(permission.value),
        )

    return SessionRuntime(
        store=store,
        scheduler=scheduler or AsyncioScheduler(),
        clock=clock or Clock(),
        input_source=LocalInputSource(),
        wake_lock_capability=wake_lock_capability or UnavailableWakeLock(),
        notification_capability=notification_capability,
        completion_sound=completion_sound or SilentCompletionSound(),
        tip_service=tip_service or TipService(),
    )

"""Notification Dispatcher - session start and finish alerts"""
import logging
from typing import Any, Dict, Optional

from workday_zen.features.timer.domain import TimerStatus, Transition
from workday_zen.features.timer.service import TimerStateMachine
from workday_zen.services.notifications.capability import NotificationCapability, PermissionState

logger = logging.getLogger(__name__)

NOTIFICATION_ICON = "https://cdn-icons-png.flaticon.com/512/3563/3563395.png"

SESSION_STARTED_TITLE = "WorkDay Zen Started"
SESSION_STARTED_BODY = "Your session has officially begun."

SESSION_FINISHED_TITLE = "WorkDay Complete!"
SESSION_FINISHED_BODY = "The closing bell has rung. Time to log off and recharge."


class NotificationDispatcher:
    """
    Emits one alert on Listening -> Running and one on Running -> Finished.
    Both are gated by the capability's current permission; absent permission
    is a silent no-op.
    """

    def __init__(self, machine: TimerStateMachine, capability: NotificationCapability):
        self._capability = capability

        machine.on_enter(TimerStatus.RUNNING, self._on_session_started)
        machine.on_enter(TimerStatus.FINISHED, self._on_session_finished)

    @property
    def permission(self) -> PermissionState:
        try:
            return self._capability.query_permission()
        except Exception as e:
            logger.warning(f"Notification permission query failed: {e}")
            return PermissionState.DENIED

    @property
    def enabled(self) -> bool:
        return self.permission == PermissionState.GRANTED

    async def request_permission(self) -> PermissionState:
        """Idempotent: an already granted or denied decision is returned as is"""
        current = self.permission
        if current != PermissionState.PROMPT:
            return current
        try:
            return await self._capability.request_permission()
        except Exception as e:
            logger.warning(f"Notification permission request failed: {e}")
            return PermissionState.DENIED

    def _on_session_started(self, transition: Transition) -> None:
        if transition.previous != TimerStatus.LISTENING:
            return
        self._notify(SESSION_STARTED_TITLE, SESSION_STARTED_BODY, {"icon": NOTIFICATION_ICON})

    def _on_session_finished(self, transition: Transition) -> None:
        if transition.previous != TimerStatus.RUNNING:
            return
        self._notify(
            SESSION_FINISHED_TITLE,
            SESSION_FINISHED_BODY,
            {"icon": NOTIFICATION_ICON, "require_interaction": True},
        )

    def _notify(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            logger.debug(f"Notification '{title}' skipped: permission {self.permission.value}")
            return
        try:
            self._capability.show(title, body, options)
            logger.info(f"Notification sent: {title}")
        except Exception as e:
            logger.warning(f"Failed to show notification '{title}': {e}")

"""Desktop notification capability"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Optional

from plyer import notification as plyer_notification

from workday_zen.config import APP_NAME

logger = logging.getLogger(__name__)


class PermissionState(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


class NotificationCapability(ABC):
    """Permission query/request plus display, owned by the host platform"""

    @abstractmethod
    def query_permission(self) -> PermissionState:
        """Current permission without asking the user"""

    @abstractmethod
    async def request_permission(self) -> PermissionState:
        """Ask for permission; never returns PROMPT"""

    @abstractmethod
    def show(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        """Display one notification"""


class DesktopNotificationCapability(NotificationCapability):
    """
    plyer-backed desktop notifications.

    Desktops have no permission prompt of their own, so the decision is the
    ENABLE_DESKTOP_NOTIFICATIONS setting, taken once on the first request.
    A decision made in an earlier run is passed back in as `permission` and
    is kept; `on_decision` receives every new decision so it can
    be persisted.
    """

    def __init__(
        self,
        allowed: bool = True,
        app_name: str = APP_NAME,
        permission: PermissionState = PermissionState.PROMPT,
        on_decision: Optional[Callable[[PermissionState], None]] = None,
    ):
        self._allowed = allowed
        self._app_name = app_name
        self._permission = permission
        self._on_decision = on_decision

    def query_permission(self) -> PermissionState:
        return self._permission

    async def request_permission(self) -> PermissionState:
        if self._permission == PermissionState.PROMPT:
            self._permission = PermissionState.GRANTED if self._allowed else PermissionState.DENIED
            logger.info(f"Desktop notification permission: {self._permission.value}")
            if self._on_decision is not None:
                self._on_decision(self._permission)
        return self._permission

    def show(self, title: str, body: str, options: Optional[Dict[str, Any]] = None) -> None:
        options = options or {}
        # A notification that should stay until dismissed gets a long timeout
        timeout = 60 if options.get("require_interaction") else 10
        plyer_notification.notify(
            title=title,
            message=body,
            app_name=self._app_name,
            timeout=timeout,
        )


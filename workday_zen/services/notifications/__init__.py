from workday_zen.services.notifications.capability import (
    DesktopNotificationCapability,
    NotificationCapability,
    PermissionState,
)
from workday_zen.services.notifications.completion_sound import (
    CompletionChime,
    CompletionSound,
    SilentCompletionSound,
)
from workday_zen.services.notifications.notification_dispatcher import NotificationDispatcher

__all__ = [
    "CompletionChime",
    "CompletionSound",
    "DesktopNotificationCapability",
    "NotificationCapability",
    "NotificationDispatcher",
    "PermissionState",
    "SilentCompletionSound",
]

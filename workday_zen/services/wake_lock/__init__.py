from workday_zen.services.wake_lock.capability import (
    UnavailableWakeLock,
    WakeLockCapability,
    WakeLockHandle,
)
from workday_zen.services.wake_lock.wake_lock_coordinator import WakeLockCoordinator

__all__ = [
    "UnavailableWakeLock",
    "WakeLockCapability",
    "WakeLockCoordinator",
    "WakeLockHandle",
]

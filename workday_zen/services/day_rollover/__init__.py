from workday_zen.services.day_rollover.day_rollover_monitor import DayRolloverMonitor

__all__ = ["DayRolloverMonitor"]

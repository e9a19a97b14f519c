"""WorkDay Zen - single-session workday timer service"""

__version__ = "1.0.0"

"""Wall-clock access, injectable for tests"""
import time
from datetime import date


class Clock:
    """Epoch milliseconds and the local calendar day."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    def today(self) -> str:
        """Local calendar day as YYYY-MM-DD"""
        return date.today().isoformat()

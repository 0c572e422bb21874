# rps_wager/clock.py
# Time source for expiry checks (unix seconds, like Global.latest_timestamp())
import time


class Clock:
    def now(self) -> int:
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> int:
        return int(time.time())


class ManualClock(Clock):
    """Clock that only moves when told to. Never goes backwards."""

    def __init__(self, start: int = 0):
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        self._now += int(seconds)
        return self._now

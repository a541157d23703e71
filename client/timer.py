# client/timer.py
import time
from typing import Callable

LOW_TIME_SECONDS = 5 * 60


def format_seconds(seconds: int) -> str:
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"


class ExamTimer:
    """Countdown for one exam attempt. The clock is injectable for tests."""

    def __init__(self, duration_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.duration_seconds = duration_seconds
        self._clock = clock
        self._started_at = clock()

    @property
    def remaining(self) -> int:
        elapsed = self._clock() - self._started_at
        return max(int(self.duration_seconds - elapsed), 0)

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    @property
    def running_low(self) -> bool:
        return self.remaining < LOW_TIME_SECONDS

    def format_remaining(self) -> str:
        return format_seconds(self.remaining)

"""
Rate limiting for hosts that recompute visibility while objects move.
"""

from typing import Optional
import time


class UpdateThrottle:
    """Allows at most one recompute per interval.

    A request that arrives too early is remembered as pending so the host can
    run it on a later tick.
    """

    def __init__(self, interval_ms: float = 100):
        self.interval = interval_ms / 1000.0
        self.last_update_time: Optional[float] = None
        self.pending = False

    @classmethod
    def from_config(cls, config=None) -> "UpdateThrottle":
        if config is None:
            from config import CONFIG as config
        return cls(config.update_interval_ms)

    def request(self, now: Optional[float] = None) -> bool:
        """Ask for a recompute. Returns True if it may run now."""
        if self.should_update(now):
            self.mark(now)
            return True
        self.pending = True
        return False

    def should_update(self, now: Optional[float] = None) -> bool:
        """Check whether the interval has elapsed since the last recompute."""
        if self.last_update_time is None:
            return True
        if now is None:
            now = time.monotonic()
        return now - self.last_update_time >= self.interval

    def flush(self, now: Optional[float] = None) -> bool:
        """Run a pending request if its interval has now elapsed."""
        if self.pending and self.should_update(now):
            self.mark(now)
            return True
        return False

    def force(self, now: Optional[float] = None):
        """Record an unthrottled recompute (e.g. a wall was edited)."""
        self.mark(now)

    def mark(self, now: Optional[float] = None):
        self.last_update_time = time.monotonic() if now is None else now
        self.pending = False

    def reset(self):
        """Forget timing history."""
        self.last_update_time = None
        self.pending = False

"""One-shot timer that defers a reminder until its target time."""

import threading
from datetime import datetime, timedelta
from typing import Optional


# Longest delay a threading.Timer can wait for on this platform
MAX_DELAY = timedelta(seconds=int(threading.TIMEOUT_MAX))


class PendingReminder:
    """
    A single reminder waiting for its target time.

    A background timer marks the reminder due once the delay has elapsed.
    The notification itself is left to the thread blocked in wait(), since
    GUI toolkits expect to be driven from the main thread.
    """

    def __init__(self, delay: timedelta):
        if delay > MAX_DELAY:
            raise ValueError(f"Delay too long: {delay} (at most {MAX_DELAY})")
        self.delay = max(delay, timedelta(0))
        self.fire_at: Optional[datetime] = None
        self.cancelled = False
        self.fired = False
        self._done = threading.Event()
        # Re-entrant: cancel() runs from signal handlers on the thread that may
        # already hold the lock inside start()
        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None

    def start(self) -> datetime:
        """Start the countdown and return the local fire time."""
        with self._lock:
            if self._timer is not None:
                raise RuntimeError("Reminder already started")
            self.fire_at = datetime.now() + self.delay
            self._timer = threading.Timer(self.delay.total_seconds(), self._fire)
            self._timer.daemon = True
            self._timer.start()
        return self.fire_at

    def cancel(self) -> bool:
        """
        Cancel the reminder.

        Returns:
            True if the reminder was still pending and will not fire
        """
        with self._lock:
            if self.fired or self.cancelled:
                return False
            self.cancelled = True
            if self._timer:
                self._timer.cancel()
        self._done.set()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the reminder is due or cancelled.

        Returns:
            True if the reminder is due, False if cancelled or timed out
        """
        if not self._done.wait(timeout):
            return False
        return self.fired

    def _fire(self) -> None:
        with self._lock:
            if self.cancelled:
                return
            self.fired = True
        self._done.set()

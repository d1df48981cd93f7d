"""Rate limiters gating outgoing Quote/0 API calls.

The service documents a limit of one request per second. Limiters here are
shared by every caller of a client, so they must be thread-safe and must
honor the caller's cancellation event.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .constants import DEFAULT_RATE_LIMIT_SECONDS
from .errors import RequestCancelledError


class RateLimiter(ABC):
    """Abstract base class for rate limiters."""

    @abstractmethod
    def wait(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until the next request may be sent.

        Args:
            cancel: Optional event; when set, the wait is abandoned

        Raises:
            RequestCancelledError: If cancel fires before the caller's turn
        """
        ...


class RateLimiterFunc(RateLimiter):
    """Adapt a plain callable into a RateLimiter."""

    def __init__(self, func: Optional[Callable[[Optional[threading.Event]], None]]):
        self.func = func

    def wait(self, cancel: Optional[threading.Event] = None) -> None:
        if self.func is None:
            return
        self.func(cancel)


class FixedIntervalLimiter(RateLimiter):
    """Enforce a fixed minimum interval between consecutive releases.

    Each call reserves the next free slot under a lock and then sleeps,
    outside the lock, until that slot arrives. Slots are spaced from each
    other's scheduled release time, so back-to-back callers queue instead of
    starting independent clocks.
    """

    def __init__(self, interval: float = DEFAULT_RATE_LIMIT_SECONDS):
        """Initialize the limiter.

        Args:
            interval: Minimum seconds between releases; non-positive values
                fall back to one second
        """
        if interval is None or interval <= 0:
            interval = DEFAULT_RATE_LIMIT_SECONDS
        self._interval = float(interval)
        self._next: Optional[float] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    @property
    def interval(self) -> float:
        """Minimum seconds between releases."""
        return self._interval

    def _reserve(self) -> float:
        """Atomically claim the next release slot and return it."""
        with self._lock:
            now = time.monotonic()
            slot = now if self._next is None or self._next <= now else self._next
            self._next = slot + self._interval
            return slot

    def _release_unused(self, slot: float) -> None:
        """Give a cancelled slot back if nobody has queued behind it."""
        with self._lock:
            if self._next == slot + self._interval:
                self._next = slot

    def wait(self, cancel: Optional[threading.Event] = None) -> None:
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError()

        slot = self._reserve()
        delay = slot - time.monotonic()
        if delay <= 0:
            return

        self.logger.debug(f"Rate limiter delaying request by {delay:.3f}s")
        if cancel is None:
            time.sleep(delay)
            return

        if cancel.wait(delay):
            self._release_unused(slot)
            raise RequestCancelledError()

"""Leading + trailing edge throttle driven by the host's tick."""

from __future__ import annotations

import time
from typing import Callable, Optional

Clock = Callable[[], float]


class Throttle:
    """Call ``fn`` at most once per ``interval_ms``.

    A call while idle fires immediately. A call inside the cooldown window
    arms exactly one trailing call at the window's end; further calls in the
    window coalesce into it. The trailing call fires from ``poll()``, which
    the host invokes on every tick, so no timer thread is involved.
    """

    def __init__(
        self,
        interval_ms: int,
        fn: Callable[[], None],
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms cannot be negative")
        self.interval = interval_ms / 1000.0
        self._fn = fn
        self._clock = clock
        self._last: Optional[float] = None
        self._deadline: Optional[float] = None
        self.fired = 0

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def __call__(self) -> None:
        now = self._clock()
        if self._last is None or now - self._last >= self.interval:
            self._fire(now)
            return
        if self._deadline is None:
            self._deadline = self._last + self.interval

    def poll(self) -> bool:
        """Fire the trailing call if its deadline passed; returns whether it fired."""

        if self._deadline is None:
            return False
        now = self._clock()
        if now < self._deadline:
            return False
        self._fire(now)
        return True

    def flush(self) -> bool:
        """Fire a pending trailing call right away (e.g. on shutdown)."""

        if self._deadline is None:
            return False
        self._fire(self._clock())
        return True

    def cancel(self) -> None:
        self._deadline = None

    def _fire(self, now: float) -> None:
        self._deadline = None
        self._last = now
        self.fired += 1
        self._fn()


__all__ = ["Throttle", "Clock"]

from __future__ import annotations

import time
from datetime import timedelta
from typing import Protocol


class Clock(Protocol):
    """Monotonic nanosecond clock abstraction.

    Stopwatches depend on this interface rather than calling real time
    directly.  Only the difference between two reads on the same instance
    is meaningful.
    """

    def read(self) -> int:
        """Return monotonic nanoseconds since an arbitrary epoch."""
        ...


class RealClock:
    """Production clock backed by time.monotonic_ns()."""

    def read(self) -> int:  # pragma: no cover - trivial wrapper
        return time.monotonic_ns()


_SYSTEM_CLOCK = RealClock()


def system_clock() -> Clock:
    """Return the shared process-wide clock used when none is injected."""
    return _SYSTEM_CLOCK


class FakeClock:
    """Controllable clock for deterministic testing.

    The clock starts at ``start`` and moves only when :meth:`advance` is
    called, or by ``auto_increment_ns`` after every read.  Tests use this to
    simulate the passage of time without waiting in real time.
    """

    def __init__(self, *, start: int = 0, auto_increment_ns: int = 0) -> None:
        self._now = int(start)
        self._step = 0
        self.auto_increment_ns = auto_increment_ns

    @property
    def auto_increment_ns(self) -> int:
        return self._step

    @auto_increment_ns.setter
    def auto_increment_ns(self, nanos: int) -> None:
        if nanos < 0:
            raise ValueError("auto_increment_ns must be non-negative")
        self._step = int(nanos)

    def read(self) -> int:
        now = self._now
        self._now += self._step
        return now

    def advance(self, nanos: int) -> FakeClock:
        if nanos < 0:
            raise ValueError("Cannot advance clock backwards")
        self._now += int(nanos)
        return self

    def advance_by(self, delta: timedelta) -> FakeClock:
        # timedelta is exact to the microsecond, so integer arithmetic is lossless.
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return self.advance(micros * 1_000)

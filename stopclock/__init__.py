"""Elapsed-time measurement: a stopwatch over an injectable monotonic clock."""

from .clock import Clock, FakeClock, RealClock, system_clock
from .measure import (
    TimedFailure,
    TimedResult,
    TimedValue,
    measure_and_catch,
    measure_and_get,
    measure_duration,
    measure_stopped,
    timed,
)
from .stopwatch import IllegalStateError, State, Stopwatch, transition
from .units import TimeUnit, choose_unit, format_nanos

__all__ = [
    "Clock",
    "FakeClock",
    "IllegalStateError",
    "RealClock",
    "State",
    "Stopwatch",
    "TimeUnit",
    "TimedFailure",
    "TimedResult",
    "TimedValue",
    "choose_unit",
    "format_nanos",
    "measure_and_catch",
    "measure_and_get",
    "measure_duration",
    "measure_stopped",
    "system_clock",
    "timed",
    "transition",
]

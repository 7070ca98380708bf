from __future__ import annotations

from datetime import timedelta
from enum import Enum
from types import TracebackType

from .clock import Clock, system_clock
from .units import TimeUnit, format_nanos


class State(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class IllegalStateError(RuntimeError):
    """Raised when a stopwatch is asked to enter the state it is already in."""

    def __init__(self, state: State) -> None:
        super().__init__(f"This stopwatch is already {state.value}.")
        self.state = state


_TRANSITIONS: dict[State, State] = {
    State.STOPPED: State.RUNNING,
    State.RUNNING: State.STOPPED,
}


def transition(current: State, target: State) -> State:
    """Return ``target`` if it is reachable from ``current``.

    Start and stop are not idempotent: requesting the current state again
    raises :class:`IllegalStateError`.
    """

    if _TRANSITIONS[current] is not target:
        raise IllegalStateError(current)
    return target


class Stopwatch:
    """Measures elapsed time over one or more start/stop segments.

    - Time is read exclusively through the injected Clock (shared, not copied).
    - ``elapsed_ns()`` may be polled in either state without side effects.
    - Not safe for concurrent use: callers sharing an instance between
      threads must synchronise externally.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = system_clock() if clock is None else clock
        self._state: State = State.STOPPED
        self._accumulated_ns = 0
        self._segment_start = 0

    @classmethod
    def create_unstarted(cls, clock: Clock | None = None) -> Stopwatch:
        return cls(clock)

    @classmethod
    def create_started(cls, clock: Clock | None = None) -> Stopwatch:
        return cls(clock).start()

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def state(self) -> State:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is State.RUNNING

    def start(self) -> Stopwatch:
        self._state = transition(self._state, State.RUNNING)
        self._segment_start = self._clock.read()
        return self

    def stop(self) -> Stopwatch:
        self._state = transition(self._state, State.STOPPED)
        now = self._clock.read()
        self._accumulated_ns += now - self._segment_start
        return self

    def reset(self) -> Stopwatch:
        self._accumulated_ns = 0
        self._state = State.STOPPED
        return self

    def elapsed_ns(self) -> int:
        if self._state is State.RUNNING:
            return self._accumulated_ns + (self._clock.read() - self._segment_start)
        return self._accumulated_ns

    def elapsed(self, unit: TimeUnit = TimeUnit.NANOSECONDS) -> int:
        """Return elapsed time in whole ``unit``s, truncated."""
        return unit.convert(self.elapsed_ns())

    def elapsed_duration(self) -> timedelta:
        """Return elapsed time as a ``timedelta``, truncated to microseconds.

        Use :meth:`elapsed_ns` for the exact nanosecond count.
        """
        return timedelta(microseconds=self.elapsed_ns() // 1_000)

    def format(self) -> str:
        return format_nanos(self.elapsed_ns())

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Stopwatch(state={self._state.value}, elapsed={self.format()!r})"

    def __enter__(self) -> Stopwatch:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # The body may already have stopped the watch itself.
        if self.is_running:
            self.stop()

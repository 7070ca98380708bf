"""Helpers that time a zero-argument callable with a fresh stopwatch.

Two failure policies are offered on purpose:

* ``measure_duration`` and ``measure_and_get`` let an exception raised by the
  callable propagate untouched; no duration is produced on that path.
* ``measure_and_catch`` and ``measure_stopped`` capture the exception as data
  and always report how long the callable ran before it failed.

Results are a tagged union, ``TimedValue | TimedFailure``, rather than one
record with two optional fields.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from functools import wraps
from typing import Generic, Literal, NoReturn, ParamSpec, TypeVar

from .clock import Clock
from .stopwatch import Stopwatch
from .units import format_nanos

T = TypeVar("T")
R = TypeVar("R")
P = ParamSpec("P")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimedValue(Generic[T]):
    duration_ns: int
    value: T

    @property
    def succeeded(self) -> Literal[True]:
        return True

    @property
    def duration(self) -> timedelta:
        """Duration truncated to microseconds; ``duration_ns`` is exact."""
        return timedelta(microseconds=self.duration_ns // 1_000)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class TimedFailure:
    duration_ns: int
    failure: Exception

    @property
    def succeeded(self) -> Literal[False]:
        return False

    @property
    def duration(self) -> timedelta:
        """Duration truncated to microseconds; ``duration_ns`` is exact."""
        return timedelta(microseconds=self.duration_ns // 1_000)

    def unwrap(self) -> NoReturn:
        """Re-raise the captured failure with its original traceback."""
        raise self.failure


TimedResult = TimedValue[T] | TimedFailure


def measure_duration(fn: Callable[[], object], *, clock: Clock | None = None) -> int:
    """Run ``fn`` and return how long it took, in nanoseconds."""

    stopwatch = Stopwatch.create_started(clock)
    fn()
    elapsed = stopwatch.elapsed_ns()
    _logger.debug("%s took %s", _name(fn), format_nanos(elapsed))
    return elapsed


def measure_and_get(fn: Callable[[], T], *, clock: Clock | None = None) -> TimedValue[T]:
    stopwatch = Stopwatch.create_started(clock)
    value = fn()
    elapsed = stopwatch.elapsed_ns()
    _logger.debug("%s took %s", _name(fn), format_nanos(elapsed))
    return TimedValue(elapsed, value)


def measure_and_catch(fn: Callable[[], T], *, clock: Clock | None = None) -> TimedResult[T]:
    """Run ``fn``, capturing any ``Exception`` it raises as a ``TimedFailure``.

    The stopwatch is read while still running on both paths.
    ``BaseException`` subclasses such as ``KeyboardInterrupt`` propagate.
    """

    stopwatch = Stopwatch.create_started(clock)
    try:
        value = fn()
    except Exception as exc:
        elapsed = stopwatch.elapsed_ns()
        _logger.debug("%s failed with %s after %s", _name(fn), type(exc).__name__, format_nanos(elapsed))
        return TimedFailure(elapsed, exc)
    elapsed = stopwatch.elapsed_ns()
    _logger.debug("%s took %s", _name(fn), format_nanos(elapsed))
    return TimedValue(elapsed, value)


def measure_stopped(fn: Callable[[], T], *, clock: Clock | None = None) -> TimedResult[T]:
    """Like :func:`measure_and_catch`, but stops the stopwatch before reading it on success."""

    stopwatch = Stopwatch.create_started(clock)
    try:
        value = fn()
        stopwatch.stop()
    except Exception as exc:
        elapsed = stopwatch.elapsed_ns()
        _logger.debug("%s failed with %s after %s", _name(fn), type(exc).__name__, format_nanos(elapsed))
        return TimedFailure(elapsed, exc)
    elapsed = stopwatch.elapsed_ns()
    _logger.debug("%s took %s", _name(fn), format_nanos(elapsed))
    return TimedValue(elapsed, value)


def timed(
    logger: logging.Logger | None = None,
    *,
    level: int = logging.DEBUG,
    clock: Clock | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator logging the duration of every call to the wrapped function.

    Failures are logged with the time spent before they were raised and then
    propagate unchanged.
    """

    log = _logger if logger is None else logger

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            stopwatch = Stopwatch.create_started(clock)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                elapsed = stopwatch.elapsed_ns()
                log.log(level, "%s failed with %s after %s", func.__qualname__, type(exc).__name__, format_nanos(elapsed))
                raise
            elapsed = stopwatch.elapsed_ns()
            log.log(level, "%s took %s", func.__qualname__, format_nanos(elapsed))
            return result

        return wrapper

    return decorator


def _name(fn: Callable[..., object]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)

from __future__ import annotations

from datetime import timedelta

import pytest

from stopclock.clock import Clock, FakeClock, RealClock, system_clock


def test_fake_clock_starts_at_given_value_and_does_not_move_on_read() -> None:
    clock = FakeClock(start=42)
    assert clock.read() == 42
    assert clock.read() == 42


def test_fake_clock_advance_accumulates() -> None:
    clock = FakeClock()
    clock.advance(5).advance(7)
    assert clock.read() == 12


def test_fake_clock_advance_zero_is_a_no_op() -> None:
    clock = FakeClock(start=3)
    clock.advance(0)
    assert clock.read() == 3


def test_fake_clock_rejects_negative_advance() -> None:
    clock = FakeClock(start=10)
    with pytest.raises(ValueError):
        clock.advance(-1)
    assert clock.read() == 10


def test_fake_clock_advance_by_timedelta() -> None:
    clock = FakeClock()
    clock.advance_by(timedelta(seconds=1, microseconds=5))
    assert clock.read() == 1_000_005_000
    with pytest.raises(ValueError):
        clock.advance_by(timedelta(microseconds=-1))


def test_fake_clock_auto_increment_moves_after_each_read() -> None:
    clock = FakeClock(auto_increment_ns=3)
    assert [clock.read() for _ in range(3)] == [0, 3, 6]

    clock.auto_increment_ns = 0
    assert clock.read() == 9
    assert clock.read() == 9


def test_fake_clock_rejects_negative_auto_increment() -> None:
    with pytest.raises(ValueError):
        FakeClock(auto_increment_ns=-1)
    clock = FakeClock()
    with pytest.raises(ValueError):
        clock.auto_increment_ns = -5


def test_real_clock_is_monotonic() -> None:
    clock = RealClock()
    readings = [clock.read() for _ in range(100)]
    assert readings == sorted(readings)
    assert all(isinstance(r, int) for r in readings)


def test_system_clock_is_shared() -> None:
    assert system_clock() is system_clock()
    assert isinstance(system_clock(), RealClock)


def test_clocks_satisfy_protocol_structurally() -> None:
    def first_read(clock: Clock) -> int:
        return clock.read()

    assert first_read(FakeClock(start=7)) == 7
    assert first_read(RealClock()) >= 0

"""Time units and the compact duration formatter.

``TimeUnit`` mirrors the small set of units a stopwatch reports in, from
nanoseconds up to days.  Conversions out of nanoseconds truncate toward
zero, so a unit only "qualifies" for display once at least one whole unit
has elapsed.  ``format_nanos`` renders a nanosecond count the way a
stopwatch prints itself: four significant digits followed by the
abbreviation of the largest qualifying unit, e.g. ``"1.235 ms"``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

SIGNIFICANT_DIGITS = 4


class TimeUnit(Enum):
    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    @property
    def nanos(self) -> int:
        """Length of one unit in nanoseconds."""
        return self.value

    @property
    def abbreviation(self) -> str:
        return _ABBREVIATIONS[self]

    def convert(self, nanos: int) -> int:
        """Convert a nanosecond count into whole units, truncating toward zero."""
        whole = abs(nanos) // self.value
        return whole if nanos >= 0 else -whole


_ABBREVIATIONS: dict[TimeUnit, str] = {
    TimeUnit.NANOSECONDS: "ns",
    TimeUnit.MICROSECONDS: "μs",
    TimeUnit.MILLISECONDS: "ms",
    TimeUnit.SECONDS: "s",
    TimeUnit.MINUTES: "min",
    TimeUnit.HOURS: "h",
    TimeUnit.DAYS: "d",
}

# Largest first: the first unit with a non-zero conversion wins.
_DESCENDING = sorted(TimeUnit, key=lambda u: u.value, reverse=True)


def choose_unit(nanos: int) -> TimeUnit:
    for unit in _DESCENDING:
        if unit.convert(nanos) > 0:
            return unit
    return TimeUnit.NANOSECONDS


def format_compact(value: float) -> str:
    """Render ``value`` with exactly four significant digits.

    ``999.0``, ``1.000`` and ``9.999`` keep their trailing zeros.  A value
    that rounds up to four integer digits has no fractional part to show
    and is printed without a decimal point (``1000``).

    Halfway cases round up on the shortest decimal form of ``value``, so
    ``1.0005`` renders as ``1.001`` whatever its binary approximation is.
    """

    if value != 0:
        exact = Decimal(repr(value))
        step = Decimal(1).scaleb(exact.adjusted() - SIGNIFICANT_DIGITS + 1)
        value = float(exact.quantize(step, rounding=ROUND_HALF_UP))
    text = f"{value:#.{SIGNIFICANT_DIGITS}g}"
    return text.rstrip(".")


def format_nanos(nanos: int) -> str:
    unit = choose_unit(nanos)
    return f"{format_compact(nanos / unit.nanos)} {unit.abbreviation}"

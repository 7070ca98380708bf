"""Test package for stopclock.

The tests drive every stopwatch through a ``FakeClock`` so elapsed times are
exact and no test waits in real time.  To run them, execute ``pytest`` from
the project root.
"""

"""Timestamp sources for replica mutations.

Every mutation on a replica stamps its record with a millisecond
timestamp read from a ``TimeSource``. Replicas trust these values as-is:
there is no logical or vector clock, so skew between replicas can pick a
"wrong" last writer. ``SkewedClock`` exists to make that observable.

Usage::

    from lwwgraph import ManualClock, ReplicatedGraph, SkewedClock, WallClock

    graph = ReplicatedGraph()                      # wall clock
    clock = ManualClock(start_ms=1_000)
    graph = ReplicatedGraph(clock=clock)           # deterministic
    clock.advance(5)

    fast = SkewedClock(WallClock(), offset_ms=50)  # 50ms ahead
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimeSource(Protocol):
    """Protocol for anything that can stamp a mutation.

    Implementations return signed milliseconds since the Unix epoch.
    Values only need to be comparable across replicas; they are not
    required to be causally ordered.
    """

    def now_ms(self) -> int:
        """Return the current time in milliseconds."""
        ...


class WallClock:
    """Reads the host's wall clock in milliseconds since the epoch."""

    __slots__ = ()

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def __repr__(self) -> str:
        return "WallClock()"


class SkewedClock:
    """Clock that reads a fixed offset ahead of or behind another source.

    A positive offset means the clock reads ahead of its base (fast clock).
    A negative offset means it reads behind (slow clock).

    Args:
        base: The source being skewed.
        offset_ms: Constant offset added to every reading.
    """

    __slots__ = ("_base", "_offset_ms")

    def __init__(self, base: TimeSource, offset_ms: int):
        self._base = base
        self._offset_ms = offset_ms

    @property
    def offset_ms(self) -> int:
        """The fixed offset applied to the base clock."""
        return self._offset_ms

    def now_ms(self) -> int:
        return self._base.now_ms() + self._offset_ms

    def __repr__(self) -> str:
        return f"SkewedClock(base={self._base!r}, offset_ms={self._offset_ms})"


class ManualClock:
    """Clock that only moves when told to.

    Reading the clock never advances it, so consecutive mutations share a
    timestamp until ``advance()`` or ``set()`` is called. Useful for
    exercising exact timestamp ties.

    Args:
        start_ms: Initial reading.
    """

    __slots__ = ("_now_ms",)

    def __init__(self, start_ms: int = 0):
        self._now_ms = start_ms

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, delta_ms: int = 1) -> int:
        """Move the clock forward and return the new reading.

        Raises:
            ValueError: If ``delta_ms`` is negative.
        """
        if delta_ms < 0:
            raise ValueError(f"Cannot advance a clock by a negative amount: {delta_ms}")
        self._now_ms += delta_ms
        return self._now_ms

    def set(self, now_ms: int) -> None:
        """Jump the clock to ``now_ms``.

        Raises:
            ValueError: If ``now_ms`` is earlier than the current reading.
        """
        if now_ms < self._now_ms:
            raise ValueError(
                f"Cannot move clock backwards from {self._now_ms} to {now_ms}"
            )
        self._now_ms = now_ms

    def __repr__(self) -> str:
        return f"ManualClock(now_ms={self._now_ms})"

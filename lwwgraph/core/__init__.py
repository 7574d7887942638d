"""Core primitives shared by the replicated data types."""

from lwwgraph.core.clock import ManualClock, SkewedClock, TimeSource, WallClock

__all__ = [
    "ManualClock",
    "SkewedClock",
    "TimeSource",
    "WallClock",
]

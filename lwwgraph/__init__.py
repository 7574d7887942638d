"""lwwgraph: a state-based last-write-wins directed graph CRDT.

Replicas of a ``ReplicatedGraph`` are mutated independently and later
reconciled with ``merge``, which always converges to the same state no
matter the order or number of merges.

    from lwwgraph import ReplicatedGraph

    a = ReplicatedGraph(node_id="a")
    a.add_vertex("x")
    b = a.clone()
    b.add_vertex("y")
    merged = a.merge(b)
"""

import logging

logging.getLogger("lwwgraph").addHandler(logging.NullHandler())

from lwwgraph.core.clock import ManualClock, SkewedClock, TimeSource, WallClock
from lwwgraph.crdt.protocol import CRDT
from lwwgraph.crdt.lww_graph import LWWGraph, ReplicatedGraph
from lwwgraph.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

__version__ = "0.1.0"

__all__ = [
    # Graph
    "CRDT",
    "LWWGraph",
    "ReplicatedGraph",
    # Clocks
    "ManualClock",
    "SkewedClock",
    "TimeSource",
    "WallClock",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

"""Conflict-free Replicated Data Types (CRDTs).

CRDTs are data structures that converge automatically after replicas
diverge, without requiring coordination. They guarantee eventual
consistency by ensuring merge operations are commutative, associative,
and idempotent.

Provided CRDTs:

- **ReplicatedGraph**: Last-write-wins directed graph with
  vertex-biased removal (alias ``LWWGraph``)

Building blocks:

- **TimestampMap** / **EdgeTimestampMap**: per-key max-join timestamp tables
"""

from lwwgraph.crdt.protocol import CRDT
from lwwgraph.crdt.timestamp_map import EdgeTimestampMap, TimestampMap
from lwwgraph.crdt.lww_graph import LWWGraph, ReplicatedGraph

__all__ = [
    "CRDT",
    "EdgeTimestampMap",
    "LWWGraph",
    "ReplicatedGraph",
    "TimestampMap",
]

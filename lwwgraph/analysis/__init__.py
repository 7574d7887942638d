"""Inspection helpers for replica state."""

from lwwgraph.analysis.frames import edge_frame, timestamp_frame, vertex_frame

__all__ = [
    "edge_frame",
    "timestamp_frame",
    "vertex_frame",
]

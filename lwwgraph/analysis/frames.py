"""Tabular views of a replica's timestamp tables.

Flattens the four tables of a ``ReplicatedGraph`` into pandas DataFrames
for inspection in notebooks or when diffing two replicas that failed to
converge.

Usage::

    from lwwgraph.analysis import edge_frame, timestamp_frame

    df = timestamp_frame(graph)
    print(df[df["store"] == "removed_edges"])

    edges = edge_frame(graph)
    print(edges[~edges["present"]])
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from lwwgraph.crdt.lww_graph import ReplicatedGraph

TIMESTAMP_COLUMNS = ["store", "from_vertex", "to_vertex", "timestamp_ms"]
VERTEX_COLUMNS = ["vertex", "added_ms", "removed_ms", "present"]
EDGE_COLUMNS = ["from_vertex", "to_vertex", "added_ms", "removed_ms", "present"]


def timestamp_frame(graph: ReplicatedGraph) -> pd.DataFrame:
    """One row per raw timestamp record across all four tables.

    ``to_vertex`` is None for rows from the vertex tables.
    """
    rows = []
    for store, table in (
        ("added_vertices", graph.added_vertices),
        ("removed_vertices", graph.removed_vertices),
    ):
        for vertex, ts in table.items():
            rows.append((store, vertex, None, ts))
    for store, table in (
        ("added_edges", graph.added_edges),
        ("removed_edges", graph.removed_edges),
    ):
        for from_vertex, targets in table.items():
            for to_vertex, ts in targets.items():
                rows.append((store, from_vertex, to_vertex, ts))
    return pd.DataFrame(rows, columns=TIMESTAMP_COLUMNS)


def vertex_frame(graph: ReplicatedGraph) -> pd.DataFrame:
    """One row per vertex that has an add or remove record."""
    added = graph.added_vertices
    removed = graph.removed_vertices
    vertices = list(added) + [v for v in removed if v not in added]
    rows = [
        (v, added.get(v), removed.get(v), graph.vertex_present(v))
        for v in vertices
    ]
    return pd.DataFrame(rows, columns=VERTEX_COLUMNS)


def edge_frame(graph: ReplicatedGraph) -> pd.DataFrame:
    """One row per edge that has an add or remove record.

    ``present`` mirrors ``graph.edges()``: an add record not expired by
    a remove record.
    """
    added = graph.added_edges
    removed = graph.removed_edges
    edges = [(f, t) for f, targets in added.items() for t in targets]
    edges += [
        (f, t) for f, targets in removed.items() for t in targets
        if t not in added.get(f, {})
    ]
    rows = []
    for from_vertex, to_vertex in edges:
        added_ms = added.get(from_vertex, {}).get(to_vertex)
        removed_ms = removed.get(from_vertex, {}).get(to_vertex)
        present = added_ms is not None and not graph.edge_expired(
            from_vertex, to_vertex, added_ms
        )
        rows.append((from_vertex, to_vertex, added_ms, removed_ms, present))
    return pd.DataFrame(rows, columns=EDGE_COLUMNS)

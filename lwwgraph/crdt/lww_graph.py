"""Last-Write-Wins directed graph (state-based CRDT).

A ``ReplicatedGraph`` keeps four timestamp tables: vertex adds, vertex
removes, edge adds and edge removes. Nothing about the current graph is
stored directly; presence is derived from the tables on every read:

- A vertex is present iff its add time is strictly greater than its
  remove time (an exact tie counts as removed).
- An edge recorded at add time ``t`` is expired iff a remove record for
  the same edge exists with remove time ``<= t`` (again, a tie counts as
  removed). Endpoint presence is not re-checked when edges are listed.

Removing a vertex locally also purges every edge record touching it
(vertex-biased removal). Merging never does: ``merge`` is a pure per-key
``max`` over the four tables, so an edge whose endpoint was removed on
another replica can still be listed after a merge if that replica never
held the edge records to purge.

Example::

    a = ReplicatedGraph(node_id="a")
    a.add_vertex(1)
    a.add_vertex(2)
    a.add_edge(1, 2)

    b = a.clone()
    b.remove_vertex(2)
    a.add_vertex(3)

    assert a.merge(b).render() == b.merge(a).render()
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar

from lwwgraph.core.clock import WallClock
from lwwgraph.crdt.timestamp_map import EdgeTimestampMap, TimestampMap

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from lwwgraph.core.clock import TimeSource

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Hashable)

NO_VERTICES = "No vertices exist on the graph"
NO_EDGES = "No edges exist on the graph"


def _stable_order(items: Iterable[Any]) -> list[Any]:
    """Sort naturally, or by ``repr`` when items are not mutually orderable."""
    items = list(items)
    try:
        return sorted(items)
    except TypeError:
        return sorted(items, key=repr)


class ReplicatedGraph(Generic[V]):
    """Last-Write-Wins directed graph CRDT.

    Vertex identities must be hashable and keep a stable hash for the
    lifetime of the replica. No internal locking: share one instance
    across threads only under external mutual exclusion.

    Args:
        clock: Source of mutation timestamps. Defaults to ``WallClock()``.
        node_id: Label for this replica, used in logs and ``repr``. It
            plays no part in conflict resolution.
    """

    __slots__ = (
        "_added_edges",
        "_added_vertices",
        "_clock",
        "_node_id",
        "_removed_edges",
        "_removed_vertices",
    )

    def __init__(self, clock: TimeSource | None = None, node_id: str = "local"):
        self._clock: TimeSource = clock if clock is not None else WallClock()
        self._node_id = node_id
        self._added_vertices: TimestampMap[V] = TimestampMap()
        self._removed_vertices: TimestampMap[V] = TimestampMap()
        self._added_edges: EdgeTimestampMap[V] = EdgeTimestampMap()
        self._removed_edges: EdgeTimestampMap[V] = EdgeTimestampMap()

    # ------------------------------------------------------------------
    # Raw state
    # ------------------------------------------------------------------

    @property
    def node_id(self) -> str:
        """This replica's label."""
        return self._node_id

    @property
    def clock(self) -> TimeSource:
        """The timestamp source used by mutations."""
        return self._clock

    @property
    def added_vertices(self) -> dict[V, int]:
        """Snapshot of vertex -> latest add time."""
        return self._added_vertices.as_dict()

    @property
    def removed_vertices(self) -> dict[V, int]:
        """Snapshot of vertex -> latest remove time."""
        return self._removed_vertices.as_dict()

    @property
    def added_edges(self) -> dict[V, dict[V, int]]:
        """Snapshot of from -> {to -> latest add time}."""
        return self._added_edges.as_dict()

    @property
    def removed_edges(self) -> dict[V, dict[V, int]]:
        """Snapshot of from -> {to -> latest remove time}."""
        return self._removed_edges.as_dict()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: V) -> None:
        """Record ``vertex`` as added now.

        Re-adding refreshes the add time; it never duplicates the vertex.
        """
        self._added_vertices.record(vertex, self._clock.now_ms())

    def remove_vertex(self, vertex: V) -> None:
        """Record ``vertex`` as removed now and purge its edge records.

        Every add/remove record of an edge leaving or entering ``vertex``
        is deleted. The vertex's own add record is kept. ``vertex`` does
        not need to have been added first.
        """
        self._removed_vertices.record(vertex, self._clock.now_ms())
        purged = self._added_edges.discard_vertex(vertex)
        purged += self._removed_edges.discard_vertex(vertex)
        if purged:
            logger.debug(
                "[%s] Removed vertex %r, purged %d edge record(s)",
                self._node_id, vertex, purged,
            )

    def add_edge(self, from_vertex: V, to_vertex: V) -> bool:
        """Record the edge ``from_vertex -> to_vertex`` as added now.

        Returns:
            False (and changes nothing) unless both endpoints are present.
        """
        if not self.vertex_present(from_vertex) or not self.vertex_present(to_vertex):
            logger.debug(
                "[%s] Rejected add_edge %r -> %r: endpoint absent",
                self._node_id, from_vertex, to_vertex,
            )
            return False
        self._added_edges.record(from_vertex, to_vertex, self._clock.now_ms())
        return True

    def remove_edge(self, from_vertex: V, to_vertex: V) -> bool:
        """Record the edge ``from_vertex -> to_vertex`` as removed now.

        Returns:
            False (and changes nothing) unless both endpoints are present.
        """
        if not self.vertex_present(from_vertex) or not self.vertex_present(to_vertex):
            logger.debug(
                "[%s] Rejected remove_edge %r -> %r: endpoint absent",
                self._node_id, from_vertex, to_vertex,
            )
            return False
        self._removed_edges.record(from_vertex, to_vertex, self._clock.now_ms())
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def vertex_present(self, vertex: V) -> bool:
        """True iff ``vertex`` was added after its latest removal."""
        added = self._added_vertices.get(vertex)
        if added is None:
            return False
        removed = self._removed_vertices.get(vertex)
        return removed is None or added > removed

    def edge_expired(self, from_vertex: V, to_vertex: V, timestamp: int) -> bool:
        """True iff the edge has a remove record at or before ``timestamp``."""
        removed = self._removed_edges.get(from_vertex, to_vertex)
        return removed is not None and removed <= timestamp

    def connected_vertices(self, vertex: V) -> list[V]:
        """Targets of the unexpired edges leaving ``vertex``.

        Order follows the first time each target was recorded.
        """
        return [
            to_vertex
            for to_vertex, added in self._added_edges.targets(vertex)
            if not self.edge_expired(vertex, to_vertex, added)
        ]

    def vertices(self) -> list[V]:
        """Currently present vertices, in first-added order."""
        return [v for v in self._added_vertices if self.vertex_present(v)]

    def edges(self) -> list[tuple[V, V]]:
        """Currently present ``(from, to)`` edges."""
        return [
            (from_vertex, to_vertex)
            for from_vertex, to_vertex, added in self._added_edges.items()
            if not self.edge_expired(from_vertex, to_vertex, added)
        ]

    @property
    def value(self) -> frozenset:
        """Frozenset of currently present vertices."""
        return frozenset(self.vertices())

    def find_path(self, from_vertex: V, to_vertex: V) -> list[V]:
        """Return a path from ``from_vertex`` to ``to_vertex``.

        Depth-first search over ``connected_vertices``: the first path
        found is returned, which is not necessarily the shortest.

        Returns:
            The vertices along the path including both ends, ``[from_vertex]``
            when the ends are equal, or an empty list if either end is
            absent or no path exists.
        """
        if not self.vertex_present(from_vertex) or not self.vertex_present(to_vertex):
            return []
        if from_vertex == to_vertex:
            return [from_vertex]

        path: list[V] = [from_vertex]
        visited: set[V] = {from_vertex}
        # One iterator per vertex on the path, resumed on backtrack
        frontier: list[Iterator[V]] = [iter(self.connected_vertices(from_vertex))]

        while frontier:
            for candidate in frontier[-1]:
                if candidate in visited:
                    continue
                visited.add(candidate)
                path.append(candidate)
                if candidate == to_vertex:
                    return path
                frontier.append(iter(self.connected_vertices(candidate)))
                break
            else:
                frontier.pop()
                path.pop()

        return []

    # ------------------------------------------------------------------
    # Replication
    # ------------------------------------------------------------------

    def clone(self) -> ReplicatedGraph[V]:
        """Return an independent copy of all four tables.

        The copy shares this replica's clock and node_id.
        """
        copy = ReplicatedGraph(clock=self._clock, node_id=self._node_id)
        copy._added_vertices = self._added_vertices.copy()
        copy._removed_vertices = self._removed_vertices.copy()
        copy._added_edges = self._added_edges.copy()
        copy._removed_edges = self._removed_edges.copy()
        return copy

    def merge(self, other: ReplicatedGraph[V]) -> ReplicatedGraph[V]:
        """Return the join of this replica and ``other``.

        Each table is combined by per-key maximum. Edges are not
        re-validated against vertex presence. Neither input is modified.

        Raises:
            TypeError: If ``other`` is not a ReplicatedGraph.
        """
        merged = self.clone()
        merged.merge_from(other)
        return merged

    def merge_from(self, other: ReplicatedGraph[V]) -> None:
        """Join ``other`` into this replica in place.

        Raises:
            TypeError: If ``other`` is not a ReplicatedGraph.
        """
        if not isinstance(other, ReplicatedGraph):
            raise TypeError(
                f"Cannot merge ReplicatedGraph with {type(other).__name__}"
            )
        self._added_vertices.join(other._added_vertices)
        self._added_edges.join(other._added_edges)
        self._removed_edges.join(other._removed_edges)
        self._removed_vertices.join(other._removed_vertices)
        logger.debug(
            "[%s] Merged state from %s: %d vertex record(s), %d edge record(s)",
            self._node_id,
            other._node_id,
            len(self._added_vertices) + len(self._removed_vertices),
            len(self._added_edges) + len(self._removed_edges),
        )

    # ------------------------------------------------------------------
    # Rendering and serialization
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Two-line summary of the present vertices and edges.

        Both lines are sorted so replicas with equal derived state render
        identically regardless of merge order.
        """
        vertices = _stable_order(self.vertices())
        if vertices:
            vertex_line = "The vertices are : " + ", ".join(str(v) for v in vertices)
        else:
            vertex_line = NO_VERTICES

        edges = _stable_order(self.edges())
        if edges:
            edge_line = "The edges are : " + ", ".join(f"{f} -> {t}" for f, t in edges)
        else:
            edge_line = NO_EDGES

        return f"{vertex_line}\n{edge_line}"

    def to_dict(self) -> dict:
        """Serialize all four tables to plain lists."""
        return {
            "type": "ReplicatedGraph",
            "node_id": self._node_id,
            "added_vertices": [[v, ts] for v, ts in self._added_vertices.items()],
            "removed_vertices": [[v, ts] for v, ts in self._removed_vertices.items()],
            "added_edges": [[f, t, ts] for f, t, ts in self._added_edges.items()],
            "removed_edges": [[f, t, ts] for f, t, ts in self._removed_edges.items()],
        }

    @classmethod
    def from_dict(cls, data: dict, clock: TimeSource | None = None) -> Self:
        """Deserialize from a plain dict.

        Args:
            data: Dict produced by ``to_dict()``.
            clock: Timestamp source for the rebuilt replica.

        Raises:
            ValueError: If ``data`` does not describe a ReplicatedGraph.
        """
        if data.get("type") != "ReplicatedGraph":
            raise ValueError(f"Expected ReplicatedGraph state, got type={data.get('type')!r}")
        graph = cls(clock=clock, node_id=data.get("node_id", "local"))
        for vertex, ts in data["added_vertices"]:
            graph._added_vertices.record(vertex, ts)
        for vertex, ts in data["removed_vertices"]:
            graph._removed_vertices.record(vertex, ts)
        for from_vertex, to_vertex, ts in data["added_edges"]:
            graph._added_edges.record(from_vertex, to_vertex, ts)
        for from_vertex, to_vertex, ts in data["removed_edges"]:
            graph._removed_edges.record(from_vertex, to_vertex, ts)
        return graph

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __contains__(self, vertex: object) -> bool:
        return self.vertex_present(vertex)

    def __deepcopy__(self, memo: dict) -> ReplicatedGraph[V]:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReplicatedGraph):
            return NotImplemented
        return (
            self._added_vertices == other._added_vertices
            and self._removed_vertices == other._removed_vertices
            and self._added_edges == other._added_edges
            and self._removed_edges == other._removed_edges
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"ReplicatedGraph(node_id={self._node_id!r}, "
            f"vertices={len(self.vertices())}, edges={len(self.edges())})"
        )


LWWGraph = ReplicatedGraph

"""Last-write-wins timestamp stores.

A replica keeps its history as plain "key -> latest timestamp" tables.
Local mutations overwrite a key's timestamp; joining two tables keeps the
per-key maximum, which is the semilattice join that makes merges
commutative, associative, and idempotent.

``TimestampMap`` is keyed by a single vertex. ``EdgeTimestampMap`` is
keyed by ``(from, to)`` and stored as nested dicts so that every edge
leaving a vertex can be found (and purged) without a full scan.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

K = TypeVar("K", bound=Hashable)


class TimestampMap(Generic[K]):
    """Mapping of key to the most recent timestamp recorded for it.

    Iteration follows insertion order of first-recorded keys.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: dict[K, int] | None = None):
        self._entries: dict[K, int] = dict(entries) if entries else {}

    def record(self, key: K, timestamp: int) -> None:
        """Store ``timestamp`` for ``key``, replacing any previous value."""
        self._entries[key] = timestamp

    def get(self, key: K, default: int | None = None) -> int | None:
        return self._entries.get(key, default)

    def join(self, other: TimestampMap[K]) -> None:
        """Fold ``other`` into this map keeping the per-key maximum."""
        for key, timestamp in other._entries.items():
            current = self._entries.get(key)
            if current is None or timestamp > current:
                self._entries[key] = timestamp

    def items(self) -> Iterator[tuple[K, int]]:
        return iter(self._entries.items())

    def copy(self) -> TimestampMap[K]:
        return TimestampMap(self._entries)

    def as_dict(self) -> dict[K, int]:
        """Return a detached ``dict`` snapshot of the entries."""
        return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimestampMap):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TimestampMap({self._entries!r})"


class EdgeTimestampMap(Generic[K]):
    """Mapping of ``(from, to)`` edge to its most recent timestamp.

    Stored as ``from -> {to -> timestamp}``. Each outer key exclusively
    owns its inner dict: copies and joins never share inner dicts
    between instances. Inner dicts that become empty are dropped so two
    maps holding the same edges always compare equal.
    """

    __slots__ = ("_entries",)

    def __init__(self):
        self._entries: dict[K, dict[K, int]] = {}

    def record(self, from_vertex: K, to_vertex: K, timestamp: int) -> None:
        """Store ``timestamp`` for the edge, replacing any previous value."""
        targets = self._entries.get(from_vertex)
        if targets is None:
            targets = self._entries[from_vertex] = {}
        targets[to_vertex] = timestamp

    def get(self, from_vertex: K, to_vertex: K, default: int | None = None) -> int | None:
        targets = self._entries.get(from_vertex)
        if targets is None:
            return default
        return targets.get(to_vertex, default)

    def targets(self, from_vertex: K) -> list[tuple[K, int]]:
        """Return ``(to, timestamp)`` pairs for edges leaving ``from_vertex``.

        Order follows first insertion of each target. Empty when nothing
        leaves ``from_vertex``.
        """
        return list(self._entries.get(from_vertex, {}).items())

    def discard_vertex(self, vertex: K) -> int:
        """Drop every edge touching ``vertex`` in either direction.

        Returns:
            Number of edge records removed.
        """
        removed = len(self._entries.pop(vertex, {}))
        for from_vertex in list(self._entries):
            targets = self._entries[from_vertex]
            if vertex in targets:
                del targets[vertex]
                removed += 1
                if not targets:
                    del self._entries[from_vertex]
        return removed

    def join(self, other: EdgeTimestampMap[K]) -> None:
        """Fold ``other`` into this map keeping the per-edge maximum."""
        for from_vertex, other_targets in other._entries.items():
            targets = self._entries.get(from_vertex)
            if targets is None:
                self._entries[from_vertex] = dict(other_targets)
                continue
            for to_vertex, timestamp in other_targets.items():
                current = targets.get(to_vertex)
                if current is None or timestamp > current:
                    targets[to_vertex] = timestamp

    def items(self) -> Iterator[tuple[K, K, int]]:
        """Yield ``(from, to, timestamp)`` for every recorded edge."""
        for from_vertex, targets in self._entries.items():
            for to_vertex, timestamp in targets.items():
                yield from_vertex, to_vertex, timestamp

    def copy(self) -> EdgeTimestampMap[K]:
        clone = EdgeTimestampMap()
        clone._entries = {
            from_vertex: dict(targets) for from_vertex, targets in self._entries.items()
        }
        return clone

    def as_dict(self) -> dict[K, dict[K, int]]:
        """Return a detached nested ``dict`` snapshot of the entries."""
        return {from_vertex: dict(targets) for from_vertex, targets in self._entries.items()}

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, tuple) or len(edge) != 2:
            return False
        from_vertex, to_vertex = edge
        return to_vertex in self._entries.get(from_vertex, {})

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdgeTimestampMap):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EdgeTimestampMap({self._entries!r})"

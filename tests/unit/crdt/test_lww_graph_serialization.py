"""Tests for ReplicatedGraph to_dict / from_dict."""

import json

import pytest

from lwwgraph import ManualClock, ReplicatedGraph


class TestReplicatedGraphSerialization:
    """Tests for state snapshots exchanged between replicas."""

    def test_to_dict_structure(self, clock):
        graph = ReplicatedGraph(clock=clock, node_id="a")
        graph.add_vertex(1)
        graph.add_vertex(2)
        graph.add_edge(1, 2)
        clock.advance()
        graph.remove_edge(1, 2)
        graph.remove_vertex(3)

        d = graph.to_dict()
        assert d["type"] == "ReplicatedGraph"
        assert d["node_id"] == "a"
        assert d["added_vertices"] == [[1, 1_000], [2, 1_000]]
        assert d["removed_vertices"] == [[3, 1_001]]
        assert d["added_edges"] == [[1, 2, 1_000]]
        assert d["removed_edges"] == [[1, 2, 1_001]]

    def test_round_trip(self, sample_graph):
        restored = ReplicatedGraph.from_dict(sample_graph.to_dict())
        assert restored == sample_graph
        assert restored.render() == sample_graph.render()
        assert restored.connected_vertices(2) == [0, 3]

    def test_json_round_trip(self, clock):
        graph = ReplicatedGraph(clock=clock, node_id="a")
        for v in ("x", "y", "z"):
            graph.add_vertex(v)
        graph.add_edge("x", "y")
        graph.add_edge("y", "z")
        clock.advance()
        graph.remove_vertex("z")

        restored = ReplicatedGraph.from_dict(json.loads(json.dumps(graph.to_dict())))
        assert restored == graph
        assert restored.node_id == "a"

    def test_from_dict_uses_given_clock(self, sample_graph):
        clock = ManualClock(start_ms=42)
        restored = ReplicatedGraph.from_dict(sample_graph.to_dict(), clock=clock)
        assert restored.clock is clock

    def test_from_dict_rejects_other_types(self):
        with pytest.raises(ValueError, match="ReplicatedGraph"):
            ReplicatedGraph.from_dict({"type": "ORSet", "entries": {}})

    def test_remote_snapshot_merges_like_replica(self, clock):
        a = ReplicatedGraph(clock=clock, node_id="a")
        b = ReplicatedGraph(clock=clock, node_id="b")
        a.add_vertex(1)
        b.add_vertex(2)

        snapshot = ReplicatedGraph.from_dict(b.to_dict())
        assert a.merge(snapshot) == a.merge(b)

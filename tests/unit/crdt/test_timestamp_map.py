"""Tests for the LWW timestamp tables."""

from lwwgraph.crdt.timestamp_map import EdgeTimestampMap, TimestampMap


class TestTimestampMap:
    """Tests for single-key timestamp tables."""

    def test_record_overwrites_unconditionally(self):
        m = TimestampMap()
        m.record("a", 10)
        m.record("a", 5)
        assert m.get("a") == 5

    def test_get_default(self):
        assert TimestampMap().get("missing") is None
        assert TimestampMap().get("missing", -1) == -1

    def test_join_keeps_maximum(self):
        a = TimestampMap({"x": 10, "y": 3})
        b = TimestampMap({"x": 7, "y": 9, "z": 1})
        a.join(b)
        assert a.as_dict() == {"x": 10, "y": 9, "z": 1}

    def test_join_is_commutative(self):
        a = TimestampMap({"x": 10, "y": 3})
        b = TimestampMap({"x": 7, "z": 1})
        ab, ba = a.copy(), b.copy()
        ab.join(b)
        ba.join(a)
        assert ab == ba

    def test_copy_is_independent(self):
        a = TimestampMap({"x": 1})
        b = a.copy()
        b.record("x", 2)
        assert a.get("x") == 1

    def test_container_protocol(self):
        m = TimestampMap()
        m.record("b", 1)
        m.record("a", 2)
        assert "a" in m
        assert len(m) == 2
        assert list(m) == ["b", "a"]
        assert list(m.items()) == [("b", 1), ("a", 2)]


class TestEdgeTimestampMap:
    """Tests for nested edge timestamp tables."""

    def test_record_and_get(self):
        m = EdgeTimestampMap()
        m.record(1, 2, 10)
        assert m.get(1, 2) == 10
        assert m.get(2, 1) is None
        assert (1, 2) in m
        assert (2, 1) not in m
        assert "not-an-edge" not in m

    def test_targets_follow_first_insertion(self):
        m = EdgeTimestampMap()
        m.record(0, 3, 1)
        m.record(0, 1, 2)
        m.record(0, 3, 5)
        assert m.targets(0) == [(3, 5), (1, 2)]
        assert m.targets(9) == []

    def test_discard_vertex_both_directions(self):
        m = EdgeTimestampMap()
        m.record(1, 2, 1)
        m.record(2, 3, 1)
        m.record(3, 2, 1)
        m.record(3, 1, 1)

        assert m.discard_vertex(2) == 3
        assert m.as_dict() == {3: {1: 1}}

    def test_discard_vertex_drops_empty_inner_maps(self):
        a = EdgeTimestampMap()
        a.record(1, 2, 1)
        a.discard_vertex(2)
        assert a == EdgeTimestampMap()
        assert len(a) == 0

    def test_join_keeps_maximum_per_edge(self):
        a = EdgeTimestampMap()
        b = EdgeTimestampMap()
        a.record(1, 2, 10)
        a.record(1, 3, 1)
        b.record(1, 2, 5)
        b.record(1, 3, 8)
        b.record(4, 1, 2)
        a.join(b)
        assert a.as_dict() == {1: {2: 10, 3: 8}, 4: {1: 2}}

    def test_join_does_not_alias_inner_maps(self):
        a = EdgeTimestampMap()
        b = EdgeTimestampMap()
        b.record(1, 2, 1)
        a.join(b)
        b.record(1, 3, 1)
        assert a.as_dict() == {1: {2: 1}}

    def test_copy_is_deep(self):
        a = EdgeTimestampMap()
        a.record(1, 2, 1)
        b = a.copy()
        b.record(1, 3, 1)
        assert a.as_dict() == {1: {2: 1}}
        assert list(b.items()) == [(1, 2, 1), (1, 3, 1)]

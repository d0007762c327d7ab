import math

import pytest

from traffic_graph import (
    GraphDataError,
    InvalidExpressionError,
    Relative,
    TrafficGraph,
    TrafficTraversal,
)


@pytest.fixture
def graph() -> TrafficGraph:
    return (
        TrafficGraph()
        .connect("a", {"b": 1, "c": 2})
        .connect("b", {"d": 2})
        .connect("c", {"d": 2})
        .connect("A", {"B": 1, "C": 2})
        .connect("B", {"D": 2})
        .connect("C", {"D": 2})
        .connect("0", {"1": 4, "2": 2})
        .connect("1", {"3": 10, "2": 5})
        .connect("2", {"4": 3})
        .connect("4", {"3": 4})
        .connect("3", {"5": 11})
    )


def test_export_data(graph):
    assert graph.export_data()["a"] == {"b": 1, "c": 2}


def test_vertices_in_first_seen_order(graph):
    assert graph.vertices[:4] == ["a", "b", "c", "d"]
    assert sorted(graph.vertices) == sorted(
        ["0", "1", "2", "3", "4", "5", "A", "B", "C", "D", "a", "b", "c", "d"]
    )


def test_has(graph):
    assert graph.has("a")
    assert graph.has("d")  # destination only
    assert not graph.has("e")
    assert "a" in graph
    assert len(graph) == 14


def test_has_all(graph):
    assert graph.has_all("a", "b", "c")
    assert not graph.has_all("a", "b", "c", "e")


def test_connect_without_destinations_creates_vertex():
    graph = TrafficGraph().connect("lonely", {})
    assert graph.has("lonely")
    assert graph.export_data() == {"lonely": {}}


def test_self_loops_are_rejected():
    graph = TrafficGraph().connect("a", {"a": 5, "b": 1})
    assert graph.export_data() == {"a": {"b": 1}}


def test_connect_overwrites_existing_edge():
    graph = TrafficGraph().connect("a", {"b": 1}).connect("a", {"b": 7})
    assert graph.export_data() == {"a": {"b": 7}}


def test_relative_updates_accumulate():
    graph = TrafficGraph()
    graph.connect("a", {"b": Relative("add", 1)})
    graph.connect("a", {"b": Relative("add", 1)})
    graph.connect("a", {"b": Relative("add", 2), "c": Relative("subtract", 1)})

    assert graph.export_data() == {"a": {"b": 4, "c": -1}}


def test_relative_updates_from_strings():
    graph = TrafficGraph()
    graph.connect("a", {"b": 1}).connect("a", {"b": "+=1"})
    graph.connect("a", {"b": "+=2", "c": "-=1"})

    traversal = TrafficTraversal(graph.snapshot())
    assert traversal.traffic("a", "b") == 4
    assert traversal.traffic("a", "c") == -1
    assert math.isinf(traversal.traffic("b", "a"))

    graph.connect_both("a", {"a": "+=1", "b": "+=2", "c": "+=3"})
    traversal = TrafficTraversal(graph.snapshot())
    assert traversal.traffic("a", "b") == 6
    assert traversal.traffic("a", "c") == 2
    assert traversal.traffic("b", "a") == 2
    assert traversal.traffic("c", "a") == 3

    graph.connect_all({"a": "*=1", "b": "*=2", "c": "*=3"})
    traversal = TrafficTraversal(graph.snapshot())
    assert traversal.traffic("a", "b") == 6
    assert traversal.traffic("a", "c") == 6
    assert traversal.traffic("b", "a") == 2
    assert traversal.traffic("b", "c") == 0
    assert traversal.traffic("c", "a") == 2
    assert traversal.traffic("c", "b") == 0


def test_unknown_operator_raises():
    graph = TrafficGraph()
    with pytest.raises(InvalidExpressionError) as exc_info:
        graph.connect("a", {"b": Relative("modulo", 2)})
    assert exc_info.value.expression == "modulo"


def test_connect_both_mirrors_weight():
    graph = TrafficGraph().connect_both("a", {"b": 3})
    assert graph.export_data() == {"a": {"b": 3}, "b": {"a": 3}}


def test_connect_all_links_every_pair():
    graph = TrafficGraph().connect_all({"a": 1, "b": 2, "c": 3})
    assert graph.export_data() == {
        "a": {"b": 2, "c": 3},
        "b": {"a": 1, "c": 3},
        "c": {"a": 1, "b": 2},
    }


def test_disconnect(graph):
    graph.disconnect("a", "b")
    traversal = TrafficTraversal(graph.snapshot())
    assert traversal.traffic("a", "d") == 4
    assert traversal.routes("a", "d") == ["a", "c", "d"]


def test_disconnect_missing_edge_is_noop(graph):
    before = graph.export_data()
    graph.disconnect("a", "zzz").disconnect("zzz", "a")
    assert graph.export_data() == before


def test_disconnect_both(graph):
    graph.connect("b", {"a": 1})
    graph.disconnect_both("a", "b")
    data = graph.export_data()
    assert "b" not in data["a"]
    assert "a" not in data["b"]
    assert TrafficTraversal(graph.snapshot()).traffic("a", "d") == 4


def test_remove(graph):
    graph.remove("b")
    assert not graph.has("b")
    assert all("b" not in dests for dests in graph.export_data().values())
    assert TrafficTraversal(graph.snapshot()).traffic("a", "d") == 4


def test_invert_negates_weights():
    graph = TrafficGraph().connect("a", {"b": 2, "c": -3})
    graph.invert()
    assert graph.export_data() == {"a": {"b": -2, "c": 3}}
    graph.invert()
    assert graph.export_data() == {"a": {"b": 2, "c": -3}}


def test_export_data_is_a_copy(graph):
    data = graph.export_data()
    data["a"]["b"] = 100
    assert graph.export_data()["a"]["b"] == 1


def test_restore_from_exported_data(graph):
    restored = TrafficGraph(graph.export_data())
    assert restored.export_data() == graph.export_data()
    assert restored.vertices == graph.vertices


def test_restore_drops_self_loops():
    graph = TrafficGraph({"a": {"a": 1, "b": 2}})
    assert graph.export_data() == {"a": {"b": 2}}


def test_restore_rejects_malformed_data():
    with pytest.raises(GraphDataError) as exc_info:
        TrafficGraph({"a": {"b": "heavy"}})
    assert exc_info.value.cause is not None


def test_clone_shares_no_state(graph):
    clone = graph.clone()
    clone.connect("a", {"b": 50}).remove("c")
    assert graph.export_data()["a"] == {"b": 1, "c": 2}
    assert graph.has("c")


def test_snapshot_is_frozen(graph):
    snapshot = graph.snapshot()
    graph.connect("a", {"b": 99, "z": 1})

    assert snapshot.data["a"]["b"] == 1
    assert "z" not in snapshot.vertices
    with pytest.raises(TypeError):
        snapshot.data["a"]["b"] = 5  # type: ignore[index]


def test_snapshot_vertices_cover_data(graph):
    snapshot = graph.snapshot()
    referenced = set(snapshot.data)
    for dests in snapshot.data.values():
        referenced.update(dests)
    assert set(snapshot.vertices) == referenced
    assert len(snapshot.vertices) == len(set(snapshot.vertices))
    assert snapshot.timestamp > 0

import pytest

from netviz.graph import GraphModel
from netviz.models import DataIntegrityError, GraphDataset, Node, NodeCategory, NodeNotFoundError

from conftest import edge_record, make_model, node_record


def test_dangling_edge_is_rejected():
    with pytest.raises(DataIntegrityError):
        make_model(
            [node_record("me", 0, 0, category="self"), node_record("sarah", 10, 10)],
            [edge_record("me", "ghost")],
        )


def test_graph_requires_exactly_one_self_node():
    with pytest.raises(DataIntegrityError):
        make_model([node_record("a", 0, 0), node_record("b", 1, 1)])
    with pytest.raises(DataIntegrityError):
        make_model([node_record("a", 0, 0, category="self"), node_record("b", 1, 1, category="self")])


def test_duplicate_edge_ids_rejected():
    with pytest.raises(DataIntegrityError):
        make_model(
            [node_record("me", 0, 0, category="self"), node_record("b", 1, 1)],
            [edge_record("me", "b"), edge_record("me", "b", 0.9)],
        )


def test_mismatched_node_key_rejected():
    node = Node(**node_record("me", 0, 0, category="self"))
    with pytest.raises(DataIntegrityError):
        GraphModel(GraphDataset(nodes={"other": node}))


def test_lookups(small_model):
    assert small_model.get_node("sarah").display_name == "Sarah"
    assert small_model.has_node("david")
    assert not small_model.has_node("nobody")
    assert [n.id for n in small_model.all_nodes()] == ["me", "sarah", "michael", "emily", "david"]
    assert [e.id for e in small_model.all_edges()] == ["me-sarah", "me-michael", "sarah-emily"]
    with pytest.raises(NodeNotFoundError):
        small_model.get_node("nobody")


def test_edges_touching_and_neighbors(small_model):
    assert [e.id for e in small_model.edges_touching("sarah")] == ["me-sarah", "sarah-emily"]
    assert small_model.edges_touching("david") == ()
    assert [n.id for n in small_model.neighbors("me")] == ["sarah", "michael"]
    with pytest.raises(NodeNotFoundError):
        small_model.edges_touching("nobody")


def test_self_node_resolved_by_category_not_position():
    model = make_model(
        [node_record("a", 0, 0), node_record("b", 1, 1), node_record("me", 2, 2, category="self")]
    )
    assert model.self_node().id == "me"
    assert model.self_node().category == NodeCategory.SELF


def test_position_arrays_follow_node_order(small_model):
    assert small_model.positions.shape == (5, 2)
    assert list(small_model.positions[1]) == [300.0, 200.0]
    assert list(small_model.radii) == [20.0, 16.0, 14.0, 15.0, 13.0]


def test_stats_on_sample(sample_model):
    stats = sample_model.stats()
    assert stats.total_nodes == 9
    assert stats.total_edges == 6
    assert stats.strong_connections == 3
    assert stats.medium_connections == 2
    assert stats.weak_connections == 1
    assert stats.average_connections == pytest.approx(12 / 9)
    assert stats.network_density == pytest.approx(6 / 36)
    assert stats.clustering_coefficient == pytest.approx(0.0)
    assert stats.average_shortest_path > 1.0


def test_stats_count_parallel_records_once():
    model = make_model(
        [node_record("me", 0, 0, category="self"), node_record("b", 1, 1), node_record("c", 2, 2)],
        [edge_record("me", "b", 0.9), edge_record("b", "me", 0.9, id="b-me"), edge_record("me", "c", 0.3)],
    )
    stats = model.stats()
    assert stats.total_edges == 2
    assert stats.strong_connections + stats.medium_connections + stats.weak_connections == 2
    assert stats.average_connections == pytest.approx(2 * 2 / 3)
    assert stats.network_density == pytest.approx(stats.average_connections / (stats.total_nodes - 1))
    assert len(model.all_edges()) == 3


def test_connection_path(sample_model):
    assert sample_model.connection_path("alex", "maria") == ["alex", "sarah", "user", "michael", "maria"]
    assert sample_model.connection_path("user", "priya") is None
    with pytest.raises(NodeNotFoundError):
        sample_model.connection_path("user", "nobody")


def test_to_dict_is_json_ready(sample_model):
    data = sample_model.to_dict()
    assert len(data["nodes"]) == 9
    assert data["nodes"][0]["category"] == "self"
    assert data["edges"][0]["strength_class"] == "strong"
    assert data["stats"]["total_edges"] == 6

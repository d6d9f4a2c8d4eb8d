import numpy as np
import pytest

from hashgraph import create_graph
from hashgraph.config import MissingLocationError, TableDestroyedError
from hashgraph.core.graph import Graph
from hashgraph.core.graph_elements import Location, Neighbour


@pytest.fixture
def graph():
    g = create_graph("sample")
    g.insert_vertex("A", Location(42.0, -83.0))
    g.insert_vertex("B", None)
    g.insert_edge("A", "B", 5.2)
    return g


def test_create_graph():
    g = create_graph()
    assert isinstance(g, Graph)
    assert g.vertex_count == 0
    assert g.edge_count == 0


def test_sample_scenario(graph):
    assert graph.find_neighbours("A") == [Neighbour("B", 5.2)]
    assert graph.find_neighbours("B") == []
    assert graph.find_vertex("A").location == Location(42.0, -83.0)
    assert graph.find_vertex("B").location is None
    assert graph.find_vertex("C") is None


def test_location_pair_accepted():
    g = create_graph()
    g.insert_vertex("X", (10.5, 20.25))
    assert g.find_vertex("X").location == Location(10.5, 20.25)


def test_insert_vertex_replaces_location_and_keeps_edges(graph):
    graph.insert_vertex("A", (1.0, 2.0))
    assert graph.vertex_count == 2
    assert graph.find_vertex("A").location == Location(1.0, 2.0)
    assert graph.find_neighbours("A") == [Neighbour("B", 5.2)]


def test_insert_edge_replaces_distance(graph):
    graph.insert_edge("A", "B", 7.0)
    assert graph.find_neighbours("A") == [Neighbour("B", 7.0)]
    assert graph.edge_count == 1


def test_edges_may_reference_missing_vertices():
    g = create_graph()
    g.insert_edge("ghost", "phantom", 1.5)
    assert g.find_vertex("ghost") is None
    assert g.find_neighbours("ghost") == [Neighbour("phantom", 1.5)]


def test_delete_vertex_keeps_edges(graph):
    graph.insert_edge("B", "A", 5.2)
    assert graph.delete_vertex("B") is True
    assert graph.find_vertex("B") is None
    # Adjacency is stored independently of the vertex table
    assert graph.find_neighbours("A") == [Neighbour("B", 5.2)]
    assert graph.find_neighbours("B") == [Neighbour("A", 5.2)]
    assert graph.delete_vertex("B") is False


def test_delete_edge(graph):
    assert graph.delete_edge("A", "B") is True
    assert graph.find_neighbours("A") == []
    assert graph.delete_edge("A", "B") is False
    assert graph.delete_edge("nowhere", "B") is False


def test_many_edges_from_one_source():
    g = create_graph()
    for i in range(300):
        g.insert_edge("hub", f"spoke{i}", float(i))
    neighbours = g.find_neighbours("hub")
    assert len(neighbours) == 300
    assert {n.target_id: n.distance for n in neighbours} == {f"spoke{i}": float(i) for i in range(300)}
    assert g.edge_count == 300


def test_edges_iteration(graph):
    graph.insert_edge("B", "C", 1.0)
    assert sorted((source, n.target_id, n.distance) for source, n in graph.edges()) == [
        ("A", "B", 5.2), ("B", "C", 1.0)
    ]
    assert sorted(v.id for v in graph.vertices()) == ["A", "B"]


def test_connect_uses_haversine_distance():
    g = create_graph()
    g.insert_vertex("origin", (0.0, 0.0))
    g.insert_vertex("east", (0.0, 1.0))
    distance = g.connect("origin", "east")
    assert distance == pytest.approx(111.195, rel=1e-4)
    assert g.find_neighbours("origin")[0].distance == pytest.approx(distance)
    assert g.find_neighbours("east") == []


def test_connect_requires_locations(graph):
    with pytest.raises(MissingLocationError):
        graph.connect("A", "B")
    with pytest.raises(MissingLocationError):
        graph.connect("A", "missing")


def test_adjacency_matrix(graph):
    graph.insert_edge("B", "C", 2.0)
    matrix, order = graph.to_adjacency_matrix()
    assert order == ["A", "B", "C"]
    assert matrix.shape == (3, 3)
    assert matrix[0, 1] == 5.2
    assert matrix[1, 2] == 2.0
    assert np.isnan(matrix[1, 0])
    assert np.count_nonzero(~np.isnan(matrix)) == 2


def test_adjacency_matrix_custom_order(graph):
    matrix, order = graph.to_adjacency_matrix(order=["B", "A"])
    assert order == ["B", "A"]
    assert matrix[1, 0] == 5.2
    assert np.isnan(matrix[0, 1])


def test_adjacency_matrix_mixed_id_types():
    g = create_graph()
    g.insert_vertex(b"b")
    g.insert_vertex("a")
    g.insert_edge("a", b"b", 1.0)
    g.insert_edge(b"b", "c", 2.0)
    matrix, order = g.to_adjacency_matrix()
    assert order == ["a", "c", b"b"]
    assert matrix[0, 2] == 1.0
    assert matrix[2, 1] == 2.0
    assert np.count_nonzero(~np.isnan(matrix)) == 2


def test_destroy(graph):
    adjacency = graph.adjacency.find("A")
    graph.destroy()
    assert graph.destroyed
    assert adjacency.destroyed
    assert graph.vertex_table.destroyed
    assert "destroyed" in repr(graph)
    with pytest.raises(TableDestroyedError):
        graph.find_vertex("A")
    with pytest.raises(TableDestroyedError):
        graph.insert_edge("A", "B", 1.0)
    graph.destroy()


def test_repr(graph):
    assert repr(graph) == "Graph(name=sample, vertices=2, edges=1)"

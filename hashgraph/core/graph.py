"""
Directed graph of located vertices backed by open-addressing hash tables.

The graph keeps vertices and adjacency independently: an edge may point
to a vertex that has not been inserted yet, and deleting a vertex leaves
every edge that references it in place.
"""

import logging

import numpy as np

from ..config import MissingLocationError, TableDestroyedError
from ..utils.geometry import haversine_distance
from .graph_elements import AdjacencyDirectory, Neighbour, Vertex, VertexTable

logger = logging.getLogger(__name__)


class Graph:
    """
    A directed graph with vertices keyed by string identifiers.

    Each vertex may carry a geographic location. Edges are stored per
    source vertex as neighbour records holding the target identifier and
    a distance.

    Examples
    --------
    >>> graph = create_graph()
    >>> graph.insert_vertex("A", (42.0, -83.0))
    >>> graph.insert_edge("A", "B", 5.2)
    >>> graph.find_neighbours("A")
    [Neighbour(target_id='B', distance=5.2)]
    """

    def __init__(self, name=None):
        """
        Initialize an empty Graph.

        Parameters
        ----------
        name : str, optional
            Name of the graph
        """
        self.name = name
        self.vertex_table = VertexTable()
        self.adjacency = AdjacencyDirectory()
        self._destroyed = False

    def _check_alive(self):
        if self._destroyed:
            raise TableDestroyedError("Graph has been destroyed")

    # ---- Vertices --------------------------------------------------------

    def insert_vertex(self, vertex_id, location=None):
        """
        Add a vertex, replacing the location of an existing one.

        Parameters
        ----------
        vertex_id : str or bytes
            Unique identifier of the vertex
        location : Location or tuple of float, optional
            Location or (latitude, longitude) pair; None means no location
        """
        self._check_alive()
        self.vertex_table.insert(Vertex(vertex_id, location))

    def find_vertex(self, vertex_id):
        """
        Get a vertex by identifier.

        Parameters
        ----------
        vertex_id : str or bytes
            Identifier of the vertex

        Returns
        -------
        Vertex or None
            The vertex, or None if it was never inserted or was deleted
        """
        self._check_alive()
        return self.vertex_table.find(vertex_id)

    def delete_vertex(self, vertex_id):
        """
        Remove a vertex record.

        Edges leaving the vertex and edges pointing to it are kept.

        Returns
        -------
        bool
            True if the vertex was present
        """
        self._check_alive()
        return self.vertex_table.delete(vertex_id)

    # ---- Edges -----------------------------------------------------------

    def insert_edge(self, source_id, target_id, distance):
        """
        Add a directed edge, replacing the distance of an existing one.

        Neither endpoint has to be a vertex of the graph.

        Parameters
        ----------
        source_id : str or bytes
            Identifier of the vertex the edge leaves from
        target_id : str or bytes
            Identifier of the vertex the edge points to
        distance : float
            Length or weight of the edge
        """
        self._check_alive()
        neighbour = Neighbour(target_id, distance)
        self.adjacency.get_or_create(source_id).insert(neighbour)

    def connect(self, source_id, target_id):
        """
        Add a directed edge whose distance is the great-circle distance
        between the two vertices' locations.

        Parameters
        ----------
        source_id : str or bytes
            Identifier of the source vertex
        target_id : str or bytes
            Identifier of the target vertex

        Returns
        -------
        float
            Distance of the new edge in kilometres
        """
        self._check_alive()
        locations = []
        for vertex_id in (source_id, target_id):
            vertex = self.vertex_table.find(vertex_id)
            if vertex is None or vertex.location is None:
                raise MissingLocationError(f"Vertex {vertex_id!r} is unknown or has no location")
            locations.append(vertex.location)
        distance = haversine_distance(*locations)
        self.insert_edge(source_id, target_id, distance)
        return distance

    def delete_edge(self, source_id, target_id):
        """
        Remove a directed edge.

        Returns
        -------
        bool
            True if the edge was present
        """
        self._check_alive()
        adjacency = self.adjacency.find(source_id)
        if adjacency is None:
            return False
        return adjacency.delete(target_id)

    def find_neighbours(self, source_id):
        """
        Outgoing edges of a vertex.

        Parameters
        ----------
        source_id : str or bytes
            Identifier of the source vertex

        Returns
        -------
        list of Neighbour
            Neighbour records, empty if the vertex has no outgoing edges
        """
        self._check_alive()
        adjacency = self.adjacency.find(source_id)
        if adjacency is None:
            return []
        return list(adjacency)

    # ---- Introspection ---------------------------------------------------

    @property
    def vertex_count(self):
        return len(self.vertex_table)

    @property
    def edge_count(self):
        return sum(len(adjacency) for adjacency in self.adjacency)

    def vertices(self):
        """Iterate over the vertices."""
        self._check_alive()
        return iter(self.vertex_table)

    def edges(self):
        """Iterate over (source_id, Neighbour) pairs."""
        self._check_alive()
        for adjacency in self.adjacency:
            for neighbour in adjacency:
                yield adjacency.source_id, neighbour

    def to_adjacency_matrix(self, order=None):
        """
        Dense distance matrix of the graph.

        Parameters
        ----------
        order : list, optional
            Vertex identifiers giving the row/column order. Defaults to
            the sorted union of vertex ids and edge endpoints, str ids
            before bytes ids.

        Returns
        -------
        tuple
            (matrix, order) where matrix[i, j] is the distance of the edge
            order[i] -> order[j], or nan if there is no such edge
        """
        self._check_alive()
        if order is None:
            ids = {vertex.id for vertex in self.vertex_table}
            for source_id, neighbour in self.edges():
                ids.add(source_id)
                ids.add(neighbour.target_id)
            order = sorted(ids, key=lambda vertex_id: (isinstance(vertex_id, bytes), vertex_id))
        position = {vertex_id: i for i, vertex_id in enumerate(order)}

        matrix = np.full((len(order), len(order)), np.nan)
        for source_id, neighbour in self.edges():
            i = position.get(source_id)
            j = position.get(neighbour.target_id)
            if i is not None and j is not None:
                matrix[i, j] = neighbour.distance
        return matrix, list(order)

    def destroy(self):
        """Release the adjacency tables, then the vertex table."""
        if self._destroyed:
            return
        self.adjacency.destroy()
        self.vertex_table.destroy()
        self._destroyed = True

    @property
    def destroyed(self):
        return self._destroyed

    def __repr__(self):
        if self._destroyed:
            return f"Graph(name={self.name}, destroyed)"
        return f"Graph(name={self.name}, vertices={self.vertex_count}, edges={self.edge_count})"


def create_graph(name=None):
    """Create an empty Graph."""
    return Graph(name=name)

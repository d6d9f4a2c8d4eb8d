"""
Graph records and the hash tables that index them.

Vertices are stored in a VertexTable keyed by identifier. Each source
vertex owns an AdjacencyTable of Neighbour records keyed by target
identifier, and the adjacency tables themselves are indexed by source
identifier in an AdjacencyDirectory. All three use the open-addressing
protocol of `hashgraph.core.table`.
"""

import logging

from shapely.geometry import Point

from ..config import MIN_SIZE_CLASS
from .table import OpenAddressTable, check_key

logger = logging.getLogger(__name__)


class Location:
    """
    Geographic position of a vertex.
    """

    __slots__ = ('latitude', 'longitude')

    def __init__(self, latitude, longitude):
        """
        Initialize a Location.

        Parameters
        ----------
        latitude : float
            Latitude in decimal degrees
        longitude : float
            Longitude in decimal degrees
        """
        self.latitude = float(latitude)
        self.longitude = float(longitude)

    @classmethod
    def coerce(cls, location):
        """Build a Location from a Location, a (lat, lon) pair or None."""
        if location is None or isinstance(location, cls):
            return location
        latitude, longitude = location
        return cls(latitude, longitude)

    def to_point(self):
        """Shapely point in (x=longitude, y=latitude) order."""
        return Point(self.longitude, self.latitude)

    def as_tuple(self):
        return self.latitude, self.longitude

    def __eq__(self, other):
        if not isinstance(other, Location):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self):
        return f"Location(lat={self.latitude}, lon={self.longitude})"


class Vertex:
    """
    A graph vertex identified by a string, with an optional location.
    """

    __slots__ = ('id', 'location')

    def __init__(self, vertex_id, location=None):
        self.id = check_key(vertex_id)
        self.location = Location.coerce(location)

    def __eq__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.id == other.id and self.location == other.location

    def __repr__(self):
        return f"Vertex(id={self.id!r}, location={self.location})"


class Neighbour:
    """
    One directed edge, seen from its source vertex.
    """

    __slots__ = ('target_id', 'distance')

    def __init__(self, target_id, distance):
        """
        Initialize a Neighbour.

        Parameters
        ----------
        target_id : str or bytes
            Identifier of the vertex the edge points to
        distance : float
            Length or weight of the edge
        """
        self.target_id = check_key(target_id)
        self.distance = float(distance)

    def __eq__(self, other):
        if not isinstance(other, Neighbour):
            return NotImplemented
        return self.target_id == other.target_id and self.distance == other.distance

    def __repr__(self):
        return f"Neighbour(target_id={self.target_id!r}, distance={self.distance})"


class VertexTable(OpenAddressTable):
    """
    Vertices keyed by identifier.
    """

    def _key_of(self, record):
        return record.id

    def insert(self, vertex):
        """Insert a vertex, replacing any vertex with the same id."""
        self._insert_record(vertex)

    def find(self, vertex_id):
        """Vertex with the given id, or None."""
        return self._lookup_record(vertex_id)

    def delete(self, vertex_id):
        """Remove a vertex. Returns True if it was present."""
        return self._delete_record(vertex_id) is not None

    def __iter__(self):
        return self._live_records()


class AdjacencyTable(OpenAddressTable):
    """
    Outgoing edges of one source vertex, keyed by target identifier.
    """

    def __init__(self, source_id, size_class=MIN_SIZE_CLASS):
        """
        Initialize an empty AdjacencyTable.

        Parameters
        ----------
        source_id : str or bytes
            Identifier of the vertex the edges leave from
        size_class : int, optional
            Starting size class (default is the minimum)
        """
        super().__init__(size_class)
        self.source_id = check_key(source_id)

    def _key_of(self, record):
        return record.target_id

    def insert(self, neighbour):
        """Insert a neighbour, replacing any neighbour with the same target."""
        self._insert_record(neighbour)

    def find(self, target_id):
        """Neighbour record for target_id, or None."""
        return self._lookup_record(target_id)

    def delete(self, target_id):
        """Remove the edge to target_id. Returns True if it was present."""
        return self._delete_record(target_id) is not None

    def __iter__(self):
        return self._live_records()

    def __repr__(self):
        if self.destroyed:
            return f"AdjacencyTable(source_id={self.source_id!r}, destroyed)"
        return (f"AdjacencyTable(source_id={self.source_id!r}, count={self.count}, "
                f"capacity={self.capacity})")


class AdjacencyDirectory(OpenAddressTable):
    """
    Adjacency tables keyed by source identifier.
    """

    def _key_of(self, record):
        return record.source_id

    def _release(self, record):
        record.destroy()

    def get_or_create(self, source_id):
        """
        Adjacency table of a source vertex, created empty if missing.

        Parameters
        ----------
        source_id : str or bytes
            Identifier of the source vertex

        Returns
        -------
        AdjacencyTable
            The table holding the source's outgoing edges
        """
        adjacency = self._lookup_record(source_id)
        if adjacency is None:
            adjacency = AdjacencyTable(source_id)
            self._insert_record(adjacency)
            logger.debug("Created adjacency table for %r", source_id)
        return adjacency

    def find(self, source_id):
        """Adjacency table of source_id, or None."""
        return self._lookup_record(source_id)

    def delete(self, source_id):
        """Remove and destroy the adjacency table of source_id. Returns True if it existed."""
        adjacency = self._delete_record(source_id)
        if adjacency is None:
            return False
        adjacency.destroy()
        return True

    def __iter__(self):
        return self._live_records()

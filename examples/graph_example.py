"""
Example script for building a located road graph with hashgraph.

This script demonstrates how to:
1. Store and query string pairs in a HashTable
2. Build a directed graph of located vertices
3. Compute edge distances from vertex locations
4. Export the graph to CSV, GeoDataFrames and NetworkX
"""

import os
import sys
import tempfile

import networkx as nx
import numpy as np

# Add the parent directory to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import hashgraph as hg
from hashgraph.io import export_graph_csv, graph_to_geodataframes, graph_to_networkx, load_graph_csv
from hashgraph.utils.logger import setup_logger


CITIES = {
    'Ann Arbor': (42.2808, -83.7430),
    'Detroit': (42.3314, -83.0458),
    'Lansing': (42.7325, -84.5555),
    'Toledo': (41.6528, -83.5379),
    'Grand Rapids': (42.9634, -85.6681)
}

ROADS = [
    ('Ann Arbor', 'Detroit'), ('Detroit', 'Ann Arbor'),
    ('Ann Arbor', 'Lansing'), ('Lansing', 'Grand Rapids'),
    ('Ann Arbor', 'Toledo'), ('Toledo', 'Detroit')
]


def table_demo():
    """Insert, replace and delete string pairs."""
    table = hg.create_table()
    for city, (lat, lon) in CITIES.items():
        table.insert(city, f"{lat:.4f},{lon:.4f}")
    table.insert('Detroit', 'Motor City')
    table.delete('Toledo')
    table.delete('Chicago')

    print(f"{table!r}")
    for key, value in sorted(table.items()):
        print(f"  {key:<14} {value}")
    print(f"  stats: {table.stats()}")


def build_graph():
    """Create the sample road graph."""
    graph = hg.create_graph('michigan_roads')
    for city, location in CITIES.items():
        graph.insert_vertex(city, location)
    for source, target in ROADS:
        graph.connect(source, target)
    # A road to a city that is not a vertex yet
    graph.insert_edge('Grand Rapids', 'Chicago', 286.0)
    return graph


def main():
    setup_logger(config={'level': 'INFO'})
    table_demo()

    graph = build_graph()
    print(f"\n{graph!r}")
    for neighbour in graph.find_neighbours('Ann Arbor'):
        print(f"  Ann Arbor -> {neighbour.target_id:<14} {neighbour.distance:7.1f} km")

    matrix, order = graph.to_adjacency_matrix()
    print(f"\nEdges in matrix: {np.count_nonzero(~np.isnan(matrix))} over {len(order)} ids")

    G = graph_to_networkx(graph)
    path = nx.shortest_path(G, 'Toledo', 'Grand Rapids', weight='weight')
    print(f"Shortest path Toledo -> Grand Rapids: {' -> '.join(path)}")

    vertices_gdf, edges_gdf = graph_to_geodataframes(graph)
    print(f"GeoDataFrames: {len(vertices_gdf)} vertices, {len(edges_gdf)} edges")

    with tempfile.TemporaryDirectory() as output_dir:
        vertices_path = os.path.join(output_dir, 'vertices.csv')
        edges_path = os.path.join(output_dir, 'edges.csv')
        export_graph_csv(graph, vertices_path, edges_path)
        loaded = load_graph_csv(vertices_path, edges_path, name='reloaded')
        print(f"Reloaded: {loaded!r}")

    graph.destroy()


if __name__ == '__main__':
    main()

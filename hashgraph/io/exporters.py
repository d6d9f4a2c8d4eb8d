"""
Functions for exporting graphs to tabular, geospatial and NetworkX formats.
"""

import os

import geopandas as gpd
import networkx as nx
import pandas as pd
from shapely.geometry import LineString

from ..config import EXPORT_CONFIG


def graph_to_dataframes(graph):
    """
    Convert a graph to DataFrames.

    Parameters
    ----------
    graph : Graph
        Graph to convert

    Returns
    -------
    tuple of DataFrame
        (vertices_df, edges_df). Vertices without a location have NaN
        coordinates.
    """
    columns = EXPORT_CONFIG['columns']

    vertices_data = []
    for vertex in graph.vertices():
        location = vertex.location
        vertices_data.append({
            columns['id']: vertex.id,
            columns['latitude']: location.latitude if location else float('nan'),
            columns['longitude']: location.longitude if location else float('nan')
        })

    edges_data = []
    for source_id, neighbour in graph.edges():
        edges_data.append({
            columns['source']: source_id,
            columns['target']: neighbour.target_id,
            columns['distance']: neighbour.distance
        })

    vertices_df = pd.DataFrame(vertices_data,
                               columns=[columns['id'], columns['latitude'], columns['longitude']])
    edges_df = pd.DataFrame(edges_data,
                            columns=[columns['source'], columns['target'], columns['distance']])
    return vertices_df, edges_df


def graph_to_geodataframes(graph, crs=None):
    """
    Convert a graph to GeoDataFrames.

    Parameters
    ----------
    graph : Graph
        Graph to convert
    crs : str, optional
        Coordinate reference system (default is EXPORT_CONFIG['crs'])

    Returns
    -------
    tuple of GeoDataFrame
        (vertices_gdf, edges_gdf). Vertex geometries are points; edge
        geometries are lines when both endpoints have a location, and
        None otherwise.
    """
    if crs is None:
        crs = EXPORT_CONFIG['crs']
    vertices_df, edges_df = graph_to_dataframes(graph)

    locations = {}
    vertex_geometries = []
    for vertex in graph.vertices():
        if vertex.location is not None:
            locations[vertex.id] = vertex.location
            vertex_geometries.append(vertex.location.to_point())
        else:
            vertex_geometries.append(None)

    edge_geometries = []
    for source_id, neighbour in graph.edges():
        start = locations.get(source_id)
        end = locations.get(neighbour.target_id)
        if start is not None and end is not None:
            edge_geometries.append(LineString([start.to_point(), end.to_point()]))
        else:
            edge_geometries.append(None)

    vertices_gdf = gpd.GeoDataFrame(vertices_df, geometry=vertex_geometries, crs=crs)
    edges_gdf = gpd.GeoDataFrame(edges_df, geometry=edge_geometries, crs=crs)
    return vertices_gdf, edges_gdf


def graph_to_networkx(graph):
    """
    Convert a graph to a NetworkX directed graph.

    Parameters
    ----------
    graph : Graph
        Graph to convert

    Returns
    -------
    networkx.DiGraph
        Nodes carry 'latitude' and 'longitude' attributes when located;
        edges carry the distance as 'weight'. Edge endpoints that are not
        vertices of the graph become attribute-less nodes.
    """
    G = nx.DiGraph(name=graph.name)

    for vertex in graph.vertices():
        if vertex.location is not None:
            G.add_node(vertex.id, latitude=vertex.location.latitude,
                       longitude=vertex.location.longitude)
        else:
            G.add_node(vertex.id)

    for source_id, neighbour in graph.edges():
        G.add_edge(source_id, neighbour.target_id, weight=neighbour.distance)

    return G


def _id_text(vertex_id):
    if isinstance(vertex_id, bytes):
        return vertex_id.decode('utf-8', errors='backslashreplace')
    return vertex_id


def export_graph_csv(graph, vertices_path, edges_path):
    """
    Export a graph to two CSV files.

    CSV has no bytes type: bytes ids are written decoded as UTF-8 and
    load back as str ids.

    Parameters
    ----------
    graph : Graph
        Graph to export
    vertices_path : str
        Path to the vertices CSV file
    edges_path : str
        Path to the edges CSV file
    """
    columns = EXPORT_CONFIG['columns']
    vertices_df, edges_df = graph_to_dataframes(graph)
    vertices_df[columns['id']] = vertices_df[columns['id']].map(_id_text)
    for col in (columns['source'], columns['target']):
        edges_df[col] = edges_df[col].map(_id_text)
    for filepath in (vertices_path, edges_path):
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
    vertices_df.to_csv(vertices_path, index=False)
    edges_df.to_csv(edges_path, index=False)

"""
Functions for building graphs from tabular data.
"""

import logging
import warnings

import pandas as pd

from ..config import EXPORT_CONFIG, GraphFormatError
from ..core.graph import Graph

logger = logging.getLogger(__name__)


def _require_columns(df, required, what):
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise GraphFormatError(f"Required column(s) {missing} not found in {what} data")


def graph_from_dataframes(vertices_df, edges_df=None, name=None):
    """
    Create a Graph from DataFrames.

    Parameters
    ----------
    vertices_df : DataFrame
        One row per vertex with an 'id' column and, optionally,
        'latitude' and 'longitude' columns
    edges_df : DataFrame, optional
        One row per directed edge with 'source' and 'target' columns and,
        optionally, a 'distance' column
    name : str, optional
        Name of the graph

    Returns
    -------
    Graph
        A new graph. Edges with a missing distance get the great-circle
        distance between their endpoints; rows where that is not possible
        are skipped with a warning. Rows with a missing id, source or
        target are skipped with a warning too.
    """
    columns = EXPORT_CONFIG['columns']
    id_col, lat_col, lon_col = columns['id'], columns['latitude'], columns['longitude']
    source_col, target_col, dist_col = columns['source'], columns['target'], columns['distance']

    _require_columns(vertices_df, [id_col], 'vertex')
    has_location = lat_col in vertices_df.columns and lon_col in vertices_df.columns

    graph = Graph(name=name)

    for index, row in vertices_df.iterrows():
        if pd.isna(row[id_col]):
            warnings.warn(f"Skipping vertex row {index}: missing id")
            continue
        location = None
        if has_location and pd.notna(row[lat_col]) and pd.notna(row[lon_col]):
            location = (row[lat_col], row[lon_col])
        graph.insert_vertex(str(row[id_col]), location)

    if edges_df is not None:
        _require_columns(edges_df, [source_col, target_col], 'edge')
        has_distance = dist_col in edges_df.columns

        for index, row in edges_df.iterrows():
            if pd.isna(row[source_col]) or pd.isna(row[target_col]):
                warnings.warn(f"Skipping edge row {index}: missing source or target")
                continue
            source_id, target_id = str(row[source_col]), str(row[target_col])
            if has_distance and pd.notna(row[dist_col]):
                graph.insert_edge(source_id, target_id, row[dist_col])
                continue
            source = graph.find_vertex(source_id)
            target = graph.find_vertex(target_id)
            if source is None or target is None or source.location is None or target.location is None:
                warnings.warn(f"Skipping edge {source_id} -> {target_id}: no distance and "
                              f"endpoints are not both located")
                continue
            graph.connect(source_id, target_id)

    logger.info("Loaded graph with %d vertices and %d edges", graph.vertex_count, graph.edge_count)
    return graph


def load_graph_csv(vertices_path, edges_path=None, name=None):
    """
    Load a Graph from CSV files.

    Parameters
    ----------
    vertices_path : str
        Path to the vertices CSV file
    edges_path : str, optional
        Path to the edges CSV file
    name : str, optional
        Name of the graph

    Returns
    -------
    Graph
        The loaded graph
    """
    # Identifiers are always strings, even when they look numeric
    vertices_df = pd.read_csv(vertices_path, dtype={EXPORT_CONFIG['columns']['id']: str})
    edges_df = None
    if edges_path is not None:
        columns = EXPORT_CONFIG['columns']
        edges_df = pd.read_csv(edges_path, dtype={columns['source']: str, columns['target']: str})
    return graph_from_dataframes(vertices_df, edges_df, name=name)

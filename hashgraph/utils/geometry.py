"""
Geometric helpers for located vertices.
"""

import numpy as np

# Mean Earth radius in kilometres
EARTH_RADIUS_KM = 6371.0088


def haversine_distance(a, b):
    """
    Great-circle distance between two locations.

    Parameters
    ----------
    a : Location
        First location
    b : Location
        Second location

    Returns
    -------
    float
        Distance in kilometres
    """
    lat1, lon1, lat2, lon2 = np.radians([a.latitude, a.longitude, b.latitude, b.longitude])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return float(2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(h)))

"""
Input/output operations for graphs.

This module provides functions for building graphs from tabular data
and exporting them to pandas, geopandas and NetworkX.
"""

from .loaders import *
from .exporters import *

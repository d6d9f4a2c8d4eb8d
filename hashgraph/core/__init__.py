"""
Core data structures for hashgraph.

This module contains the prime sizing helper, the double-hashing engine,
the open-addressing tables and the graph composed from them.
"""

from .prime import *
from .hashing import *
from .table import *
from .graph_elements import *
from .graph import *

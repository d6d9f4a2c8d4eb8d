"""
hashgraph - Open-addressing hash tables and a located, directed graph built on them.
"""

__version__ = '0.1.0'

# Import main submodules for easy access
from . import config
from . import core
from . import io
from . import utils

from .core import (HashTable, create_table, Graph, create_graph, Location, Vertex,
                   Neighbour)

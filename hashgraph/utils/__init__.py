"""
Utility functions for the hashgraph package.
"""

from .geometry import *
from .logger import *

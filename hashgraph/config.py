"""
Configuration for the hashgraph package.

This module holds the fixed constants of the open-addressing protocol
(hash multipliers, base capacity, resize thresholds), the default logger
and export settings, and the exception classes shared by every table.
"""

# Multipliers for the two independent string hashes used by double hashing
HASH_PRIME_A = 151
HASH_PRIME_B = 163

# Capacity progression: next_prime(BASE_CAPACITY << size_class)
BASE_CAPACITY = 50
MIN_SIZE_CLASS = 0

# Load factor thresholds, in percent
GROW_THRESHOLD = 70
SHRINK_THRESHOLD = 10

# Logger settings used by hashgraph.utils.logger.setup_logger
LOGGER_CONFIG = {
    'level': 'WARNING',
    'console': True,
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
}

# Column names and CRS used by the import/export helpers
EXPORT_CONFIG = {
    'crs': 'EPSG:4326',
    'columns': {
        'id': 'id',
        'latitude': 'latitude',
        'longitude': 'longitude',
        'source': 'source',
        'target': 'target',
        'distance': 'distance'
    }
}


# Exception classes
class HashGraphError(Exception):
    """Base class for hashgraph errors."""
    pass

class AllocationError(HashGraphError, MemoryError):
    """Backing storage for a table could not be allocated."""
    pass

class InvalidKeyError(HashGraphError, TypeError):
    """Key is not a byte or character string."""
    pass

class InvalidValueError(HashGraphError, TypeError):
    """Value stored in a key/value table is not a byte or character string."""
    pass

class TableDestroyedError(HashGraphError):
    """Operation attempted on a table or graph after destroy()."""
    pass

class MissingLocationError(HashGraphError, ValueError):
    """A vertex needed for a distance computation is unknown or has no location."""
    pass

class GraphFormatError(HashGraphError, ValueError):
    """Tabular graph data is missing required columns."""
    pass

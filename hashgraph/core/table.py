"""
Open-addressing hash tables with double hashing, tombstones and resizing.

This module provides the probe/insert/delete/resize protocol shared by
every table in the package, and the string key/value table built on it.
"""

import logging
from enum import IntEnum

import numpy as np

from ..config import (BASE_CAPACITY, MIN_SIZE_CLASS, GROW_THRESHOLD, SHRINK_THRESHOLD,
                      AllocationError, InvalidKeyError, InvalidValueError,
                      TableDestroyedError)
from .hashing import probe_sequence
from .prime import next_prime

logger = logging.getLogger(__name__)


class SlotState(IntEnum):
    """State tag of a single bucket."""
    EMPTY = 0
    TOMBSTONE = 1
    OCCUPIED = 2


def capacity_for(size_class):
    """
    Number of slots of a table in a given size class.

    Parameters
    ----------
    size_class : int
        Index into the capacity progression

    Returns
    -------
    int
        next_prime(BASE_CAPACITY << size_class)
    """
    return next_prime(BASE_CAPACITY << size_class)


def check_key(key):
    """Raise InvalidKeyError unless key is a str or bytes."""
    if not isinstance(key, (str, bytes)):
        raise InvalidKeyError(f"Keys must be str or bytes, got {type(key).__name__}")
    return key


class OpenAddressTable:
    """
    Base class for open-addressing tables keyed by byte/character strings.

    Records live directly in the slot array. Collisions are resolved by
    double hashing, deleted records leave a tombstone, and the table is
    rebuilt at the next or previous size class when its load crosses the
    grow or shrink threshold.

    Subclasses define which record type is stored and how its key is read
    by overriding `_key_of`.
    """

    def __init__(self, size_class=MIN_SIZE_CLASS):
        """
        Initialize an empty table.

        Parameters
        ----------
        size_class : int, optional
            Starting size class (default is the minimum)
        """
        if size_class < MIN_SIZE_CLASS:
            raise ValueError(f"size_class must be >= {MIN_SIZE_CLASS}, got {size_class}")
        capacity = capacity_for(size_class)
        self._states, self._records = self._allocate(capacity)
        self.size_class = size_class
        self.capacity = capacity
        self.count = 0
        self.tombstones = 0
        self._destroyed = False

    @staticmethod
    def _allocate(capacity):
        try:
            states = np.zeros(capacity, dtype=np.int8)
            records = [None] * capacity
        except MemoryError as e:
            raise AllocationError(f"Could not allocate a table of {capacity} slots") from e
        return states, records

    def _key_of(self, record):
        raise NotImplementedError

    def _release(self, record):
        """Hook called for each live record when the table is destroyed."""
        pass

    def _check_alive(self):
        if self._destroyed:
            raise TableDestroyedError(f"{type(self).__name__} has been destroyed")

    # ---- Load ------------------------------------------------------------

    @property
    def load_factor(self):
        """Occupied plus tombstoned slots as an integer percentage of capacity."""
        if not self.capacity:
            return 0
        return (self.count + self.tombstones) * 100 // self.capacity

    @property
    def live_load(self):
        """Occupied slots as an integer percentage of capacity."""
        if not self.capacity:
            return 0
        return self.count * 100 // self.capacity

    # ---- Probing ---------------------------------------------------------

    def _find_slot(self, key):
        """Index of the occupied slot holding key, or None."""
        states = self._states
        for index in probe_sequence(key, self.capacity):
            state = states[index]
            if state == SlotState.EMPTY:
                return None
            if state == SlotState.OCCUPIED and self._key_of(self._records[index]) == key:
                return index
        return None

    def _place(self, record):
        """
        Put a record in the first empty slot of its probe chain, or over
        the record with the same key.

        Tombstones are skipped. The grow threshold keeps at least one
        empty slot on every probe chain.
        """
        key = self._key_of(record)
        states = self._states
        for index in probe_sequence(key, self.capacity):
            state = states[index]
            if state == SlotState.EMPTY:
                states[index] = SlotState.OCCUPIED
                self._records[index] = record
                self.count += 1
                return
            if state == SlotState.OCCUPIED and self._key_of(self._records[index]) == key:
                self._records[index] = record
                return
        raise RuntimeError(f"No free slot for {key!r} in a table of {self.capacity} slots")

    # ---- Protocol --------------------------------------------------------

    def _insert_record(self, record):
        self._check_alive()
        if self.load_factor > GROW_THRESHOLD:
            self.resize(1)
        self._place(record)

    def _lookup_record(self, key):
        self._check_alive()
        index = self._find_slot(check_key(key))
        if index is None:
            return None
        return self._records[index]

    def _delete_record(self, key):
        self._check_alive()
        check_key(key)
        if self.live_load < SHRINK_THRESHOLD:
            self.resize(-1)
        index = self._find_slot(key)
        if index is None:
            return None
        record = self._records[index]
        self._records[index] = None
        self._states[index] = SlotState.TOMBSTONE
        self.count -= 1
        self.tombstones += 1
        return record

    def resize(self, direction):
        """
        Rebuild the table at a neighbouring size class.

        Live records are reinserted into a freshly allocated slot array,
        dropping every tombstone. Shrinking below the minimum size class
        is a no-op.

        Parameters
        ----------
        direction : int
            +1 to grow, -1 to shrink
        """
        self._check_alive()
        new_size_class = self.size_class + direction
        if new_size_class < MIN_SIZE_CLASS:
            return
        new_capacity = capacity_for(new_size_class)
        states, records = self._allocate(new_capacity)
        live = list(self._live_records())

        logger.debug("Resized %s from %d to %d slots (%d live, %d tombstones dropped)",
                     type(self).__name__, self.capacity, new_capacity,
                     self.count, self.tombstones)

        self.size_class = new_size_class
        self.capacity = new_capacity
        self.count = 0
        self.tombstones = 0
        self._states, self._records = states, records
        for record in live:
            self._place(record)

    def destroy(self):
        """Release every record and the slot array. Further use raises TableDestroyedError."""
        if self._destroyed:
            return
        for record in self._live_records():
            self._release(record)
        self._states = None
        self._records = None
        self.capacity = 0
        self.count = 0
        self.tombstones = 0
        self._destroyed = True

    # ---- Introspection ---------------------------------------------------

    def _live_records(self):
        if self._destroyed:
            return
        for state, record in zip(self._states, self._records):
            if state == SlotState.OCCUPIED:
                yield record

    def slot_states(self):
        """
        Copy of the slot state array.

        Returns
        -------
        numpy.ndarray
            int8 array of SlotState values, one per slot
        """
        self._check_alive()
        return self._states.copy()

    def stats(self):
        """
        Summary of the table's occupancy.

        Returns
        -------
        dict
            capacity, size_class, count, tombstones, empty and load_factor
        """
        self._check_alive()
        return {
            'capacity': self.capacity,
            'size_class': self.size_class,
            'count': self.count,
            'tombstones': self.tombstones,
            'empty': int(np.count_nonzero(self._states == SlotState.EMPTY)),
            'load_factor': self.load_factor
        }

    @property
    def destroyed(self):
        return self._destroyed

    def __len__(self):
        return self.count

    def __bool__(self):
        return self.count > 0

    def __contains__(self, key):
        if not isinstance(key, (str, bytes)):
            return False
        return self._lookup_record(key) is not None

    def __repr__(self):
        if self._destroyed:
            return f"{type(self).__name__}(destroyed)"
        return (f"{type(self).__name__}(count={self.count}, capacity={self.capacity}, "
                f"size_class={self.size_class})")


class Item:
    """
    A key/value pair stored in a HashTable.
    """

    __slots__ = ('key', 'value')

    def __init__(self, key, value):
        self.key = key
        self.value = value

    def __repr__(self):
        return f"Item(key={self.key!r}, value={self.value!r})"


class HashTable(OpenAddressTable):
    """
    String key/value table.

    Keys and values are byte or character strings. Inserting an existing
    key replaces its value; lookups and deletes of absent keys report a
    miss instead of raising.

    Examples
    --------
    >>> table = create_table()
    >>> table.insert("cat", "meow")
    >>> table.lookup("cat")
    'meow'
    >>> table.delete("cat")
    True
    >>> table.lookup("cat") is None
    True
    """

    def _key_of(self, record):
        return record.key

    def insert(self, key, value):
        """
        Insert a key/value pair, replacing the value of an existing key.

        Parameters
        ----------
        key : str or bytes
            Key of the pair
        value : str or bytes
            Value of the pair
        """
        check_key(key)
        if not isinstance(value, (str, bytes)):
            raise InvalidValueError(f"Values must be str or bytes, got {type(value).__name__}")
        self._insert_record(Item(key, value))

    def lookup(self, key):
        """
        Value stored under key.

        Parameters
        ----------
        key : str or bytes
            Key to search

        Returns
        -------
        str or bytes or None
            The value, or None if the key is not in the table
        """
        item = self._lookup_record(key)
        return item.value if item is not None else None

    def delete(self, key):
        """
        Remove a key from the table.

        Parameters
        ----------
        key : str or bytes
            Key to remove

        Returns
        -------
        bool
            True if the key was present
        """
        return self._delete_record(key) is not None

    def get(self, key, default=None):
        value = self.lookup(key)
        return default if value is None else value

    def __getitem__(self, key):
        value = self.lookup(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key, value):
        self.insert(key, value)

    def __delitem__(self, key):
        if not self.delete(key):
            raise KeyError(key)

    def __iter__(self):
        return self.keys()

    def keys(self):
        for item in self._live_records():
            yield item.key

    def values(self):
        for item in self._live_records():
            yield item.value

    def items(self):
        for item in self._live_records():
            yield item.key, item.value


def create_table():
    """Create an empty HashTable at the minimum size class."""
    return HashTable()

"""
String hashing and double-hashing probe sequences.
"""

from ..config import HASH_PRIME_A, HASH_PRIME_B, InvalidKeyError


def key_to_bytes(key):
    """
    Convert a key to the byte sequence that is hashed.

    Parameters
    ----------
    key : str or bytes
        Key to convert

    Returns
    -------
    bytes
        UTF-8 encoding of a str key, or the bytes key unchanged
    """
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode('utf-8')
    raise InvalidKeyError(f"Keys must be str or bytes, got {type(key).__name__}")


def generic_hash(key, multiplier, modulus):
    """
    Polynomial hash of a key reduced modulo a bucket count.

    Computes sum(multiplier ** (len - 1 - i) * byte[i]) mod modulus,
    reducing at every step.

    Parameters
    ----------
    key : str or bytes
        Key to hash
    multiplier : int
        Polynomial base (a small prime)
    modulus : int
        Number of buckets

    Returns
    -------
    int
        Hash value in [0, modulus)
    """
    value = 0
    for byte in key_to_bytes(key):
        value = (value * multiplier + byte) % modulus
    return value


def step_size(key, capacity):
    """
    Distance between consecutive probes of a key.

    This is hash_b + 1, except that a step equal to the capacity (which
    would revisit the same slot forever) becomes 1. Every step is then in
    [1, capacity - 1] and, with a prime capacity, the probe sequence
    visits every slot.

    Parameters
    ----------
    key : str or bytes
        Key being placed or searched
    capacity : int
        Number of slots in the table (prime)

    Returns
    -------
    int
        Step size for the key
    """
    if capacity < 2:
        return 1
    return generic_hash(key, HASH_PRIME_B, capacity) % (capacity - 1) + 1


def probe(key, capacity, attempt):
    """
    Slot index for a key after a given number of collisions.

    Parameters
    ----------
    key : str or bytes
        Key being placed or searched
    capacity : int
        Number of slots in the table (prime)
    attempt : int
        Number of collisions so far, starting at 0

    Returns
    -------
    int
        (hash_a + attempt * step) mod capacity, with step = hash_b + 1
    """
    hash_a = generic_hash(key, HASH_PRIME_A, capacity)
    return (hash_a + attempt * step_size(key, capacity)) % capacity


def probe_sequence(key, capacity):
    """
    Yield the first `capacity` probe indexes for a key.

    Both hashes are computed once, which is what the tables use when
    walking a probe chain.
    """
    hash_a = generic_hash(key, HASH_PRIME_A, capacity)
    step = step_size(key, capacity)
    for attempt in range(capacity):
        yield (hash_a + attempt * step) % capacity

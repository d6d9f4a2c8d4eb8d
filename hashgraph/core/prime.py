"""
Prime number helpers used to size hash tables.

Table capacities are kept prime so that every double-hashing step size
is coprime with the capacity and each probe sequence visits every slot.
"""

import math


def is_prime(n):
    """
    Check whether a number is prime.

    Parameters
    ----------
    n : int
        Number to test

    Returns
    -------
    bool
        True if n is prime
    """
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    for divisor in range(3, math.isqrt(n) + 1, 2):
        if n % divisor == 0:
            return False
    return True


def next_prime(n):
    """
    Return the smallest prime greater than or equal to n.

    Parameters
    ----------
    n : int
        Requested capacity (non-negative)

    Returns
    -------
    int
        Smallest prime >= n
    """
    if n < 0:
        raise ValueError(f"next_prime requires a non-negative number, got {n}")
    candidate = max(n, 2)
    while not is_prime(candidate):
        candidate += 1
    return candidate

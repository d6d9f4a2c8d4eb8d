import pytest

from hashgraph.core.prime import is_prime, next_prime


def test_is_prime_small_numbers():
    primes = [n for n in range(30) if is_prime(n)]
    assert primes == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]


def test_next_prime_returns_input_when_prime():
    assert next_prime(53) == 53
    assert next_prime(401) == 401


def test_next_prime_capacity_progression():
    assert [next_prime(50 << k) for k in range(5)] == [53, 101, 211, 401, 809]


def test_next_prime_lower_edge():
    assert next_prime(0) == 2
    assert next_prime(1) == 2
    assert next_prime(2) == 2


def test_next_prime_rejects_negative():
    with pytest.raises(ValueError):
        next_prime(-1)

"""Shared fixtures for fibo tests."""

import random
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (linear-time runs)")


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def sample_matrices(rng):
    """10 random 2x2 matrices with entries below 1000."""
    return [
        ((rng.randrange(1000), rng.randrange(1000)),
         (rng.randrange(1000), rng.randrange(1000)))
        for _ in range(10)
    ]


@pytest.fixture
def first_fibonacci():
    """F(0) .. F(40), computed by plain addition."""
    fs = [0, 1]
    while len(fs) <= 40:
        fs.append(fs[-2] + fs[-1])
    return fs

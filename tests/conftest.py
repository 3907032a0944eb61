from __future__ import annotations

import pytest

from primefrac.context import EngineConfig
from primefrac.sieve import generate_primes

SMALL_BOUND = 2_000


@pytest.fixture(scope="session")
def primes():
    """Full default prime table, sieved once for the whole session."""
    return generate_primes()


@pytest.fixture(scope="session")
def small_config():
    return EngineConfig(bound=SMALL_BOUND)


@pytest.fixture(scope="session")
def small_primes(small_config):
    return generate_primes(small_config)

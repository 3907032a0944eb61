# -----------------------------------------------------------------------------
#  sieve.py
#  Prime table generation (Sieve of Eratosthenes)
# -----------------------------------------------------------------------------

from __future__ import annotations

from itertools import compress
from math import isqrt
from time import perf_counter

from primefrac.context import DEFAULT_CONFIG, EngineConfig
from primefrac.fmt import format_duration
from primefrac.utility import trace

PREVIEW_COUNT = 10


def _sieve_flags(bound: int) -> bytearray:
    """
    Bytearray sieve over 0..bound-1; flags[v] == 1 means v survived.

    Every product i*j (j >= 2) of a surviving candidate is struck out. Starting
    at i*i and skipping struck-out i removes exactly the same set, since smaller
    multiples were already removed through a smaller factor.
    """
    flags = bytearray(b"\x01") * bound
    flags[0:2] = b"\x00\x00"
    for i in range(2, isqrt(bound - 1) + 1):
        if flags[i]:
            start = i * i
            flags[start:bound:i] = bytes(len(range(start, bound, i)))
    return flags


def generate_primes(config: EngineConfig | None = None) -> tuple[int, ...]:
    """
    Return every prime strictly below `config.bound`, ascending.

    The table is a tuple: it is built once per process and handed to the
    factorizer and the fraction reducer by reference, read-only.
    """
    cfg = config or DEFAULT_CONFIG
    start = perf_counter()

    primes = tuple(compress(range(cfg.bound), _sieve_flags(cfg.bound)))

    if cfg.trace:
        elapsed = perf_counter() - start
        trace(True, f"Calculated {len(primes)} prime numbers using 'Sieve of Eratosthenes'"
                    f" which took {format_duration(elapsed)}")
        last = " ".join(str(p) for p in reversed(primes[-PREVIEW_COUNT:]))
        trace(True, f"Last ten: {last}")

    return primes

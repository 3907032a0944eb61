# -----------------------------------------------------------------------------
#  verify.py
#  Known-answer self checks, run before any user-facing work
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import NamedTuple

from colorama import Fore, Style

from primefrac.context import DEFAULT_CONFIG, EngineConfig
from primefrac.factorize import calculate_product, divide_with_primes, factorize_number
from primefrac.fraction import decimal_to_fraction
from primefrac.sieve import generate_primes


class CheckResult(NamedTuple):
    name: str
    passed: bool
    message: str = ""


def check_factor_1230(primes: Sequence[int], config: EngineConfig) -> CheckResult:
    """1230 = 2 · 3 · 5 · 41"""
    factors = divide_with_primes(1230, primes)
    if len(factors) != 4:
        return CheckResult("factor 1230", False, f"Invalid number of primes 1230: {factors}")
    if calculate_product(factors) != 1230:
        return CheckResult("factor 1230", False, f"Invalid factors 1230: {factors}")
    return CheckResult("factor 1230", True)


def check_factor_1231(primes: Sequence[int], config: EngineConfig) -> CheckResult:
    """1231 is prime."""
    factors = divide_with_primes(1231, primes)
    if len(factors) != 1:
        return CheckResult("factor 1231", False, f"Invalid number of primes 1231: {factors}")
    if calculate_product(factors) != 1231:
        return CheckResult("factor 1231", False, f"Invalid factors 1231: {factors}")
    return CheckResult("factor 1231", True)


def check_fraction_0_12(primes: Sequence[int], config: EngineConfig) -> CheckResult:
    t, n = decimal_to_fraction("0.12", primes, config)
    if (t, n) != (3, 25):
        return CheckResult("fraction 0.12", False, f"0.12 reduced to {t}/{n}, expected 3/25")
    return CheckResult("fraction 0.12", True)


def check_exponents_13112(primes: Sequence[int], config: EngineConfig) -> CheckResult:
    """13112 = 2^3 · 11 · 149"""
    fac = factorize_number("13112", primes, config)
    if fac.get(2) != 3 or fac.get(11) != 1 or fac.get(149) != 1:
        return CheckResult("exponents 13112", False, f"factorizing 13112 failed: {fac}")
    return CheckResult("exponents 13112", True)


def check_prime_table(primes: Sequence[int], config: EngineConfig) -> CheckResult:
    """Table size must match pi(bound - 1) and stay strictly ascending."""
    from sympy import primepi

    expected = int(primepi(config.bound - 1))
    if len(primes) != expected:
        return CheckResult("prime table", False, f"{len(primes)} primes below {config.bound}, expected {expected}")
    if any(a >= b for a, b in zip(primes, primes[1:])):
        return CheckResult("prime table", False, "prime table is not strictly ascending")
    return CheckResult("prime table", True)


CHECKS: tuple[Callable[[Sequence[int], EngineConfig], CheckResult], ...] = (
    check_factor_1230,
    check_factor_1231,
    check_fraction_0_12,
    check_exponents_13112,
    check_prime_table,
)


def run_checks(primes: Sequence[int], config: EngineConfig | None = None) -> list[CheckResult]:
    """Run every check; a check that raises counts as failed."""
    # checks run without trace output
    cfg = EngineConfig(bound=(config or DEFAULT_CONFIG).bound)
    results: list[CheckResult] = []
    for check in CHECKS:
        try:
            results.append(check(primes, cfg))
        except Exception as e:
            results.append(CheckResult(check.__name__, False, f"{e.__class__.__name__}: {e}"))
    return results


def verify(config: EngineConfig | None = None, primes: Sequence[int] | None = None) -> bool:
    """
    Sanity check that nothing in the numeric engine is broken.

    Generates its own prime table unless one is passed in. Every failure is
    reported on stderr; the result is False if any check failed.
    """
    cfg = config or DEFAULT_CONFIG
    table = primes if primes is not None else generate_primes(EngineConfig(bound=cfg.bound))

    ok = True
    for res in run_checks(table, cfg):
        if not res.passed:
            ok = False
            print(f"{Fore.RED}[verify]{Style.RESET_ALL} {res.name}: {res.message}", file=sys.stderr)
    return ok

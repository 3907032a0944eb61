# tests/test_verify.py
"""
Self-verification: every known-answer check on its own, then the aggregate.

Run: pytest -v
"""

from __future__ import annotations

from importlib import import_module

import pytest

from primefrac.context import DEFAULT_CONFIG, EngineConfig
from primefrac.sieve import generate_primes
from primefrac.verify import (
    CHECKS,
    CheckResult,
    check_exponents_13112,
    check_factor_1230,
    check_factor_1231,
    check_fraction_0_12,
    check_prime_table,
    run_checks,
    verify,
)

# the package re-exports verify(), which shadows the submodule attribute
verify_mod = import_module("primefrac.verify")


@pytest.mark.parametrize("check", CHECKS, ids=[c.__name__ for c in CHECKS])
def test_each_check_passes_on_default_table(primes, check):
    res = check(primes, DEFAULT_CONFIG)
    assert res.passed, res.message


def test_verify_with_given_table(primes, capsys):
    assert verify(DEFAULT_CONFIG, primes) is True
    assert capsys.readouterr().err == ""


def test_verify_generates_its_own_table():
    assert verify(EngineConfig(bound=5_000)) is True


def test_table_too_small_for_1231_fails(capsys):
    cfg = EngineConfig(bound=1_000)
    table = generate_primes(cfg)
    assert check_factor_1230(table, cfg).passed
    assert not check_factor_1231(table, cfg).passed
    assert verify(cfg, table) is False
    assert "factor 1231" in capsys.readouterr().err


def test_table_missing_149_fails_exponent_check():
    cfg = EngineConfig(bound=100)
    table = generate_primes(cfg)
    assert not check_exponents_13112(table, cfg).passed
    assert check_fraction_0_12(table, cfg).passed


def test_prime_table_check_catches_gaps(primes):
    gapped = tuple(p for p in primes if p != 997)
    res = check_prime_table(gapped, DEFAULT_CONFIG)
    assert not res.passed
    assert "expected 78498" in res.message


def test_prime_table_check_catches_disorder(small_primes, small_config):
    shuffled = (small_primes[1], small_primes[0]) + small_primes[2:]
    assert not check_prime_table(shuffled, small_config).passed


def test_one_failing_check_fails_aggregate(primes, monkeypatch, capsys):
    def broken(primes, config):
        return CheckResult("broken", False, "forced failure")

    monkeypatch.setattr(verify_mod, "CHECKS", verify_mod.CHECKS + (broken,))
    assert verify(DEFAULT_CONFIG, primes) is False
    assert "forced failure" in capsys.readouterr().err


def test_raising_check_counts_as_failure(primes, monkeypatch):
    def explodes(primes, config):
        raise ZeroDivisionError("boom")

    monkeypatch.setattr(verify_mod, "CHECKS", (explodes,))
    (res,) = run_checks(primes)
    assert not res.passed
    assert "ZeroDivisionError: boom" in res.message


def test_checks_do_not_trace(primes, capsys):
    run_checks(primes, EngineConfig(trace=True))
    assert capsys.readouterr().err == ""

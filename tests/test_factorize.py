# tests/test_factorize.py
"""
Trial division tests (sequence form, exponent form, residual handling).

Run: pytest -v
"""

from __future__ import annotations

import pytest
from sympy import factorint, isprime

from primefrac.context import EngineConfig
from primefrac.factorize import (
    calculate_product,
    divide_with_primes,
    factor_with_residual,
    factorize_number,
    group_factors,
)
from primefrac.output_manager import OutputManager
from primefrac.utility import INT64_MAX, ParseError, ParseErrorKind

# (n, ascending factors with multiplicity)
TEST_CASES = [
    (1,        [1]),
    (2,        [2]),
    (12,       [2, 2, 3]),
    (1230,     [2, 3, 5, 41]),
    (1231,     [1231]),
    (13112,    [2, 2, 2, 11, 149]),
    (1024,     [2] * 10),
    (999_983,  [999_983]),
    (999_966_000_289, [999_983, 999_983]),
]

TEST_IDS = [f"{n}" for n, _ in TEST_CASES]


@pytest.mark.parametrize("n,expected", TEST_CASES, ids=TEST_IDS)
def test_divide_with_primes_known_answers(primes, n, expected):
    assert divide_with_primes(n, primes) == expected


@pytest.mark.parametrize("n", [6, 97, 360, 1001, 65_536, 123_456, 7_919 * 7_907, 2**40 * 3**5])
def test_product_and_order_properties(primes, n):
    factors = divide_with_primes(n, primes)
    assert calculate_product(factors) == n
    assert factors == sorted(factors)
    assert all(isprime(p) and p in primes for p in factors)
    assert group_factors(factors) == factorint(n)


def test_every_small_n_round_trips(small_primes):
    for n in range(1, 2_000):
        assert calculate_product(divide_with_primes(n, small_primes)) == n


@pytest.mark.parametrize("bad", [0, -1, -1230])
def test_n_below_one_rejected(primes, bad):
    with pytest.raises(ValueError):
        divide_with_primes(bad, primes)


def test_factor_beyond_bound_is_silently_dropped(primes):
    # 1_000_003 is prime and above the sieve bound
    assert divide_with_primes(2 * 1_000_003, primes) == [2]
    assert divide_with_primes(1_000_003, primes) == []


def test_residual_keeps_dropped_cofactor(primes):
    res = factor_with_residual(6 * 1_000_003, primes)
    assert res.factors == (2, 3)
    assert res.residual == 1_000_003
    assert not res.is_complete
    assert factor_with_residual(1230, primes).is_complete


def test_group_factors_collapses_repeats():
    assert group_factors([2, 2, 2, 11, 149]) == {2: 3, 11: 1, 149: 1}
    assert list(group_factors([5, 2, 5]).keys()) == [2, 5]
    assert group_factors([1]) == {}


def test_calculate_product():
    assert calculate_product([2, 3, 5, 41]) == 1230
    assert calculate_product([1]) == 1
    assert calculate_product([]) == 1


# ---------- factorize_number --------------------------------------------------

def test_factorize_13112(primes):
    assert factorize_number("13112", primes) == {2: 3, 11: 1, 149: 1}


def test_factorize_one_is_empty_map(primes):
    assert factorize_number("1", primes) == {}


def test_factorize_strips_whitespace(primes):
    assert factorize_number("  1230\n", primes) == {2: 1, 3: 1, 5: 1, 41: 1}


@pytest.mark.parametrize("text,kind", [
    ("abc",                  ParseErrorKind.INVALID_INTEGER),
    ("12a",                  ParseErrorKind.INVALID_INTEGER),
    ("-12",                  ParseErrorKind.INVALID_INTEGER),
    ("0",                    ParseErrorKind.INVALID_INTEGER),
    ("",                     ParseErrorKind.INVALID_INTEGER),
    (str(INT64_MAX + 1),     ParseErrorKind.INVALID_INTEGER),
    (str(INT64_MAX),         ParseErrorKind.OUT_OF_RANGE),
], ids=["letters", "trailing-garbage", "negative", "zero", "empty", "overflow", "max-int64"])
def test_factorize_rejects_bad_input(primes, text, kind):
    with pytest.raises(ParseError) as exc:
        factorize_number(text, primes)
    assert exc.value.kind is kind


def test_factorize_largest_accepted_value(primes):
    n = INT64_MAX - 1
    fac = factorize_number(str(n), primes)
    assert fac == {p: e for p, e in factorint(n).items() if p < 999_999}


def test_strict_mode_reports_incomplete_factorization(primes):
    cfg = EngineConfig(strict=True)
    with pytest.raises(ParseError) as exc:
        factorize_number(str(2 * 1_000_003), primes, cfg)
    assert exc.value.kind is ParseErrorKind.INCOMPLETE_FACTORIZATION
    assert factorize_number("1230", primes, cfg) == {2: 1, 3: 1, 5: 1, 41: 1}


def test_output_line(primes):
    om = OutputManager(quiet=True)
    factorize_number("13112", primes, om=om)
    assert om.getvalue(plain=True) == "     13112 = 2^3 × 11 × 149\n"


def test_output_warns_about_residual(primes):
    om = OutputManager(quiet=True)
    fac = factorize_number(str(2 * 1_000_003), primes, om=om)
    assert fac == {2: 1}
    out = om.getvalue(plain=True)
    assert "unfactored prime cofactor 1000003" in out


def test_trace_shows_trial_division(primes, capsys):
    factorize_number("1230", primes, EngineConfig(trace=True))
    assert "trial division of 1230: 2*3*5*41" in capsys.readouterr().err

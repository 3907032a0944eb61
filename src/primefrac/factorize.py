# -----------------------------------------------------------------------------
#  factorize.py
#  Trial division against the prime table
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from math import prod

from colorama import Fore, Style

from primefrac.context import DEFAULT_CONFIG, EngineConfig, Factorization
from primefrac.fmt import format_factor_list, format_factorization
from primefrac.output_manager import OutputManager
from primefrac.utility import ParseError, ParseErrorKind, parse_int64, trace


def factor_with_residual(n: int, primes: Sequence[int]) -> Factorization:
    """
    Divide n by each prime of the table in ascending order, as often as it goes.

    Whatever is left once the table runs out is the residual: 1 when n was
    fully factored, otherwise a cofactor whose prime factors all lie at or
    beyond the sieve bound.
    """
    if n < 1:
        raise ValueError(f"cannot factor {n}: n must be >= 1")
    if n == 1:
        return Factorization(n=1, factors=(1,))

    factors: list[int] = []
    rest = n
    for p in primes:
        if rest == 1:
            break
        while rest % p == 0 and rest != 1:
            factors.append(p)
            rest //= p
    return Factorization(n=n, factors=tuple(factors), residual=rest)


def divide_with_primes(n: int, primes: Sequence[int]) -> list[int]:
    """
    Prime factors of n with multiplicity, ascending. divide_with_primes(1) == [1].

    Only complete when every prime factor of n is below the sieve bound; a
    larger factor is silently left out (see factor_with_residual).
    """
    return list(factor_with_residual(n, primes).factors)


def calculate_product(factors: Iterable[int]) -> int:
    return prod(factors)


def group_factors(factors: Iterable[int]) -> dict[int, int]:
    """[2, 2, 2, 11, 149] -> {2: 3, 11: 1, 149: 1}; the placeholder 1 is dropped."""
    counts = Counter(p for p in factors if p != 1)
    return dict(sorted(counts.items()))


def _residual_note(residual: int) -> str:
    import gmpy2

    kind = "prime" if gmpy2.is_prime(residual) else "composite"
    return (f"{Fore.YELLOW}warning:{Style.RESET_ALL} unfactored {kind} cofactor {residual} "
            f"lies beyond the prime table")


def factorize_number(
    text: str,
    primes: Sequence[int],
    config: EngineConfig | None = None,
    om: OutputManager | None = None,
) -> dict[int, int]:
    """
    Parse `text` as a positive 64-bit integer and return its prime -> exponent map.

    ParseError (INVALID_INTEGER / OUT_OF_RANGE) propagates to the caller. In
    strict mode a residual beyond the prime table raises
    INCOMPLETE_FACTORIZATION; otherwise it is dropped from the map and, when
    printing, flagged with a warning.
    """
    cfg = config or DEFAULT_CONFIG
    n = parse_int64(text)

    result = factor_with_residual(n, primes)
    trace(cfg.trace, f"trial division of {n}: {format_factor_list(result.factors)}"
                     + ("" if result.is_complete else f" (residual {result.residual})"))

    if not result.is_complete and cfg.strict:
        raise ParseError(
            ParseErrorKind.INCOMPLETE_FACTORIZATION,
            f"{n} has a factor {result.residual} beyond the prime table (bound {cfg.bound}).",
        )

    fac = group_factors(result.factors)

    if om is not None:
        om.write(f"{n:>10} = {format_factorization(fac)}")
        if not result.is_complete:
            om.write(_residual_note(result.residual))

    return fac

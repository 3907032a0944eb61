# -----------------------------------------------------------------------------
#  fraction.py
#  Decimal -> reduced fraction by cancelling shared prime factors
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from math import gcd

from primefrac.context import DEFAULT_CONFIG, EngineConfig
from primefrac.factorize import calculate_product, factor_with_residual
from primefrac.fmt import format_factor_list, format_fraction
from primefrac.output_manager import OutputManager
from primefrac.utility import INT64_MAX, ParseError, ParseErrorKind, report_error, trace

SENTINEL = (0, 0)

# ".1234567" is the longest accepted fractional part (point included: 8 chars)
MAX_FRACTION_DIGITS = 7


def parse_decimal(text: str) -> tuple[int, int]:
    """
    Turn 'm.ddd' into the unreduced fraction (ddd + m*10^k, 10^k), k = len(ddd).

    '0.12' -> (12, 100), '2.25' -> (225, 100), '.5' -> (5, 10).
    """
    s = (text or "").strip()
    head, point, tail = s.partition(".")
    if not point:
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"'{text}' has no decimal point.")
    if len(tail) > MAX_FRACTION_DIGITS:
        raise ParseError(
            ParseErrorKind.TOO_LONG,
            f"number has too many digits: '{text}' (at most {MAX_FRACTION_DIGITS} after the point).",
        )
    if not tail or not (tail.isascii() and tail.isdigit()):
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"'{text}' needs digits after the decimal point.")
    if head and not (head.isascii() and head.isdigit()):
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"'{text}' has a non-numeric integer part.")

    m = int(head) if head else 0
    denominator = 10 ** len(tail)
    numerator = int(tail) + denominator * m

    if numerator > INT64_MAX:
        raise ParseError(ParseErrorKind.OUT_OF_RANGE, f"'{text}' does not fit a 64-bit fraction.")
    if numerator == 0:
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"'{text}' must be a non-zero value.")
    return numerator, denominator


def remove_common_factors(numerator: Sequence[int], denominator: Sequence[int]) -> tuple[list[int], list[int]]:
    """
    Cancel the multiset intersection of two ascending factor lists.

    [2, 2, 3] / [2, 3, 3] -> [2] / [3]. A side that cancels out completely
    becomes [1].
    """
    num, den = Counter(numerator), Counter(denominator)
    common = num & den
    if not common:
        return list(numerator), list(denominator)

    left_num = sorted((num - common).elements()) or [1]
    left_den = sorted((den - common).elements()) or [1]
    return left_num, left_den


def reduce_fraction(
    numerator: int,
    denominator: int,
    primes: Sequence[int],
    config: EngineConfig | None = None,
) -> tuple[int, int]:
    """
    Reduce numerator/denominator to lowest terms via their prime factors.

    Cofactors beyond the prime table cannot be split, so they go back onto
    their own side unchanged (only cancelled against each other by gcd). The
    value of the fraction is therefore never altered.
    """
    cfg = config or DEFAULT_CONFIG
    fn = factor_with_residual(numerator, primes)
    fd = factor_with_residual(denominator, primes)

    trace(cfg.trace, "calculate prime numbers for numerator and denominator")
    trace(cfg.trace, f"  {format_factor_list(fn.factors)}")
    trace(cfg.trace, "  " + "-" * 26)
    trace(cfg.trace, f"  {format_factor_list(fd.factors)}")

    num, den = remove_common_factors(fn.factors, fd.factors)

    if cfg.trace:
        common = Counter(fn.factors) & Counter(fd.factors)
        trace(True, "remove common numbers using a multiset intersection")
        trace(True, f"  intersection: {' '.join(str(p) for p in sorted(common.elements())) or '-'}")
        trace(True, f"  new numerator: {' '.join(map(str, num))}")
        trace(True, f"  new denominator: {' '.join(map(str, den))}")

    rn, rd = fn.residual, fd.residual
    g = gcd(rn, rd)
    t = calculate_product(num) * (rn // g)
    n = calculate_product(den) * (rd // g)
    return t, n


def mixed_form(numerator: int, denominator: int) -> tuple[int, int] | None:
    """9/4 -> (2, 1), i.e. 2 1/4. None unless the fraction is improper (t > n)."""
    if numerator <= denominator:
        return None
    whole = numerator // denominator
    return whole, numerator - whole * denominator


def decimal_to_fraction(
    text: str,
    primes: Sequence[int],
    config: EngineConfig | None = None,
    om: OutputManager | None = None,
) -> tuple[int, int]:
    """
    Reduce a decimal string to (numerator, denominator) in lowest terms.

    Parse failures are reported on stderr and yield SENTINEL (0, 0); callers
    check for it instead of catching.
    """
    cfg = config or DEFAULT_CONFIG
    try:
        numerator, denominator = parse_decimal(text)
    except ParseError as e:
        report_error(str(e))
        return SENTINEL

    trace(cfg.trace, "remove decimal point by multiplication")
    trace(cfg.trace, f"  {numerator}/{denominator}")

    t, n = reduce_fraction(numerator, denominator, primes, cfg)

    if om is not None:
        om.write(format_fraction(text.strip(), t, n, mixed_form(t, n)))
    return t, n

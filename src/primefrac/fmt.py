# src/primefrac/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def format_factor_list(factors: Iterable[int], sep: str = "*") -> str:
    """[2, 2, 3] -> '2*2*3'"""
    return sep.join(str(p) for p in factors) or "1"


def format_factorization(fac: Mapping[int, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_fraction(text: str, numerator: int, denominator: int, mixed: tuple[int, int] | None = None) -> str:
    """
    '0.12 = 3/25' or, with a mixed form, '2.25 = 9/4 ==> 2 1/4'.
    A whole number keeps its zero remainder: '2.0 = 2/1 ==> 2 0/1'.
    """
    line = f"{text} = {numerator}/{denominator}"
    if mixed is None:
        return line
    whole, rest = mixed
    return f"{line} ==> {whole} {rest}/{denominator}"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    return f"{int(m)}:{s:06.3f}"               # mm:ss.mmm

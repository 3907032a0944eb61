from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("primefrac")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .context import DEFAULT_BOUND, EngineConfig, Factorization
from .factorize import (
    calculate_product,
    divide_with_primes,
    factor_with_residual,
    factorize_number,
    group_factors,
)
from .fraction import SENTINEL, decimal_to_fraction, mixed_form, parse_decimal, reduce_fraction
from .sieve import generate_primes
from .utility import ParseError, ParseErrorKind, UserInputError
from .verify import verify

__all__ = [
    "DEFAULT_BOUND",
    "SENTINEL",
    "EngineConfig",
    "Factorization",
    "ParseError",
    "ParseErrorKind",
    "UserInputError",
    "__version__",
    "calculate_product",
    "decimal_to_fraction",
    "divide_with_primes",
    "factor_with_residual",
    "factorize_number",
    "generate_primes",
    "group_factors",
    "mixed_form",
    "parse_decimal",
    "reduce_fraction",
    "verify",
]

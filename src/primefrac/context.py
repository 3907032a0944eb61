from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BOUND = 999_999
MIN_BOUND = 2


@dataclass(frozen=True)
class EngineConfig:
    bound: int = DEFAULT_BOUND       # primes strictly below this are sieved
    trace: bool = False              # step-by-step trace on stderr
    strict: bool = False             # raise instead of dropping an unfactored residual

    def __post_init__(self):
        if not isinstance(self.bound, int) or isinstance(self.bound, bool):
            raise ValueError(f"sieve bound must be an int, got {type(self.bound).__name__}")
        if self.bound < MIN_BOUND:
            raise ValueError(f"sieve bound must be at least {MIN_BOUND}, got {self.bound}")


DEFAULT_CONFIG = EngineConfig()


@dataclass(frozen=True)
class Factorization:
    n: int
    factors: tuple[int, ...]         # ascending, with repetition; (1,) for n == 1
    residual: int = 1                # cofactor left over once the prime table ran out

    @property
    def is_complete(self) -> bool:
        return self.residual == 1

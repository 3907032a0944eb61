# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import shutil
import sys
from enum import Enum

from colorama import Fore, Style

INT64_MAX = 2**63 - 1


class UserInputError(Exception):
    pass


class ParseErrorKind(Enum):
    TOO_LONG = "too long"
    INVALID_INTEGER = "invalid integer"
    OUT_OF_RANGE = "out of range"
    INCOMPLETE_FACTORIZATION = "incomplete factorization"


class ParseError(UserInputError):
    """
    Recoverable input error. `kind` tells callers (and tests) which rule
    rejected the input; the message is meant for the user.
    """

    def __init__(self, kind: ParseErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"ParseError({self.kind.name}, {str(self)!r})"


def parse_int64(text: str, *, label: str = "number") -> int:
    """
    Parse a positive decimal integer that fits a signed 64-bit value.

    - not a numeral, zero/negative, or above 2**63-1 -> INVALID_INTEGER
    - exactly 2**63-1 (the largest value is reserved) -> OUT_OF_RANGE
    """
    s = (text or "").strip()
    if not s.isascii() or not s.isdigit():
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"{label} '{text}' is not an integer.")
    n = int(s)
    if n > INT64_MAX:
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"{label} {s} does not fit a 64-bit integer.")
    if n >= INT64_MAX:
        raise ParseError(ParseErrorKind.OUT_OF_RANGE, f"{label} {s} is too large (max {INT64_MAX - 1}).")
    if n == 0:
        raise ParseError(ParseErrorKind.INVALID_INTEGER, f"{label} must be a non-zero integer.")
    return n


def trace(enabled: bool, *parts: object) -> None:
    """Write one trace line to stderr when `enabled`."""
    if not enabled:
        return
    msg = " ".join(str(p) for p in parts)
    print(f"{Fore.CYAN}[trace]{Style.RESET_ALL} {msg}", file=sys.stderr)


def report_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except Exception:
        return default


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out

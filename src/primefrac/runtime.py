# runtime.py
from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style

from primefrac.context import DEFAULT_BOUND, EngineConfig


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # controls verbosity / tracebacks

    def apply(self, settings: Any) -> None:
        """Take a loaded Settings (or a plain dict of sections)."""
        self.profile_name = getattr(settings, "name", None) or "default"
        cfg = settings.as_dict() if hasattr(settings, "as_dict") else settings
        self.settings = dict(cfg)

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'ENGINE.SIEVE_BOUND'."""
        if not key:
            return default
        cur = self.settings
        if "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)

    def engine_config(self, **overrides: Any) -> EngineConfig:
        """
        Build the EngineConfig the core operations take, from the applied
        profile. Keyword overrides that are not None win (CLI flags).
        """
        values = {
            "bound": int(self.get("ENGINE.SIEVE_BOUND", DEFAULT_BOUND)),
            "strict": bool(self.get("ENGINE.STRICT", False)),
            "trace": bool(self.get("BEHAVIOUR.TRACE", False)),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return EngineConfig(**values)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("primefrac_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Verify core runtime deps are available. sympy and gmpy2 are imported
    lazily by the engine, so find_spec() catches them before first use.
    If strict=True, prints a friendly error and returns False when missing.
    """
    required = ("sympy", "gmpy2")
    missing = [name for name in required if find_spec(name) is None]

    if not missing:
        return True

    msg = (
        f"{Fore.RED}{Style.BRIGHT}\nMissing dependencies:{Style.RESET_ALL} "
        + ", ".join(missing)
        + "\nInstall with: "
        + f"{Fore.YELLOW}pip install " + " ".join(missing) + f"{Style.RESET_ALL}"
    )
    print(msg, file=sys.stderr)
    return not strict

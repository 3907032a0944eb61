from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except Exception:
    import tomli as toml  # type: ignore

from primefrac.utility import UserInputError


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def workspace_dir() -> Path:
    env = os.environ.get("PRIMEFRAC_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".primefrac").resolve()


def _profile_candidates(name: str) -> list[Path]:
    """Workspace profile first, then the packaged one."""
    fname = f"{name}.toml"
    return [
        workspace_dir() / "profiles" / fname,
        Path(str(pkg_files("primefrac") / "profiles" / fname)),
    ]


def _profile_path(name: str) -> Path | None:
    for p in _profile_candidates(name):
        if p.is_file():
            return p
    return None


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except Exception as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


# --- Public API ------------------------------------------------------------


def has_profile(name: str) -> bool:
    return _profile_path(name) is not None


def load_settings(name: str | None = None) -> Settings:
    """
    Load a profile by name (default 'default') and validate the [ENGINE]
    section. Returns Settings(data=..., name=..., description=...).
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if path is None:
        raise UserInputError(f"Profile '{name}' not found in {workspace_dir() / 'profiles'}.")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)

    engine = data.get("ENGINE", {}) or {}
    bound = engine.get("SIEVE_BOUND")
    if bound is not None and (not isinstance(bound, int) or isinstance(bound, bool) or bound < 2):
        raise UserInputError(f"reading {path.name}: ENGINE.SIEVE_BOUND must be an integer >= 2.")
    for section, key in (("ENGINE", "STRICT"), ("BEHAVIOUR", "TRACE"), ("BEHAVIOUR", "DEBUG")):
        val = (data.get(section, {}) or {}).get(key)
        if val is not None and not isinstance(val, bool):
            raise UserInputError(f"reading {path.name}: {section}.{key} must be true or false.")

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
    )

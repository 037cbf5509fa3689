# src/pairreach/config.py
"""
TOML profiles living in <workspace>/profiles.

A profile is a TOML file with an optional [_PROFILE_] table (name,
description) and UPPERCASE sections read through runtime.CFG with dotted
keys, e.g. CFG("SEARCH.MAX_ITERATIONS").
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from pairreach.utility import UserInputError
from pairreach.workspace import ensure_workspace_seeded, workspace_dir

_META = "_PROFILE_"
_CURRENT_FILE = ".current"

# keys with a fixed type; anything else is passed through untouched
_KEY_TYPES: dict[str, type] = {
    "BEHAVIOUR.DEBUG": bool,
    "BEHAVIOUR.MAX_DIGITS": int,
    "DECISION.WITNESS_WINDOW": int,
    "DECISION.EXHAUSTIVE": bool,
    "SEARCH.MAX_ITERATIONS": int,
    "DISPLAY.SHOW_TIMINGS": bool,
    "DISPLAY.ABBREVIATE_ABOVE": int,
}

# lower bounds for integer keys; 0 or less breaks the engines
_KEY_MINIMUMS: dict[str, int] = {
    "DECISION.WITNESS_WINDOW": 1,
    "SEARCH.MAX_ITERATIONS": 1,
}


@dataclass
class Settings:
    """One loaded profile; .as_dict() is what runtime.APPLY() installs."""
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


def _strip_suffix(name: str) -> str:
    name = name.strip()
    return name[:-5] if name.lower().endswith(".toml") else name


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except (OSError, toml.TOMLDecodeError) as e:
        msg = getattr(e, "msg", None) or str(e)
        line, col = getattr(e, "lineno", None), getattr(e, "colno", None)
        if line is not None:
            msg += f" (at line {line}" + (f", column {col})" if col is not None else ")")
        raise UserInputError(f"reading {path.name}: {msg}.") from None


def _split_meta(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """Separate [_PROFILE_] from the settings: (settings, name, one-line description)."""
    meta = raw.get(_META) or {}
    data = {k: v for k, v in raw.items() if k != _META}
    name = str(meta.get("name") or fallback_name)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"
    return data, name, description


def _check_types(data: dict[str, Any], path: Path) -> None:
    for dotted, typ in _KEY_TYPES.items():
        section, key = dotted.split(".")
        sec = data.get(section)
        if not isinstance(sec, dict) or key not in sec:
            continue
        val = sec[key]
        if typ is bool and not isinstance(val, bool):
            raise UserInputError(f"{path.name}: {dotted} must be true or false, got {val!r}.")
        # bool is an int subclass; keep them apart
        if typ is int and (isinstance(val, bool) or not isinstance(val, int)):
            raise UserInputError(f"{path.name}: {dotted} must be an integer, got {val!r}.")
        low = _KEY_MINIMUMS.get(dotted)
        if low is not None and val < low:
            raise UserInputError(f"{path.name}: {dotted} must be at least {low}, got {val!r}.")


# --- Public API ------------------------------------------------------------

def list_all_profiles() -> list[str]:
    """Profile names (file stems) in the workspace, seeding it first if needed."""
    ensure_workspace_seeded()
    return sorted(p.stem for p in _profiles_dir().glob("*.toml"))


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | None) -> Settings:
    """Load, split and validate one profile (None means 'default')."""
    name = name or "default"
    path = _profile_path(name)
    if not path.exists():
        raise UserInputError(f"Profile '{name}' not found at {path}")

    data, resolved, description = _split_meta(_load_toml(path), path.stem)
    _check_types(data, path)
    return Settings(data=data, name=resolved, description=description, _source=path)


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """[(name, description), ...] sorted by name; a broken file is listed as '(unreadable)'."""
    ensure_workspace_seeded()
    items: list[tuple[str, str]] = []
    for p in _profiles_dir().glob("*.toml"):
        try:
            raw = _load_toml(p)
        except UserInputError:
            # loading it later reports the actual error
            items.append((p.stem, "(unreadable)"))
            continue
        _, nm, desc = _split_meta(raw, p.stem)
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


# --- Last used profile -----------------------------------------------------

def _current_profile_path() -> Path:
    pdir = _profiles_dir()
    pdir.mkdir(parents=True, exist_ok=True)
    return pdir / _CURRENT_FILE


def read_current_profile() -> str | None:
    try:
        text = _current_profile_path().read_text(encoding="utf-8")
    except OSError:
        return None
    return _strip_suffix(text) or None


def write_current_profile(name: str) -> None:
    _current_profile_path().write_text(_strip_suffix(name or ""), encoding="utf-8")

# src/pairreach/workspace.py
"""
User workspace: editable copies of the packaged profiles and corpus.

Location is $PAIRREACH_HOME, else ~/Documents/PairReach. Files found there
take precedence over the packaged ones (see config.py and dataio.py).
"""

from __future__ import annotations

import os
from importlib.resources import files as pkg_files
from pathlib import Path

ENV_VAR = "PAIRREACH_HOME"

# subdirectory -> file suffixes seeded into it
SEEDED: dict[str, tuple[str, ...]] = {
    "profiles": (".toml",),
    "data": (".toml",),
}
SUBDIRS = tuple(SEEDED)


def workspace_dir() -> Path:
    env = os.environ.get(ENV_VAR)
    base = Path(env).expanduser() if env else Path.home() / "Documents" / "PairReach"
    return base.resolve()


def _seedable(name: str, suffixes: tuple[str, ...]) -> bool:
    if name.startswith(".") or name.endswith("~"):
        return False
    return name.lower().endswith(suffixes)


def _copy_resources(src, dst: Path, suffixes: tuple[str, ...], *, overwrite: bool) -> int:
    """Copy matching files below a package resource directory; returns the count."""
    count = 0
    for entry in src.iterdir():
        if entry.is_dir():
            if entry.name != "__pycache__":
                count += _copy_resources(entry, dst / entry.name, suffixes, overwrite=overwrite)
            continue
        if not _seedable(entry.name, suffixes):
            continue
        target = dst / entry.name
        if target.exists() and not overwrite:
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(entry.read_bytes())
        count += 1
    return count


def seed_workspace(*, overwrite: bool = False, subsets: set[str] | None = None) -> tuple[Path, dict[str, int]]:
    """
    Create the workspace folders and copy the packaged files into them.

    overwrite=False copies only what is missing, so user edits survive;
    overwrite=True replaces (the CLI guards this behind PAIRREACH_DEV=1).
    subsets limits copying to some of SUBDIRS; folders are created regardless.

    Returns (workspace_path, {subdir: files_copied}).
    """
    root = workspace_dir()
    copied = dict.fromkeys(SUBDIRS, 0)
    for sub in SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)
        if subsets is not None and sub not in subsets:
            continue
        src = pkg_files("pairreach") / sub
        if src.is_dir():
            copied[sub] = _copy_resources(src, root / sub, SEEDED[sub], overwrite=overwrite)
    return root, copied


def ensure_workspace_seeded() -> tuple[Path, bool, dict[str, int]]:
    """First-run hook: seed what is missing; reports whether anything was copied."""
    root, copied = seed_workspace()
    return root, any(copied.values()), copied

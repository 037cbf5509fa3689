# src/pairreach/dataio.py
from __future__ import annotations

from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

from pairreach.context import Case
from pairreach.utility import UserInputError, as_int
from pairreach.workspace import workspace_dir

try:
    import tomllib as _toml  # py311+
except ImportError:  # pragma: no cover
    import tomli as _toml  # type: ignore

CORPUS_FILE = "corpus.toml"


def data_path(rel: str) -> Path:
    """
    Resolve a data file path with override semantics:

      1) <Workspace>/data/<rel>  (if present)
      2) Packaged resource: pairreach/data/<rel>

    Returns a filesystem Path you can open.
    """
    rel = rel.lstrip("/\\")
    p = workspace_dir() / "data" / rel
    if p.exists():
        return p

    ref = pkg_files("pairreach") / "data" / rel
    # materialize to a real path (needed for zip resources)
    with as_file(ref) as real:
        return Path(real)


def _case_from_table(item: object, idx: int, source: str) -> Case:
    if not isinstance(item, dict):
        raise UserInputError(f"{source}: case #{idx} is not a table")
    missing = [k for k in ("a", "b", "c") if k not in item]
    if missing:
        raise UserInputError(f"{source}: case #{idx} lacks {', '.join(missing)}")

    # big values are written as strings: TOML integers stop at 64 bits
    a = as_int(item["a"], f"{source}: case #{idx} a")
    b = as_int(item["b"], f"{source}: case #{idx} b")
    c = as_int(item["c"], f"{source}: case #{idx} c")

    expect = item.get("expect")
    if expect is not None and not isinstance(expect, bool):
        raise UserInputError(f"{source}: case #{idx} expect must be true or false")
    skip = item.get("skip_search", False)
    if not isinstance(skip, bool):
        raise UserInputError(f"{source}: case #{idx} skip_search must be true or false")

    return Case(a, b, c, expect=expect, skip_search=skip, group=str(item.get("group") or ""))


def load_corpus(path: Path | str | None = None) -> list[Case]:
    """
    Load verification cases. Format:

      [[case]]
      group = "Non-reachable"
      a = 4
      b = 6
      c = "20"            # int or decimal string
      expect = false      # optional
      skip_search = false # optional

    Without a path, the workspace copy of corpus.toml wins over the packaged one.
    """
    p = Path(path) if path is not None else data_path(CORPUS_FILE)
    try:
        with p.open("rb") as f:
            doc = _toml.load(f)
    except FileNotFoundError:
        raise UserInputError(f"corpus file not found: {p}") from None
    except _toml.TOMLDecodeError as e:
        raise UserInputError(f"reading {p.name}: {e}") from None

    raw = doc.get("case", [])
    if not isinstance(raw, list):
        raise UserInputError(f"{p.name}: 'case' must be an array of tables ([[case]])")
    return [_case_from_table(item, i, p.name) for i, item in enumerate(raw, start=1)]

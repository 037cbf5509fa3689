from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("pairreach")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .context import Case, SearchOutcome, SearchResult, Verdict, Witness
from .decision import DEFAULT_WINDOW, explain, find_witness, reachable
from .harness import HarnessSummary, run_case, run_corpus
from .runtime import APPLY, CFG
from .search import DEFAULT_MAX_ITERATIONS, canonical_key, reachable_by_search, search
from .utility import InvalidInputError, UserInputError

__all__ = [
    "APPLY",
    "CFG",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_WINDOW",
    "Case",
    "HarnessSummary",
    "InvalidInputError",
    "SearchOutcome",
    "SearchResult",
    "UserInputError",
    "Verdict",
    "Witness",
    "__version__",
    "canonical_key",
    "explain",
    "find_witness",
    "reachable",
    "reachable_by_search",
    "run_case",
    "run_corpus",
    "search",
]

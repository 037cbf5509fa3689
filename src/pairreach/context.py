from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Witness:
    """Coefficients with c == m*a + n*b, m, n >= 1 and gcd(m, n) == 1."""
    m: int
    n: int


@dataclass(frozen=True)
class Verdict:
    reachable: bool
    rule: str                        # step that decided, e.g. "gcd" or "witness"
    witness: Witness | None = None   # only set when rule == "witness"

    def __bool__(self) -> bool:
        return self.reachable


class SearchOutcome(Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"  # frontier emptied: sound negative
    BUDGET = "budget"        # iteration cap hit: not a proof

    @property
    def is_conclusive(self) -> bool:
        return self is not SearchOutcome.BUDGET


@dataclass(frozen=True)
class SearchResult:
    outcome: SearchOutcome
    iterations: int = 0
    visited: int = 0   # size of the visited set at termination

    @property
    def found(self) -> bool:
        return self.outcome is SearchOutcome.FOUND


@dataclass(frozen=True)
class Case:
    """One corpus entry for the verification harness."""
    a: int
    b: int
    c: int
    expect: bool | None = None   # known answer, checked against the decision engine
    skip_search: bool = False    # too large for the bounded BFS
    group: str = ""

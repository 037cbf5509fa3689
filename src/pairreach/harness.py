# -----------------------------------------------------------------------------
#  harness.py
#  Cross-check the decision engine against the breadth-first search
# -----------------------------------------------------------------------------

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from pairreach.context import Case, SearchResult
from pairreach.decision import DEFAULT_WINDOW, reachable
from pairreach.search import DEFAULT_MAX_ITERATIONS, search


# ---------- Data models -------------------------------------------------------

@dataclass(frozen=True)
class CaseReport:
    case: Case
    decision: bool | None = None          # None if the engine raised
    decision_error: str | None = None
    decision_seconds: float = 0.0
    search: SearchResult | None = None    # None if skipped or raised
    search_error: str | None = None
    search_seconds: float = 0.0

    @property
    def search_skipped(self) -> bool:
        return self.case.skip_search or self.decision is None

    @property
    def decision_ok(self) -> bool:
        if self.decision is None:
            return False
        return self.case.expect is None or self.decision == self.case.expect

    @property
    def search_agrees(self) -> bool | None:
        """True/False once compared; None when the search did not run."""
        if self.search_error is not None:
            return False
        if self.search is None:
            return None
        return self.search.found == self.decision

    @property
    def passed(self) -> int:
        return int(self.decision_ok) + int(self.search_agrees is True)

    @property
    def failed(self) -> int:
        return int(not self.decision_ok) + int(self.search_agrees is False)


@dataclass(frozen=True)
class HarnessSummary:
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    reports: tuple[CaseReport, ...] = field(default_factory=tuple)

    def add(self, report: CaseReport) -> HarnessSummary:
        return replace(
            self,
            passed=self.passed + report.passed,
            failed=self.failed + report.failed,
            skipped=self.skipped + int(report.search_skipped and report.decision is not None),
            reports=self.reports + (report,),
        )

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def mismatches(self) -> list[CaseReport]:
        return [r for r in self.reports if r.failed]


# ---------- Runner ------------------------------------------------------------

def _describe(err: Exception) -> str:
    return f"{err.__class__.__name__}: {err}"


def run_case(
    case: Case,
    *,
    window: int | None = DEFAULT_WINDOW,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> CaseReport:
    """Run one case through both engines; engine exceptions end up in the report."""
    t0 = time.perf_counter()
    try:
        decision = reachable(case.a, case.b, case.c, window=window)
    except Exception as e:
        return CaseReport(case, decision_error=_describe(e), decision_seconds=time.perf_counter() - t0)
    decision_seconds = time.perf_counter() - t0

    report = CaseReport(case, decision=decision, decision_seconds=decision_seconds)
    if case.skip_search:
        return report

    t0 = time.perf_counter()
    try:
        result = search(case.a, case.b, case.c, max_iterations)
    except Exception as e:
        return replace(report, search_error=_describe(e), search_seconds=time.perf_counter() - t0)
    return replace(report, search=result, search_seconds=time.perf_counter() - t0)


def run_corpus(
    cases: Iterable[Case],
    *,
    window: int | None = DEFAULT_WINDOW,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    on_report: Callable[[CaseReport], None] | None = None,
    summary: HarnessSummary | None = None,
) -> HarnessSummary:
    """
    Run every case and return the accumulated summary.

    `summary` lets a caller continue an earlier run; `on_report` is called
    after each case (console reporting hooks in here).
    """
    acc = summary if summary is not None else HarnessSummary()
    for case in cases:
        report = run_case(case, window=window, max_iterations=max_iterations)
        if on_report is not None:
            on_report(report)
        acc = acc.add(report)
    return acc

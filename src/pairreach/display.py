# src/pairreach/display.py
from __future__ import annotations

import sys

from colorama import Fore, Style

from pairreach.context import SearchOutcome, SearchResult, Verdict
from pairreach.fmt import abbr_int_fast, format_duration, format_ms, triple_desc, yes_no
from pairreach.harness import CaseReport, HarnessSummary
from pairreach.runtime import current as _rt_current

_RULE_TEXT = {
    "base": "c equals one of the generators",
    "below": "c is smaller than both generators",
    "gcd": "c is not a multiple of gcd(a, b)",
    "gap": "c lies strictly between a and b",
    "below-sum": "c is smaller than a + b",
    "witness": "c = m·a + n·b with gcd(m, n) = 1",
    "no-witness": "no coprime (m, n) found in the examined candidates",
}

_OK = f"{Fore.GREEN}[OK]{Style.RESET_ALL}"
_FAIL = f"{Fore.RED}[FAIL]{Style.RESET_ALL}"
_ERR = f"{Fore.RED}[ERROR]{Style.RESET_ALL}"


def _timing(seconds: float) -> str:
    if not _rt_current().show_timings:
        return ""
    return f"{format_ms(seconds):>8} "


def print_verdict(a: int, b: int, c: int, verdict: Verdict, *, file=None) -> None:
    """Explain which rule decided, one line per fact."""
    out = file or sys.stdout
    print(f"{Style.BRIGHT}{triple_desc(a, b, c)}{Style.RESET_ALL}: {yes_no(verdict.reachable)}", file=out)
    print(f"  rule    : {verdict.rule} ({_RULE_TEXT.get(verdict.rule, '?')})", file=out)
    if verdict.witness is not None:
        m, n = verdict.witness.m, verdict.witness.n
        print(f"  witness : m={abbr_int_fast(m)}, n={abbr_int_fast(n)}", file=out)


def print_search_result(result: SearchResult, *, file=None) -> None:
    out = file or sys.stdout
    note = ""
    if result.outcome is SearchOutcome.BUDGET:
        note = f" {Fore.YELLOW}(iteration cap reached, NO is not a proof){Style.RESET_ALL}"
    print(
        f"  search  : {result.outcome.value}, {result.iterations} iteration(s), "
        f"{result.visited} visited{note}",
        file=out,
    )


def print_group_header(name: str) -> None:
    print()
    print(f"--- {name or 'Cases'} ---")


def print_case_report(report: CaseReport) -> None:
    """Render the per-engine lines for one case."""
    case = report.case
    desc = triple_desc(case.a, case.b, case.c)

    if report.decision is None:
        print(f"  {_ERR} [decision] {desc}")
        print(f"    {report.decision_error}")
        return

    tag = _OK if report.decision_ok else _FAIL
    print(f"  {tag} [decision] {_timing(report.decision_seconds)}{desc} [{yes_no(report.decision)}]")
    if not report.decision_ok:
        print(f"    EXPECTED: {yes_no(bool(case.expect), color=False)}")

    if report.search_skipped:
        print(f"  {Style.DIM}- [search]   skipped  {desc}{Style.RESET_ALL}")
        return
    if report.search_error is not None:
        print(f"  {_ERR} [search] {desc}")
        print(f"    {report.search_error}")
        return

    found = report.search.found
    tag = _OK if report.search_agrees else _FAIL
    budget = ""
    if report.search.outcome is SearchOutcome.BUDGET:
        budget = f" {Style.DIM}(cap){Style.RESET_ALL}"
    print(f"  {tag} [search]   {_timing(report.search_seconds)}{desc} [{yes_no(found)}]{budget}")
    if not report.search_agrees:
        print(f"    MISMATCH: decision={report.decision}, search={found}")


def print_summary(summary: HarnessSummary, elapsed: float | None = None) -> None:
    line = "=" * 60
    print()
    print(line)
    color = Fore.GREEN if summary.ok else Fore.RED
    tail = f" in {format_duration(elapsed)}" if elapsed is not None else ""
    print(
        f"Test Results: {color}{summary.passed} passed, {summary.failed} failed{Style.RESET_ALL}, "
        f"{summary.skipped} search check(s) skipped{tail}"
    )
    print(line)

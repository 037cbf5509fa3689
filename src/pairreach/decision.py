# -----------------------------------------------------------------------------
#  decision.py
#  Closed-form reachability test (coprime representation)
# -----------------------------------------------------------------------------
"""
Every value reachable from (a, b) by the moves a <- a+b and b <- a+b is a
itself, b itself, or m·a + n·b with m, n >= 1 and gcd(m, n) = 1. The
coefficient rows of the generation tree are exactly the primitive vectors of
the Calkin-Wilf / Stern-Brocot tree, so the converse holds as well.

The witness search in the last step is bounded: only the first `window`
candidate n values and, when c >= a·b, the last `window` candidates near
maxN = (c - a) // b are examined. A witness that only exists in the middle
of that range is missed (false NO). Pass window=None for an exhaustive scan.
"""

from __future__ import annotations

from math import gcd
from typing import Any

from sympy import mod_inverse

from pairreach.context import Verdict, Witness
from pairreach.fmt import abbr_int_fast
from pairreach.runtime import current as _rt_current
from pairreach.runtime import debug_line
from pairreach.utility import as_positive_triple

DEFAULT_WINDOW = 10_000


# --- helpers ---


def _residue_class(a: int, b: int, c: int) -> tuple[int, int]:
    """
    Return (n0, step) such that a divides c - n·b  <=>  n ≡ n0 (mod step).
    Requires gcd(a, b) | c.
    """
    g = gcd(a, b)
    step = a // g
    if step == 1:
        return 0, 1
    n0 = (c // g) * int(mod_inverse(b // g, step)) % step
    return n0, step


def _scan(a: int, b: int, c: int, lo: int, hi: int, n0: int, step: int) -> Witness | None:
    """Check candidates lo <= n <= hi; only the residue class n0 (mod step) can divide."""
    if hi < lo:
        return None
    first = lo + (n0 - lo) % step
    for n in range(first, hi + 1, step):
        remainder = c - n * b
        if remainder <= 0:
            break
        m = remainder // a
        if m >= 1 and gcd(m, n) == 1:
            return Witness(m, n)
    return None


def find_witness(a: int, b: int, c: int, *, window: int | None = DEFAULT_WINDOW) -> Witness | None:
    """
    Search for c = m·a + n·b with m, n >= 1 and gcd(m, n) = 1.

    Candidates are n = 1 .. maxN with maxN = (c - a) // b. With a finite
    window, only n in [1, min(maxN, window)] and, if c >= a·b, n in
    [max(maxN - window, 1), maxN] are examined. window=None scans everything.
    """
    if c % gcd(a, b):
        return None
    max_n = (c - a) // b
    if max_n < 1:
        return None
    n0, step = _residue_class(a, b, c)

    if window is None:
        return _scan(a, b, c, 1, max_n, n0, step)

    window = int(window)
    if window < 1:
        raise ValueError(f"window must be >= 1 or None, got {window}")

    found = _scan(a, b, c, 1, min(max_n, window), n0, step)
    if found is not None:
        return found

    # large c: the tail near maxN (small m) is the other cheap place to look
    if c >= a * b:
        start = max_n - window if max_n > window else 1
        return _scan(a, b, c, start, max_n, n0, step)
    return None


def _decide(a: int, b: int, c: int, window: int | None) -> Verdict:
    if c == a or c == b:
        return Verdict(True, "base")

    # only additions: nothing below both generators is ever produced
    if c < a and c < b:
        return Verdict(False, "below")

    if c % gcd(a, b) != 0:
        return Verdict(False, "gcd")

    lo, hi = (a, b) if a < b else (b, a)
    if lo < c < hi:
        return Verdict(False, "gap")

    # smallest combination with m, n >= 1 is a + b
    if c < a + b:
        return Verdict(False, "below-sum")

    w = find_witness(a, b, c, window=window)
    if w is None:
        return Verdict(False, "no-witness")
    return Verdict(True, "witness", w)


# --- public API ---


def explain(a: Any, b: Any, c: Any, *, window: int | None = DEFAULT_WINDOW) -> Verdict:
    """
    Decide reachability of c from (a, b) and report which rule decided.

    Raises InvalidInputError if any value is <= 0.
    """
    a, b, c = as_positive_triple(a, b, c)
    verdict = _decide(a, b, c, window)
    if _rt_current().debug:
        detail = ""
        if verdict.witness is not None:
            detail = f" m={abbr_int_fast(verdict.witness.m)} n={abbr_int_fast(verdict.witness.n)}"
        debug_line(
            f"decision ({abbr_int_fast(a)}, {abbr_int_fast(b)}) -> {abbr_int_fast(c)}: "
            f"{'YES' if verdict.reachable else 'NO'} [{verdict.rule}]{detail}"
        )
    return verdict


def reachable(a: Any, b: Any, c: Any, *, window: int | None = DEFAULT_WINDOW) -> bool:
    """
    True if c can be reached from (a, b) with a <- a+b / b <- a+b moves.

    a, b, c may be ints, gmpy2.mpz or decimal strings of any length.
    Raises InvalidInputError if any value is <= 0.
    """
    return explain(a, b, c, window=window).reachable

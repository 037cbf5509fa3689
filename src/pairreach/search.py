# -----------------------------------------------------------------------------
#  search.py
#  Breadth-first search of the generation tree (reference oracle)
# -----------------------------------------------------------------------------
"""
Brute-force counterpart of pairreach.decision: walk the tree rooted at
(a, b), level by level, until a pair containing c shows up.

Children of a state whose coordinates both exceed c are dropped, since values
never shrink. States are deduplicated on their unordered pair (min, max).

The walk is capped at `max_iterations` dequeued states. A capped walk is
reported as SearchOutcome.BUDGET by search() and as plain False by
reachable_by_search(), so a False from the latter is not a proof.

No positivity check is made here. Non-positive inputs are explored as given;
the cap guarantees termination.
"""

from __future__ import annotations

from collections import deque
from typing import Any

from pairreach.context import SearchOutcome, SearchResult
from pairreach.fmt import abbr_int_fast
from pairreach.runtime import current as _rt_current
from pairreach.runtime import debug_line
from pairreach.utility import as_int

DEFAULT_MAX_ITERATIONS = 1_000_000


def canonical_key(x: int, y: int) -> tuple[int, int]:
    """Unordered-pair key: (5, 7) and (7, 5) both map to (5, 7)."""
    return (x, y) if x <= y else (y, x)


def _bfs(a: int, b: int, c: int, max_iterations: int) -> SearchResult:
    if c == a or c == b:
        return SearchResult(SearchOutcome.FOUND)
    if c < a and c < b:
        return SearchResult(SearchOutcome.EXHAUSTED)

    visited: set[tuple[int, int]] = {canonical_key(a, b)}
    queue: deque[tuple[int, int]] = deque([(a, b)])
    iterations = 0

    while queue:
        iterations += 1
        if iterations > max_iterations:
            return SearchResult(SearchOutcome.BUDGET, iterations - 1, len(visited))

        x, y = queue.popleft()
        s = x + y
        for nx, ny in ((s, y), (x, s)):
            if nx == c or ny == c:
                return SearchResult(SearchOutcome.FOUND, iterations, len(visited))
            if nx > c and ny > c:
                continue
            key = canonical_key(nx, ny)
            if key not in visited:
                visited.add(key)
                queue.append((nx, ny))

    return SearchResult(SearchOutcome.EXHAUSTED, iterations, len(visited))


def search(a: Any, b: Any, c: Any, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> SearchResult:
    """Run the bounded BFS and return the tri-state outcome with counters."""
    a, b, c = as_int(a, "a"), as_int(b, "b"), as_int(c, "c")
    result = _bfs(a, b, c, int(max_iterations))
    if _rt_current().debug:
        debug_line(
            f"search ({abbr_int_fast(a)}, {abbr_int_fast(b)}) -> {abbr_int_fast(c)}: "
            f"{result.outcome.value} after {result.iterations} iteration(s), {result.visited} visited"
        )
    return result


def reachable_by_search(a: Any, b: Any, c: Any, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> bool:
    """
    True if the BFS meets c within `max_iterations` expanded states.

    Budget exhaustion also yields False; use search() to tell the two apart.
    """
    return search(a, b, c, max_iterations).found

# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
import sys
from typing import Any

import gmpy2

from pairreach.runtime import CFG

_INT_LITERAL_RE = re.compile(r"[+-]?\d[\d_]*")
_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break


class UserInputError(Exception):
    pass


class InvalidInputError(UserInputError, ValueError):
    """A value given to the decision engine is not strictly positive."""


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    bl = n.bit_length()
    est = int((bl * 30103) // 100000)
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        while n >= p10 * 10:
            est += 1
            p10 *= 10
    return est + 1


def _effective_digit_limit() -> int | None:
    """
    Effective decimal-digit limit for stringifying integers: the tighter of
    BEHAVIOUR.MAX_DIGITS and Python's own guard (sys.get_int_max_str_digits).
    """
    profile_limit = CFG("BEHAVIOUR.MAX_DIGITS", 100_000)
    try:
        py_limit = sys.get_int_max_str_digits()
    except Exception:
        py_limit = None

    try:
        profile_limit = int(profile_limit)
    except Exception:
        profile_limit = None

    # 0 disables Python's guard
    if not py_limit:
        return profile_limit
    if profile_limit is None:
        return py_limit
    return min(profile_limit, py_limit)


def _parse_int_literal(text: str) -> int | None:
    """Accepts: 42  -7  1_000_000  and digit strings of any length.
       Rejects: 3.14  1e5  0xFF  abc"""
    s = text.strip()
    for ch in _THIN_SPACES:
        s = s.replace(ch, "")
    if not _INT_LITERAL_RE.fullmatch(s):
        return None
    # gmpy2 parses without Python's int_max_str_digits guard; int(mpz) is a binary copy
    return int(gmpy2.mpz(s.replace("_", "").lstrip("+"), 10))


def as_int(value: Any, label: str = "value") -> int:
    """
    Coerce an engine argument to a Python int.

    Accepts int, gmpy2.mpz, integral floats and decimal strings of any length.
    Raises UserInputError for anything that is not an integer.
    """
    if isinstance(value, bool):
        raise UserInputError(f"{label} must be an integer, got {typename(value)}")
    if isinstance(value, int):
        return value
    if isinstance(value, gmpy2.mpz):
        return int(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise UserInputError(f"{label} must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        n = _parse_int_literal(value)
        if n is None:
            shown = value if len(value) <= 40 else value[:37] + "..."
            raise UserInputError(f"{label} is not an integer: {shown!r}")
        return n
    raise UserInputError(f"{label} must be an integer, got {typename(value)}")


def as_positive_triple(a: Any, b: Any, c: Any) -> tuple[int, int, int]:
    """Coerce (a, b, c) and reject anything <= 0 with InvalidInputError."""
    triple = (as_int(a, "a"), as_int(b, "b"), as_int(c, "c"))
    for label, v in zip("abc", triple):
        if v <= 0:
            shown = v if dec_digits(v) <= 40 else f"-<{dec_digits(v)} digits>"
            raise InvalidInputError(f"All values must be positive integers ({label} = {shown})")
    return triple


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out

# src/pairreach/fmt.py
from __future__ import annotations

from colorama import Fore, Style

from pairreach.runtime import CFG
from pairreach.utility import UserInputError, _effective_digit_limit, dec_digits


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int | None = None, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"
    if threshold is None:
        threshold = int(CFG("DISPLAY.ABBREVIATE_ABOVE", 35))

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + int_str_guarded(a)

    first = a // (10 ** (d - head))
    last = a % (10 ** tail)
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def int_str_guarded(n: int, label: str = "number") -> str:
    """Return str(n) or raise a friendly user error if it exceeds the digit guard."""
    limit = _effective_digit_limit()
    if limit is not None and dec_digits(n) > limit:
        raise UserInputError(
            f"{label} has more than {limit} decimal digits. "
            "Increase BEHAVIOUR.MAX_DIGITS in the profile or pass a smaller value."
        )
    return str(n)


def format_ms(seconds: float) -> str:
    ms = seconds * 1000
    if ms < 0.01:
        return "<0.01ms"
    if ms < 1:
        return f"{ms:.2f}ms"
    return f"{ms:.1f}ms"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    MAX_SECONDS = 60
    if seconds < 1:
        return format_ms(seconds)
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    return f"{int(m)}:{s:06.3f}"


def yes_no(flag: bool, *, color: bool = True) -> str:
    word = "YES" if flag else "NO"
    if not color:
        return word
    tint = Fore.GREEN if flag else Fore.RED
    return f"{tint}{word}{Style.RESET_ALL}"


def triple_desc(a: int, b: int, c: int) -> str:
    return f"({abbr_int_fast(a)},{abbr_int_fast(b)}) -> {abbr_int_fast(c)}"

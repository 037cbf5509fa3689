# runtime.py
from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style

_REQUIRED_MODULES = ("sympy", "gmpy2")


@dataclass
class Runtime:
    """
    Active profile for the current context.

    Engines never read it for their answers; only the outer surfaces (CLI,
    display, debug tracing) consult it to pick defaults.
    """
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # [debug] lines on stderr, full tracebacks in the CLI

    def apply(self, settings: Any) -> None:
        """Install a config.Settings object or a plain nested dict."""
        if isinstance(settings, dict):
            self.profile_name = "custom"
            data = settings
        else:
            self.profile_name = getattr(settings, "name", None) or "default"
            data = settings.as_dict()

        self.settings = dict(data)
        dbg = self.get("BEHAVIOUR.DEBUG")
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup, e.g. 'SEARCH.MAX_ITERATIONS'; default for any missing level."""
        node: Any = self.settings
        for part in key.split(".") if key else ():
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node if key else default

    # --- typed views used by the CLI and the reporter ---

    def witness_window(self, default: int) -> int | None:
        """None when the profile asks for an exhaustive witness scan."""
        if self.get("DECISION.EXHAUSTIVE", False):
            return None
        return int(self.get("DECISION.WITNESS_WINDOW", default))

    def search_budget(self, default: int) -> int:
        return int(self.get("SEARCH.MAX_ITERATIONS", default))

    @property
    def show_timings(self) -> bool:
        return bool(self.get("DISPLAY.SHOW_TIMINGS", True))


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("pairreach_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = reset()
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime (built-in defaults only) and return it."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def debug_line(msg: str) -> None:
    """One '[debug]' line on STDERR, only while the debug flag is on."""
    if current().debug:
        sys.stderr.write(f"{Style.DIM}[debug]{Style.RESET_ALL} {msg}\n")
        sys.stderr.flush()


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Check that the number-theory backends can be imported, without importing
    them. Prints an install hint on STDERR for anything missing; returns False
    in that case when strict.
    """
    missing = [name for name in _REQUIRED_MODULES if find_spec(name) is None]
    if not missing:
        return True

    print(
        f"{Fore.RED}{Style.BRIGHT}Missing dependencies:{Style.RESET_ALL} {', '.join(missing)}\n"
        f"Install with: {Fore.YELLOW}pip install {' '.join(missing)}{Style.RESET_ALL}",
        file=sys.stderr,
    )
    return not strict

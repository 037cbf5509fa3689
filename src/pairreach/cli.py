# src/pairreach/cli.py

"""
Pair reachability - can c be produced from (a, b) by a <- a+b / b <- a+b?

Description:
    Answers YES or NO for three positive integers of any size using the
    closed-form decision engine, the breadth-first reference search, or both,
    and runs the verification corpus that cross-checks the two.

usage: see pairreach -h
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import re
import sys
import textwrap
import time
import traceback

from colorama import Fore, Style
from colorama import init as colorama_init

from pairreach import __version__ as _ver
from pairreach import config as CONFIG
from pairreach.dataio import CORPUS_FILE, data_path, load_corpus
from pairreach.decision import DEFAULT_WINDOW, explain
from pairreach.display import (
    print_case_report,
    print_group_header,
    print_search_result,
    print_summary,
    print_verdict,
)
from pairreach.harness import run_corpus
from pairreach.runtime import APPLY, CFG, ensure_runtime_deps
from pairreach.runtime import current as _rt_current
from pairreach.search import DEFAULT_MAX_ITERATIONS, search
from pairreach.utility import InvalidInputError, UserInputError, as_int, flatten_dotted, typename
from pairreach.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

_UNSIGNED_RE = re.compile(r"\d+")
_TWO_ARGS = 2
_TRIPLE = 3
_COMMANDS = ("verify", "init", "where", "profiles", "use")


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks
    try:
        faulthandler.enable()
    except (AttributeError, ValueError):
        # stderr has no file descriptor (e.g. captured output)
        pass

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _parse_unsigned(text: str, label: str) -> int:
    """CLI arguments are positive decimal digit strings: no sign, no fraction, any length."""
    s = text.strip()
    if not _UNSIGNED_RE.fullmatch(s):
        raise UserInputError(f"Invalid input: {label} = '{text}' is not an unsigned decimal integer.")
    n = as_int(s, label)
    if n == 0:
        raise InvalidInputError(f"Invalid input: {label} = 0; all values must be positive integers.")
    return n


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      verify
          Run the verification corpus through both engines and compare.

      init [overwrite]
          Create the workspace and copy the packaged profiles and corpus.
          'overwrite' replaces existing copies (requires PAIRREACH_DEV=1).

      profiles
          List available profiles.

      use NAME
          Remember NAME as the profile for later runs.

      where
          Show the workspace and package paths.
    """)

    p = argparse.ArgumentParser(
        prog="pairreach",
        description="Pair reachability: is c reachable from (a, b) by a <- a+b / b <- a+b?",
        usage=(
            "pairreach A B C [--engine ENGINE] [--window N | --exhaustive] [--max-iterations N] [--explain]\n"
            "       pairreach verify [--corpus PATH] [--quiet]\n"
            "       pairreach init | profiles | use NAME | where\n"
            "       pairreach -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="A B C | command",
                   help="three unsigned integers, or a command")
    p.add_argument("--engine", choices=("decision", "search", "both"), default="decision",
                   help="which engine answers (default: decision)")
    p.add_argument("--window", type=int, default=None,
                   help="candidate n values examined at each end of the witness range")
    p.add_argument("--exhaustive", action="store_true",
                   help="scan the whole witness range (exact, may be slow)")
    p.add_argument("--max-iterations", type=int, default=None,
                   help="state budget of the breadth-first search")
    p.add_argument("--explain", action="store_true", help="Show the deciding rule and witness")
    p.add_argument("--profile", default=None, help="Profile name (default: last used, else 'default')")
    p.add_argument("--corpus", default=None, help="verify: corpus TOML file instead of the packaged one")
    p.add_argument("--quiet", action="store_true", help="verify: print the summary only")
    p.add_argument("--debug", action="store_true", help="Show [debug] trace lines and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (sys.argv if argv is None else argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- profile handling ----
def _select_profile_name(explicit: str | None) -> str:
    """
    Precedence:
      1) explicit --profile
      2) last used (from workspace)
      3) 'default'
    """
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _apply_profile(explicit: str | None, debug: bool) -> None:
    if explicit and not CONFIG.has_profile(explicit):
        available = ", ".join(CONFIG.list_all_profiles()) or "(none)"
        raise UserInputError(f"Unknown profile: '{explicit}'. Available profiles: {available}")

    name = _select_profile_name(explicit)
    if not CONFIG.has_profile(name):
        # no workspace copy of the default: keep built-in defaults
        return

    selected = CONFIG.load_settings(name)
    APPLY(selected)
    if debug:
        # the flag wins over BEHAVIOUR.DEBUG = false in the profile
        _rt_current().debug = True

    limit = int(CFG("BEHAVIOUR.MAX_DIGITS", 100_000))
    if not os.environ.get("PYTHONINTMAXSTRDIGITS"):
        try:
            sys.set_int_max_str_digits(limit)
        except (AttributeError, ValueError):
            pass

    if _rt_current().debug:
        print(f"[debug] active profile: {selected.name}", file=sys.stderr)
        print(f"[debug] profile file: {selected._source}", file=sys.stderr)
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat.keys(), key=str.lower):
            v = flat[k]
            print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


def _resolve_window(args) -> int | None:
    if args.exhaustive:
        return None
    if args.window is not None:
        if args.window < 1:
            raise UserInputError("--window must be at least 1.")
        return args.window
    return _rt_current().witness_window(DEFAULT_WINDOW)


def _resolve_max_iterations(args) -> int:
    if args.max_iterations is not None:
        if args.max_iterations < 1:
            raise UserInputError("--max-iterations must be at least 1.")
        return args.max_iterations
    return _rt_current().search_budget(DEFAULT_MAX_ITERATIONS)


# ---- commands ----
def _cmd_query(args) -> int:
    if len(args.items) != _TRIPLE:
        raise UserInputError(
            f"Invalid input: expected three integers A B C, got {len(args.items)} argument(s). "
            "See pairreach -h."
        )
    a, b, c = (_parse_unsigned(s, lbl) for s, lbl in zip(args.items, "abc"))
    window = _resolve_window(args)
    max_iterations = _resolve_max_iterations(args)

    if args.engine == "search":
        result = search(a, b, c, max_iterations)
        print("YES" if result.found else "NO")
        if args.explain:
            print_search_result(result)
        return 0

    verdict = explain(a, b, c, window=window)
    print("YES" if verdict.reachable else "NO")
    if args.explain:
        print_verdict(a, b, c, verdict)

    if args.engine == "both":
        result = search(a, b, c, max_iterations)
        if args.explain:
            print_search_result(result)
        if result.found != verdict.reachable:
            print(
                f"{Fore.RED}MISMATCH:{Style.RESET_ALL} decision={verdict.reachable}, "
                f"search={result.found} ({result.outcome.value})",
                file=sys.stderr,
            )
            return 1
    return 0


def _cmd_verify(args) -> int:
    cases = load_corpus(args.corpus)
    window = _resolve_window(args)
    max_iterations = _resolve_max_iterations(args)

    source = args.corpus or data_path(CORPUS_FILE)
    if not args.quiet:
        print("=" * 60)
        print(f"Running {len(cases)} case(s) from {source}")
        print("Assertion: decision result == search result")
        print("=" * 60)

    last_group: list[str | None] = [None]

    def _report(report) -> None:
        if report.case.group != last_group[0]:
            last_group[0] = report.case.group
            print_group_header(report.case.group)
        print_case_report(report)

    t0 = time.perf_counter()
    summary = run_corpus(
        cases,
        window=window,
        max_iterations=max_iterations,
        on_report=None if args.quiet else _report,
    )
    print_summary(summary, time.perf_counter() - t0)
    return 0 if summary.ok else 1


def _cmd_init(args) -> int:
    if len(args.items) > 1 and args.items[1] == "overwrite":
        if os.environ.get("PAIRREACH_DEV") != "1":
            print("Refusing to overwrite: set PAIRREACH_DEV=1 to enable developer overwrite.")
            return 2
        ws, copied = seed_workspace(overwrite=True)
        print(f"Workspace ready at: {ws} (overwrote existing files)")
    else:
        ws, _, copied = ensure_workspace_seeded()
        print(f"Workspace ready at: {ws}")
    print(f"Copied -> profiles: {copied.get('profiles', 0)}, data: {copied.get('data', 0)}")
    return 0


def _cmd_profiles(args) -> int:
    active = _select_profile_name(args.profile)
    for name, desc in CONFIG.list_profiles_with_descriptions():
        mark = "*" if name == active else " "
        print(f" {mark} {name:<14} {desc}")
    return 0


def _cmd_use(args) -> int:
    if len(args.items) != _TWO_ARGS:
        raise UserInputError("Usage: pairreach use NAME")
    name = args.items[1]
    if not CONFIG.has_profile(name):
        available = ", ".join(CONFIG.list_all_profiles()) or "(none)"
        raise UserInputError(f"Unknown profile: '{name}'. Available profiles: {available}")
    CONFIG.write_current_profile(name)
    print(f"Active profile: {name}")
    return 0


def _cmd_where(args) -> int:
    print(f"Workspace: {workspace_dir()}")
    print(f"Corpus:    {data_path(CORPUS_FILE)}")
    return 0


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    ensure_workspace_seeded()

    command = args.items[0] if args.items and args.items[0] in _COMMANDS else None
    if command == "init":
        return _cmd_init(args)
    if command == "where":
        return _cmd_where(args)
    if command == "profiles":
        return _cmd_profiles(args)
    if command == "use":
        return _cmd_use(args)

    _apply_profile(args.profile, args.debug)

    if command == "verify":
        return _cmd_verify(args)
    return _cmd_query(args)


if __name__ == "__main__":
    raise SystemExit(main())

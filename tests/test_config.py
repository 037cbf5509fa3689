# tests/test_config.py
"""
Tests for profiles, the runtime context, workspace seeding and the small
helpers in utility/fmt.

Run: pytest -v
"""

from __future__ import annotations

import gmpy2
import pytest

from pairreach import config as CONFIG
from pairreach import runtime
from pairreach.fmt import abbr_int_fast, format_duration, format_ms, int_str_guarded, triple_desc, yes_no
from pairreach.runtime import APPLY, CFG
from pairreach.utility import UserInputError, as_int, dec_digits, flatten_dotted
from pairreach.workspace import seed_workspace, workspace_dir

# ---------- workspace ---------------------------------------------------------


def test_workspace_follows_env(isolated_workspace):
    assert workspace_dir() == isolated_workspace.resolve()


def test_seed_copies_once(isolated_workspace):
    root, copied = seed_workspace()
    assert root == isolated_workspace.resolve()
    assert copied == {"profiles": 3, "data": 1}

    _, again = seed_workspace()
    assert again == {"profiles": 0, "data": 0}

    _, forced = seed_workspace(overwrite=True, subsets={"data"})
    assert forced == {"profiles": 0, "data": 1}


def test_seed_keeps_user_edits(isolated_workspace):
    seed_workspace()
    p = isolated_workspace / "profiles" / "default.toml"
    p.write_text("[SEARCH]\nMAX_ITERATIONS = 7\n", encoding="utf-8")
    seed_workspace()
    assert "MAX_ITERATIONS = 7" in p.read_text(encoding="utf-8")


# ---------- profiles ----------------------------------------------------------


def test_packaged_profiles():
    assert CONFIG.list_all_profiles() == ["default", "exhaustive", "quick"]
    described = dict(CONFIG.list_profiles_with_descriptions())
    assert set(described) == {"default", "exhaustive", "quick"}
    assert all(desc and desc != "(no description)" for desc in described.values())


def test_load_default_profile():
    CONFIG.list_all_profiles()  # seeds
    s = CONFIG.load_settings(None)
    assert s.name == "default"
    assert "_PROFILE_" not in s.as_dict()
    assert s.data["DECISION"]["WITNESS_WINDOW"] == 10_000
    assert s.data["SEARCH"]["MAX_ITERATIONS"] == 1_000_000
    assert s.data["BEHAVIOUR"]["DEBUG"] is False


def test_unknown_profile():
    CONFIG.list_all_profiles()
    assert not CONFIG.has_profile("nope")
    with pytest.raises(UserInputError) as ei:
        CONFIG.load_settings("nope")
    assert "Profile 'nope' not found" in str(ei.value)


def test_profile_without_meta_uses_file_stem(isolated_workspace):
    seed_workspace()
    (isolated_workspace / "profiles" / "plain.toml").write_text("[SEARCH]\nMAX_ITERATIONS = 10\n", encoding="utf-8")
    s = CONFIG.load_settings("plain")
    assert (s.name, s.description) == ("plain", "(no description)")
    assert ("plain", "(no description)") in CONFIG.list_profiles_with_descriptions()


@pytest.mark.parametrize(
    "body,fragment",
    [
        ("[SEARCH]\nMAX_ITERATIONS = \"many\"\n", "SEARCH.MAX_ITERATIONS must be an integer"),
        ("[SEARCH]\nMAX_ITERATIONS = true\n", "SEARCH.MAX_ITERATIONS must be an integer"),
        ("[DECISION]\nEXHAUSTIVE = 1\n", "DECISION.EXHAUSTIVE must be true or false"),
        ("[DISPLAY]\nABBREVIATE_ABOVE = 3.5\n", "DISPLAY.ABBREVIATE_ABOVE must be an integer"),
        ("[DECISION]\nWITNESS_WINDOW = 0\n", "DECISION.WITNESS_WINDOW must be at least 1"),
        ("[SEARCH]\nMAX_ITERATIONS = -5\n", "SEARCH.MAX_ITERATIONS must be at least 1"),
        ("[SEARCH\n", "(at line 1"),
    ],
    ids=["str-int", "bool-int", "int-bool", "float-int", "zero-window", "negative-budget", "syntax"],
)
def test_bad_profile_values(isolated_workspace, body, fragment):
    seed_workspace()
    (isolated_workspace / "profiles" / "bad.toml").write_text(body, encoding="utf-8")
    with pytest.raises(UserInputError) as ei:
        CONFIG.load_settings("bad")
    assert fragment in str(ei.value)


def test_unreadable_profile_still_listed(isolated_workspace):
    seed_workspace()
    (isolated_workspace / "profiles" / "bad.toml").write_text("[SEARCH\n", encoding="utf-8")
    assert ("bad", "(unreadable)") in CONFIG.list_profiles_with_descriptions()


def test_current_profile_roundtrip():
    assert CONFIG.read_current_profile() is None
    CONFIG.write_current_profile("quick.toml")
    assert CONFIG.read_current_profile() == "quick"


# ---------- runtime -----------------------------------------------------------


def test_apply_and_dotted_lookup():
    APPLY({"SEARCH": {"MAX_ITERATIONS": 42}, "BEHAVIOUR": {"DEBUG": True}})
    assert CFG("SEARCH.MAX_ITERATIONS") == 42
    assert CFG("SEARCH.MISSING", "x") == "x"
    assert CFG("NOPE.MAX_ITERATIONS") is None
    assert CFG("SEARCH") == {"MAX_ITERATIONS": 42}
    assert runtime.current().debug is True


def test_apply_settings_object():
    CONFIG.list_all_profiles()
    APPLY(CONFIG.load_settings("quick"))
    rt = runtime.current()
    assert rt.profile_name == "quick"
    assert CFG("DECISION.WITNESS_WINDOW") == 1000
    assert CFG("DISPLAY.SHOW_TIMINGS") is False


def test_reset_restores_defaults():
    APPLY({"SEARCH": {"MAX_ITERATIONS": 42}})
    rt = runtime.reset()
    assert rt.settings == {}
    assert rt.debug is False
    assert CFG("SEARCH.MAX_ITERATIONS", 7) == 7


def test_debug_line_respects_flag(capsys):
    runtime.debug_line("hidden")
    assert capsys.readouterr().err == ""
    runtime.current().debug = True
    runtime.debug_line("shown")
    assert "shown" in capsys.readouterr().err


def test_runtime_deps_present():
    assert runtime.ensure_runtime_deps(strict=True)


# ---------- utility -----------------------------------------------------------


@pytest.mark.parametrize(
    "value,expected",
    [
        ("42", 42),
        ("-7", -7),
        ("+7", 7),
        ("1_000_000", 1_000_000),
        ("007", 7),
        ("1\u2009000", 1000),  # thin-space digit separator
        (gmpy2.mpz(12), 12),
        (5.0, 5),
        (10**50, 10**50),
    ],
)
def test_as_int_accepts(value, expected):
    got = as_int(value)
    assert got == expected
    assert type(got) is int


@pytest.mark.parametrize("value", ["3.14", "1e5", "0xFF", "abc", "", "_1", 1.5, True, None, [1]])
def test_as_int_rejects(value):
    with pytest.raises(UserInputError):
        as_int(value, "x")


def test_as_int_message_is_truncated():
    with pytest.raises(UserInputError) as ei:
        as_int("z" * 100, "c")
    msg = str(ei.value)
    assert msg.startswith("c is not an integer")
    assert "..." in msg and len(msg) < 80


@pytest.mark.parametrize("n", [0, 1, 9, 10, 99, 100, 10**20 - 1, 10**20, 10**300 + 7, -12345])
def test_dec_digits(n):
    assert dec_digits(n) == len(str(abs(n)))


def test_flatten_dotted():
    assert flatten_dotted({"A": {"B": 1, "C": {"D": 2}}, "E": 3}) == {"A.B": 1, "A.C.D": 2, "E": 3}
    assert flatten_dotted({}) == {}


# ---------- fmt ---------------------------------------------------------------


def test_abbr_int_fast():
    assert abbr_int_fast(12345) == "12345"
    assert abbr_int_fast(-12345) == "-12345"
    n = int("1234567890" * 5)
    assert abbr_int_fast(n) == "1234567890…1234567890"
    assert abbr_int_fast(n, threshold=100) == str(n)
    assert abbr_int_fast(0) == "0"


def test_abbreviation_threshold_from_profile():
    n = 10**20
    assert abbr_int_fast(n) == str(n)
    APPLY({"DISPLAY": {"ABBREVIATE_ABOVE": 5}})
    assert abbr_int_fast(n, head=2, tail=2) == "10…00"


def test_int_str_guarded():
    APPLY({"BEHAVIOUR": {"MAX_DIGITS": 10}})
    assert int_str_guarded(12345) == "12345"
    with pytest.raises(UserInputError) as ei:
        int_str_guarded(10**12, "c")
    assert "c has more than 10 decimal digits" in str(ei.value)


def test_small_formatters():
    assert format_ms(0.000001) == "<0.01ms"
    assert format_ms(0.0005) == "0.50ms"
    assert format_ms(0.0123) == "12.3ms"
    assert format_duration(2.5) == "2.500 s"
    assert format_duration(75) == "1:15.000"
    assert yes_no(True, color=False) == "YES"
    assert yes_no(False, color=False) == "NO"
    assert triple_desc(3, 5, 8) == "(3,5) -> 8"

# tests/conftest.py
from __future__ import annotations

import pytest

from pairreach import runtime


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Point the workspace at a fresh directory so tests never touch ~/Documents."""
    home = tmp_path / "workspace"
    monkeypatch.setenv("PAIRREACH_HOME", str(home))
    monkeypatch.delenv("PAIRREACH_DEV", raising=False)
    runtime.reset()
    return home

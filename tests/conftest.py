"""
Pytest config.

Pins the repo root on sys.path so `import gatekeeper` works without an editable
install, and isolates every test from the caller's auth environment.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _isolated_gate_config(monkeypatch: pytest.MonkeyPatch):
    """
    `load_gate_config()` is cached per process. Clear it around each test and drop any
    auth variables inherited from the shell so tests only see what they set.
    """
    from gatekeeper.auth.config import load_gate_config

    for name in ("AUTH_PASSWORD", "STORAGE_TYPE", "AUTH_COOKIE_NAME"):
        monkeypatch.delenv(name, raising=False)
    load_gate_config.cache_clear()
    yield
    load_gate_config.cache_clear()

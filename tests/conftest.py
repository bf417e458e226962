"""
pytest configuration

- force the non-interactive matplotlib backend (no display in CI)
- run the explanation client without a credential unless a test sets one
"""

import os

import pytest


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    monkeypatch.setenv("MPLBACKEND", os.getenv("MPLBACKEND", "Agg"))
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("RAYLEIGHSKY_MODEL", raising=False)
    yield

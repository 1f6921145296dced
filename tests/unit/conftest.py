"""
Pytest configuration for unit tests.

Keeps unit tests independent of any local .env or NER_* environment.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear NER_* variables and run each test from an empty directory."""
    for name in list(os.environ):
        if name.startswith("NER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

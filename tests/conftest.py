"""Shared pytest fixtures and configuration for the argwrap test suite.

Guidelines
----------
* Tests must not depend on the real terminal or OS: ``COLUMNS`` is
  cleared and the Windows heuristic is pinned to ``False`` unless a
  test sets them explicitly.
* Process exits are asserted with ``pytest.raises(SystemExit)``.
* Stream output is asserted with ``capsys``.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COLUMNS", raising=False)
    monkeypatch.setattr("argwrap.infra.terminal._is_probably_windows", lambda: False)


@pytest.fixture
def columns_100(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the terminal width to 100 columns (18/74 column split)."""
    monkeypatch.setenv("COLUMNS", "100")

"""Domain models for argwrap.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They are recomputed per render and never
cached across parser invocations.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Terminal geometry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TerminalWidth:
    """A resolved terminal width and the rule that produced it."""

    columns: int
    """Positive column count."""

    source: str
    """One of ``"environment"``, ``"windows"``, ``"terminal"``, ``"default"``."""


@dataclass(frozen=True, slots=True)
class ColumnWidths:
    """Two-column help layout: option keys on the left, descriptions right."""

    key_width: int
    """Width of the option-key column."""

    description_width: int
    """Width of the option-description column."""

    @property
    def total(self) -> int:
        return self.key_width + self.description_width


# ---------------------------------------------------------------------------
# Parse outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Parsed:
    """The engine parsed the command line.

    ``arguments`` is ``None`` when a subcommand action already consumed
    the parse result.
    """

    arguments: Mapping[str, Any] | None


@dataclass(frozen=True, slots=True)
class HelpRequested:
    """The user asked for ``-h``/``--help``; *text* is the rendered help."""

    text: str


@dataclass(frozen=True, slots=True)
class ParseFailed:
    """The command line was malformed; *message* describes the problem."""

    message: str


ParseOutcome = Parsed | HelpRequested | ParseFailed

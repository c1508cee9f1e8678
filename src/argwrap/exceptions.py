"""Custom exception hierarchy for argwrap.

Help requests and command-line parse errors are **not** exceptions:
they terminate the process from the two parse orchestrators in
:mod:`argwrap.cli.parser`.  The classes below cover misuse of the
library itself and missing optional dependencies.

Hierarchy
---------
ArgwrapError
├── ParserConfigurationError
├── DiagnosticsError
└── EnvironmentError
"""

from __future__ import annotations


class ArgwrapError(Exception):
    """Base exception for all argwrap errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Parser construction ---------------------------------------------------

class ParserConfigurationError(ArgwrapError):
    """Raised when a parser or subcommand is constructed with bad inputs."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ArgwrapError):
    """Raised when an optional runtime dependency is not available."""


class DiagnosticsError(ArgwrapError):
    """Raised when ``argwrap doctor`` finds a failing check."""

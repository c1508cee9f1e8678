"""Infrastructure: terminal width detection.

Resolves the column count for a file descriptor, in strict priority
order:

1. A well-formed ``COLUMNS`` environment override.
2. Windows → the 80-column default.
3. The terminal's own report (``TIOCGWINSZ`` on POSIX) when *fd* is a tty.
4. The 80-column default.

Rules
-----
* Total: every failure falls through to the default — nothing raises.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import os
import platform

from argwrap.core.models import TerminalWidth
from argwrap.utils.constants import COLUMNS_ENV_VAR, DEFAULT_COLUMNS, MAX_COLUMNS

logger = logging.getLogger(__name__)

SOURCE_ENVIRONMENT: str = "environment"
SOURCE_WINDOWS: str = "windows"
SOURCE_TERMINAL: str = "terminal"
SOURCE_DEFAULT: str = "default"


# ---------------------------------------------------------------------------
# Environment override
# ---------------------------------------------------------------------------

def parse_columns_override(text: str | None) -> int | None:
    """Return the column count encoded by *text*, or ``None`` if unusable.

    The text must be the canonical base-10 form of an integer — so
    ``"007"``, ``"+10"``, ``" 10"`` and ``"1_0"`` are rejected even
    though :func:`int` accepts them — and must lie in ``(0, 16384)``.
    """
    if text is None:
        return None
    try:
        columns = int(text, 10)
    except ValueError:
        return None
    if str(columns) != text:
        return None
    if not 0 < columns < MAX_COLUMNS:
        return None
    return columns


# ---------------------------------------------------------------------------
# Platform probes
# ---------------------------------------------------------------------------

def _is_probably_windows() -> bool:
    return platform.system().lower() == "windows"


def _query_terminal_columns(fd: int | None) -> int | None:
    """Ask the terminal attached to *fd* for its width."""
    if fd is None:
        return None
    try:
        if not os.isatty(fd):
            return None
        columns = os.get_terminal_size(fd).columns
    except (OSError, ValueError):
        return None
    # Some pseudo-terminals report 0 before they are sized.
    if columns <= 0:
        return None
    return columns


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def resolve_terminal_width(fd: int | None) -> TerminalWidth:
    """Resolve the width for *fd* and report which rule decided it.

    *fd* may be ``None`` for streams without a real descriptor (e.g. an
    in-memory capture); the terminal query is then skipped.
    """
    raw = os.environ.get(COLUMNS_ENV_VAR)
    columns = parse_columns_override(raw)
    if columns is not None:
        logger.debug("terminal width %d from $%s", columns, COLUMNS_ENV_VAR)
        return TerminalWidth(columns=columns, source=SOURCE_ENVIRONMENT)
    if raw is not None:
        logger.debug("ignoring malformed $%s=%r", COLUMNS_ENV_VAR, raw)

    if _is_probably_windows():
        return TerminalWidth(columns=DEFAULT_COLUMNS, source=SOURCE_WINDOWS)

    columns = _query_terminal_columns(fd)
    if columns is not None:
        logger.debug("terminal width %d reported for fd %s", columns, fd)
        return TerminalWidth(columns=columns, source=SOURCE_TERMINAL)

    return TerminalWidth(columns=DEFAULT_COLUMNS, source=SOURCE_DEFAULT)


def terminal_width(fd: int | None) -> int:
    """Return a positive column count for *fd*; never raises."""
    return resolve_terminal_width(fd).columns

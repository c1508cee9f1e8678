"""Infrastructure layer — operating system and engine integration.

This layer wraps terminal queries and the ``argparse`` engine.  It
never prints and never exits the process.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the CLI layer.
"""

from argwrap.infra.argparse_engine import ArgparseEngine, ArgparsePrinter
from argwrap.infra.terminal import (
    parse_columns_override,
    resolve_terminal_width,
    terminal_width,
)

__all__: list[str] = [
    "ArgparseEngine",
    "ArgparsePrinter",
    "parse_columns_override",
    "resolve_terminal_width",
    "terminal_width",
]

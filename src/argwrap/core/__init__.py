"""Core layer — pure layout, classification, and banner logic.

Rules
-----
* No ``print()`` calls.
* No filesystem, terminal, or environment access.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from argwrap.core.banner import build_command_usage_banner, build_usage_banner
from argwrap.core.layout import allocate_column_widths
from argwrap.core.models import (
    ColumnWidths,
    HelpRequested,
    ParseFailed,
    ParseOutcome,
    Parsed,
    TerminalWidth,
)
from argwrap.core.outcome import classify_parse_result, is_help_message
from argwrap.core.protocols import ArgumentEngine, HelpPrinter

__all__: list[str] = [
    "ArgumentEngine",
    "ColumnWidths",
    "HelpPrinter",
    "HelpRequested",
    "ParseFailed",
    "ParseOutcome",
    "Parsed",
    "TerminalWidth",
    "allocate_column_widths",
    "build_command_usage_banner",
    "build_usage_banner",
    "classify_parse_result",
    "is_help_message",
]

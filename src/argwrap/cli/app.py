"""CLI application entry point and command routing for argwrap.

The ``argwrap`` tool is itself built with :func:`~argwrap.cli.parser.create_parser`
and requires a subcommand:

* ``argwrap doctor``            — terminal width diagnostics
* ``argwrap layout [--columns]`` — help column split for a width

This module is the **sole error boundary** for the tool.  It catches
:class:`~argwrap.exceptions.ArgwrapError`, ``KeyboardInterrupt``, and
any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, NoReturn

from argwrap.cli import console, exit_codes
from argwrap.cli.parser import CommandLineParser, create_parser, stream_fileno
from argwrap.core.layout import allocate_column_widths
from argwrap.core.protocols import ArgumentEngine
from argwrap.exceptions import ArgwrapError, DiagnosticsError
from argwrap.infra.terminal import terminal_width


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_doctor(arguments: dict[str, Any]) -> None:
    """Dispatch the ``doctor`` diagnostics command."""
    from argwrap.cli.doctor import run_doctor

    if run_doctor() != exit_codes.SUCCESS:
        raise DiagnosticsError(
            "Some checks failed.",
            hint="See the table above for the failing component.",
        )


def _handle_layout(arguments: dict[str, Any]) -> None:
    """Print the key/description split for the requested width."""
    columns: int | None = arguments["columns"]
    if columns is None:
        columns = terminal_width(stream_fileno(sys.stdout))

    widths = allocate_column_widths(columns)
    console.stdout.print(
        f"columns {columns}: key {widths.key_width}, "
        f"description {widths.description_width}"
    )


def _positive_int(text: str) -> int:
    """``argparse`` type for a strictly positive integer."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid column count: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"column count must be positive: {value}")
    return value


# ---------------------------------------------------------------------------
# Command registration
# ---------------------------------------------------------------------------

def _doctor_command(parser: CommandLineParser) -> ArgumentEngine:
    command = parser.add_command(
        "doctor",
        "Show how the terminal width and help columns are resolved.",
    )
    command.action(_handle_doctor)
    return command


def _layout_command(parser: CommandLineParser) -> ArgumentEngine:
    command = parser.add_command(
        "layout",
        "Show the help column split for a terminal width.",
    )
    command.add_argument(
        "--columns",
        type=_positive_int,
        default=None,
        metavar="N",
        help="terminal width to split (default: the width of stdout)",
    )
    command.action(_handle_layout)
    return command


def build_parser() -> CommandLineParser:
    """Construct the top-level ``argwrap`` parser."""
    return create_parser(
        "argwrap",
        "Terminal-aware help formatting for command-line programs.",
        _doctor_command,
        _layout_command,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> NoReturn:
    """Run the argwrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Raises
    ------
    SystemExit
        Always; the exit code follows :mod:`argwrap.cli.exit_codes`.
    """
    build_parser().parse_command_line_expecting_command_and_exit(argv)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        main()
    except ArgwrapError as exc:
        console.stderr.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.stderr.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.stderr.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.stderr.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

"""Command-line parser construction and the parse-and-exit orchestrators.

:func:`create_parser` decorates an argument engine with terminal-aware
column widths, usage banners for the program and each subcommand, and
the help/error conventions below.

Conventions
-----------
* Help (``-h``/``--help``) goes to **stdout** and exits ``0``.
* Parse errors go to **stderr**, followed by the full help+usage block,
  and exit ``1``.
* A clean parse returns the argument mapping without output or exit.
* Column widths are recomputed against the stream that is about to be
  written, since stdout and stderr may be attached to different
  terminals.

Only :meth:`CommandLineParser.parse_command_line` and
:meth:`CommandLineParser.parse_command_line_expecting_command_and_exit`
end the process; everything they call is free of exits.
"""

from __future__ import annotations

import copy
import functools
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import Any, NoReturn, TextIO

from argwrap.cli import console, exit_codes
from argwrap.core.banner import build_command_usage_banner, build_usage_banner
from argwrap.core.layout import allocate_column_widths
from argwrap.core.models import ColumnWidths, HelpRequested, ParseFailed
from argwrap.core.outcome import classify_parse_result
from argwrap.core.protocols import ArgumentEngine, HelpPrinter
from argwrap.exceptions import ParserConfigurationError
from argwrap.infra.argparse_engine import ArgparseEngine
from argwrap.infra.terminal import terminal_width

logger = logging.getLogger(__name__)

MISSING_COMMAND_MESSAGE: str = "Error: Please supply a subcommand"


# ---------------------------------------------------------------------------
# Column widths
# ---------------------------------------------------------------------------

def stream_fileno(stream: TextIO) -> int | None:
    """Return the descriptor behind *stream*, or ``None`` if it has none."""
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def apply_column_widths(engine: ArgumentEngine, stream: TextIO) -> ColumnWidths:
    """Size *engine*'s help columns for the terminal behind *stream*."""
    widths = allocate_column_widths(terminal_width(stream_fileno(stream)))
    engine.set_colsz(widths.key_width, widths.description_width)
    return widths


# ---------------------------------------------------------------------------
# Parser handle
# ---------------------------------------------------------------------------

class CommandLineParser:
    """An argument engine decorated with help, error, and exit behaviour.

    Instances are built by :func:`create_parser`.  The engine's own
    ``parse`` is held privately so callers always go through the
    orchestrators below.
    """

    def __init__(self, engine: ArgumentEngine) -> None:
        self._engine = engine
        self._parse = engine.parse

    # ------------------------------------------------------------------
    # Delegation
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._engine.name

    @property
    def description(self) -> str:
        return self._engine.description

    @property
    def printer(self) -> HelpPrinter:
        return self._engine.printer

    def add_argument(self, *args: Any, **kwargs: Any) -> Any:
        return self._engine.add_argument(*args, **kwargs)

    def add_command(self, name: str, description: str = "") -> ArgumentEngine:
        return self._engine.add_command(name, description)

    def set_column_widths(self, stream: TextIO) -> ColumnWidths:
        return apply_column_widths(self._engine, stream)

    # ------------------------------------------------------------------
    # Orchestrators
    # ------------------------------------------------------------------

    def parse_command_line(
        self,
        argv: Sequence[str] | None = None,
    ) -> Mapping[str, Any] | None:
        """Parse *argv* (default ``sys.argv[1:]``) or end the process.

        Returns
        -------
        Mapping | None
            The parsed arguments, or ``None`` when a subcommand action
            already handled them.

        Raises
        ------
        SystemExit
            ``0`` after printing help to stdout, ``1`` after printing a
            parse error and the help+usage block to stderr.
        """
        # The engine renders help during parse, so size it for stdout first.
        self.set_column_widths(sys.stdout)

        outcome = classify_parse_result(*self._parse(argv))

        if isinstance(outcome, HelpRequested):
            logger.debug("help requested for %s", self.name)
            self.set_column_widths(sys.stdout)
            console.stdout.write(outcome.text)
            sys.exit(exit_codes.SUCCESS)

        if isinstance(outcome, ParseFailed):
            logger.debug("parse error for %s: %s", self.name, outcome.message)
            self.set_column_widths(sys.stderr)
            console.stderr.write(outcome.message + "\n")
            console.stderr.write(self.printer.generate_help_and_usage())
            sys.exit(exit_codes.GENERAL_ERROR)

        return outcome.arguments

    def parse_command_line_expecting_command_and_exit(
        self,
        argv: Sequence[str] | None = None,
    ) -> NoReturn:
        """Parse *argv* for a program that requires a subcommand, then exit.

        A subcommand action consumes the arguments, leaving nothing
        behind; an empty result exits ``0``.  Any arguments left over
        mean no subcommand ran, which is reported on stderr with exit
        ``1``.
        """
        leftover = self.parse_command_line(argv)

        if not leftover:
            sys.exit(exit_codes.SUCCESS)

        logger.debug("no subcommand dispatched for %s", self.name)
        self.set_column_widths(sys.stderr)
        console.stderr.write(MISSING_COMMAND_MESSAGE + "\n")
        console.stderr.write(self.printer.generate_help_and_usage())
        sys.exit(exit_codes.GENERAL_ERROR)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

CommandFactory = Callable[[CommandLineParser], ArgumentEngine]


def _program_name(program: object) -> str:
    """Accept a program name, or anything with a string ``name`` attribute."""
    if isinstance(program, str):
        return program
    name = getattr(program, "name", None)
    if isinstance(name, str):
        return name
    raise ParserConfigurationError(
        f"Cannot derive a program name from {program!r}.",
        hint="Pass a string, or an object with a string 'name' attribute.",
    )


def create_parser(
    program: object,
    description: str,
    *commands: CommandFactory,
    engine: ArgumentEngine | None = None,
) -> CommandLineParser:
    """Build a :class:`CommandLineParser` for *program*.

    Parameters
    ----------
    program:
        The program name, or an object with a string ``name`` attribute
        (a module descriptor, for instance).
    description:
        Text shown above the option help.
    *commands:
        Subcommand factories.  Each is called, in order, with the new
        parser and must return the engine of the subcommand it registers
        (normally via :meth:`CommandLineParser.add_command`).
    engine:
        Optional template engine.  It is deep-copied, never mutated;
        by default a fresh :class:`~argwrap.infra.argparse_engine.ArgparseEngine`
        is used.

    Raises
    ------
    ParserConfigurationError
        When *program* has no usable name or *description* is not text.
    """
    if not isinstance(description, str):
        raise ParserConfigurationError(
            f"Parser description must be a string, not {type(description).__name__}.",
        )
    program_name = _program_name(program)

    instance: ArgumentEngine = copy.deepcopy(engine) if engine is not None else ArgparseEngine()
    parser = CommandLineParser(instance)

    instance.set_name(program_name)
    instance.set_description(description)
    instance.printer.install_banner(
        functools.partial(
            build_usage_banner,
            program_name=program_name,
            has_commands=len(commands) > 0,
        )
    )

    for command in commands:
        command_engine = command(parser)
        apply_column_widths(command_engine, sys.stdout)
        command_engine.printer.install_banner(
            functools.partial(
                build_command_usage_banner,
                # name already carries the parent prefix, e.g. "prog build"
                display_name=command_engine.name,
            )
        )

    return parser

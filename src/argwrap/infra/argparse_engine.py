"""Infrastructure: ``argparse`` adapted to the argument-engine contract.

:class:`argparse.ArgumentParser` prints and exits on its own when it
sees ``-h`` or a malformed command line.  This adapter turns both into
return values instead, matching :class:`~argwrap.core.protocols.ArgumentEngine`:

* ``-h``/``--help`` → ``(None, help_text)`` where the help text is the
  owning parser's ``generate_help_and_usage()`` and starts with ``Usage: ``.
* parse errors → ``(None, "<prog>: error: <message>")``.
* success → ``(arguments, None)``, or ``(None, None)`` once a subcommand
  action has consumed the arguments.

Rules
-----
* No ``print()`` and no ``sys.exit()`` — the CLI layer owns both.
* Column widths are set explicitly through :meth:`ArgparseEngine.set_colsz`;
  argparse never sizes help from the terminal on its own.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Mapping, Sequence
from typing import Any, NoReturn

from argwrap.core.layout import allocate_column_widths
from argwrap.core.models import ColumnWidths
from argwrap.core.protocols import HelpPrinter
from argwrap.exceptions import ParserConfigurationError
from argwrap.utils.constants import (
    COMMAND_DEST,
    DEFAULT_COLUMNS,
    TAB_INDENT,
    USAGE_PREFIX,
    WIDE_KEY_WIDTH,
)

CommandAction = Callable[[dict[str, Any]], object]


# ---------------------------------------------------------------------------
# Internal control-flow signals
# ---------------------------------------------------------------------------

class _HelpSignal(Exception):
    """Raised by the help flag; carries the engine whose help was asked for."""

    def __init__(self, engine: ArgparseEngine) -> None:
        super().__init__(engine.name)
        self.engine = engine


class _ErrorSignal(Exception):
    """Raised instead of argparse's print-usage-and-exit error path."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# argparse customisations
# ---------------------------------------------------------------------------

class ColumnHelpFormatter(argparse.HelpFormatter):
    """Help formatter whose usage line starts with the literal ``Usage: ``."""

    def add_usage(self, usage, actions, groups, prefix=None):  # type: ignore[no-untyped-def]
        if prefix is None:
            prefix = USAGE_PREFIX
        super().add_usage(usage, actions, groups, prefix)


class _EngineArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors by raising instead of exiting."""

    key_width: int = WIDE_KEY_WIDTH
    description_width: int = DEFAULT_COLUMNS - TAB_INDENT - WIDE_KEY_WIDTH

    def _get_formatter(self) -> argparse.HelpFormatter:
        formatter = ColumnHelpFormatter(
            prog=self.prog,
            max_help_position=self.key_width,
            width=self.key_width + self.description_width,
        )
        if hasattr(formatter, "_set_color"):
            # Python 3.14+ colours help; the usage prefix must stay literal.
            formatter._set_color(False)
        return formatter

    def error(self, message: str) -> NoReturn:
        raise _ErrorSignal(f"{self.prog}: error: {message}")


class _HelpAction(argparse.Action):
    """``-h``/``--help`` that hands control back to the engine."""

    def __init__(
        self,
        option_strings: Sequence[str],
        engine: ArgparseEngine,
        dest: str = argparse.SUPPRESS,
        default: Any = argparse.SUPPRESS,
        help: str | None = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            default=default,
            nargs=0,
            help=help,
        )
        self.engine = engine

    def __call__(self, parser, namespace, values, option_string=None):  # type: ignore[no-untyped-def]
        raise _HelpSignal(self.engine)


# ---------------------------------------------------------------------------
# Printer
# ---------------------------------------------------------------------------

class ArgparsePrinter:
    """Renders usage and help for one :class:`ArgparseEngine`.

    :meth:`generate_help_and_usage` defaults to the usage line followed by
    the detailed help; :meth:`install_banner` swaps in a custom renderer.
    """

    def __init__(self, parser: _EngineArgumentParser) -> None:
        self._parser = parser
        self._banner: Callable[[HelpPrinter], str] | None = None

    def generate_usage(self) -> str:
        return self._parser.format_usage().rstrip("\n")

    def generate_help(self) -> str:
        """Description, argument groups and epilog — everything but usage."""
        parser = self._parser
        formatter = parser._get_formatter()

        formatter.add_text(parser.description)
        for action_group in parser._action_groups:
            formatter.start_section(action_group.title)
            formatter.add_text(action_group.description)
            formatter.add_arguments(action_group._group_actions)
            formatter.end_section()
        formatter.add_text(parser.epilog)

        return formatter.format_help()

    def generate_help_and_usage(self) -> str:
        if self._banner is not None:
            return self._banner(self)
        return self.generate_usage() + "\n" + self.generate_help()

    def install_banner(self, builder: Callable[[HelpPrinter], str]) -> None:
        self._banner = builder


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ArgparseEngine:
    """An :class:`argparse.ArgumentParser` behind the engine contract.

    Usage::

        engine = ArgparseEngine("prog", "Does things.")
        engine.add_argument("--verbose", action="store_true")

        build = engine.add_command("build", "Build the project.")
        build.add_argument("target")
        build.action(lambda arguments: run_build(arguments["target"]))

        arguments, message = engine.parse(["--verbose"])
    """

    def __init__(
        self,
        name: str = "",
        description: str = "",
        *,
        parser: _EngineArgumentParser | None = None,
        parent: ArgparseEngine | None = None,
    ) -> None:
        if parser is None:
            parser = _EngineArgumentParser(
                prog=name or None,
                description=description or None,
                add_help=False,
            )
        self._parser = parser
        self._parent = parent
        self._printer = ArgparsePrinter(parser)
        self._commands: dict[str, ArgparseEngine] = {}
        self._subparsers: Any = None
        self._action: CommandAction | None = None

        defaults = allocate_column_widths(DEFAULT_COLUMNS)
        self.set_colsz(defaults.key_width, defaults.description_width)
        parser.add_argument(
            "-h",
            "--help",
            action=_HelpAction,
            engine=self,
            help="show this help message and exit",
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._parser.prog

    @property
    def description(self) -> str:
        return self._parser.description or ""

    @property
    def printer(self) -> ArgparsePrinter:
        return self._printer

    @property
    def commands(self) -> Mapping[str, ArgparseEngine]:
        return dict(self._commands)

    @property
    def column_widths(self) -> ColumnWidths:
        return ColumnWidths(
            key_width=self._parser.key_width,
            description_width=self._parser.description_width,
        )

    def set_name(self, name: str) -> None:
        self._parser.prog = name

    def set_description(self, description: str) -> None:
        self._parser.description = description

    def set_colsz(self, key_width: int, description_width: int) -> None:
        self._parser.key_width = key_width
        self._parser.description_width = description_width

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action:
        return self._parser.add_argument(*args, **kwargs)

    def add_command(self, name: str, description: str = "") -> ArgparseEngine:
        """Register subcommand *name*; its display name is ``"<prog> <name>"``."""
        if self._parent is not None:
            raise ParserConfigurationError(
                f"Cannot add command {name!r} to {self.name!r}.",
                hint="Subcommands cannot have subcommands of their own.",
            )
        if name in self._commands:
            raise ParserConfigurationError(f"Command {name!r} is already registered.")

        if self._subparsers is None:
            self._subparsers = self._parser.add_subparsers(
                dest=COMMAND_DEST,
                metavar="COMMAND",
                parser_class=_EngineArgumentParser,
            )
        parser = self._subparsers.add_parser(
            name,
            prog=f"{self.name} {name}",
            help=description or None,
            description=description or None,
            add_help=False,
        )
        command = ArgparseEngine(parser=parser, parent=self)
        self._commands[name] = command
        return command

    def action(self, callback: CommandAction) -> CommandAction:
        """Run *callback* with the parsed arguments when this command is chosen.

        Returns *callback* unchanged so it can be used as a decorator.
        """
        self._action = callback
        return callback

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(
        self,
        argv: Sequence[str] | None = None,
    ) -> tuple[dict[str, Any] | None, str | None]:
        try:
            namespace = self._parser.parse_args(argv)
        except _HelpSignal as signal:
            return None, signal.engine.printer.generate_help_and_usage()
        except _ErrorSignal as signal:
            return None, signal.message

        arguments = vars(namespace)
        command = self._commands.get(arguments.get(COMMAND_DEST))
        if command is not None and command._action is not None:
            command._action(arguments)
            return None, None
        return arguments, None

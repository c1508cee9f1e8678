"""Tests for parser construction and the orchestrators (cli/parser.py).

Coverage:
* ``create_parser`` validation, naming, template copying, command wiring.
* ``parse_command_line``: success, help (stdout, exit 0), error
  (stderr, exit 1), per-stream width recomputation.
* ``parse_command_line_expecting_command_and_exit``.
* Usage banner line counts with and without subcommands.
"""

from __future__ import annotations

import sys
from types import SimpleNamespace
from typing import Any, TextIO

import pytest

from argwrap.cli import parser as parser_module
from argwrap.cli.parser import (
    CommandLineParser,
    apply_column_widths,
    create_parser,
    stream_fileno,
)
from argwrap.core.models import ColumnWidths
from argwrap.core.protocols import ArgumentEngine
from argwrap.exceptions import ParserConfigurationError
from argwrap.infra.argparse_engine import ArgparseEngine


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_command(parser: CommandLineParser) -> ArgumentEngine:
    command = parser.add_command("build", "Build the project.")
    command.add_argument("target", help="what to build")
    return command


def _clean_command(parser: CommandLineParser) -> ArgumentEngine:
    return parser.add_command("clean", "Remove build output.")


def _usage_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.startswith("Usage: ")]


def _exit_code(exc_info: pytest.ExceptionInfo[SystemExit]) -> Any:
    return exc_info.value.code


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestCreateParser:
    def test_name_and_description(self) -> None:
        parser = create_parser("prog", "Does things.")
        assert isinstance(parser, CommandLineParser)
        assert parser.name == "prog"
        assert parser.description == "Does things."

    def test_program_descriptor_with_name(self) -> None:
        parser = create_parser(SimpleNamespace(name="modprog"), "Does things.")
        assert parser.name == "modprog"

    def test_bad_program_descriptor(self) -> None:
        with pytest.raises(ParserConfigurationError) as exc_info:
            create_parser(42, "Does things.")
        assert exc_info.value.hint is not None

    @pytest.mark.parametrize("description", [None, 3, b"bytes"])
    def test_description_must_be_text(self, description: Any) -> None:
        with pytest.raises(ParserConfigurationError, match="must be a string"):
            create_parser("prog", description)

    def test_engine_parse_is_not_exposed(self) -> None:
        parser = create_parser("prog", "Does things.")
        assert not hasattr(parser, "parse")

    def test_template_engine_is_copied(self) -> None:
        template = ArgparseEngine("template", "Template.")
        template.add_argument("--shared")

        parser = create_parser("prog", "Does things.", engine=template)

        assert template.name == "template"
        assert template.description == "Template."
        assert "-h|--help" not in template.printer.generate_help_and_usage()
        assert parser.parse_command_line(["--shared", "x"]) == {"shared": "x"}

    def test_commands_registered_in_order(self) -> None:
        calls: list[str] = []

        def first(parser: CommandLineParser) -> ArgumentEngine:
            calls.append("first")
            return parser.add_command("first")

        def second(parser: CommandLineParser) -> ArgumentEngine:
            calls.append("second")
            return parser.add_command("second")

        create_parser("prog", "Does things.", first, second)
        assert calls == ["first", "second"]

    def test_commands_get_stdout_widths(self, columns_100: None) -> None:
        created: list[ArgumentEngine] = []

        def command(parser: CommandLineParser) -> ArgumentEngine:
            engine = parser.add_command("build")
            engine.set_colsz(1, 1)
            created.append(engine)
            return engine

        create_parser("prog", "Does things.", command)
        assert created[0].column_widths == ColumnWidths(18, 74)  # type: ignore[attr-defined]

    def test_command_banner_installed(self) -> None:
        created: list[ArgumentEngine] = []

        def command(parser: CommandLineParser) -> ArgumentEngine:
            engine = _build_command(parser)
            created.append(engine)
            return engine

        create_parser("prog", "Does things.", command)
        banner = created[0].printer.generate_help_and_usage()
        assert _usage_lines(banner) == [
            "Usage: prog build [-h] target",
            "Usage: prog build -h|--help",
        ]


# ---------------------------------------------------------------------------
# Column widths
# ---------------------------------------------------------------------------

class TestColumnWidths:
    def test_stream_without_descriptor(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert stream_fileno(sys.stdout) is None

    def test_apply_uses_environment(self, columns_100: None) -> None:
        engine = ArgparseEngine("prog")
        assert apply_column_widths(engine, sys.stdout) == ColumnWidths(18, 74)
        assert engine.column_widths == ColumnWidths(18, 74)

    def test_apply_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        engine = ArgparseEngine("prog")
        engine.set_colsz(1, 1)
        assert apply_column_widths(engine, sys.stdout) == ColumnWidths(18, 54)


# ---------------------------------------------------------------------------
# parse_command_line
# ---------------------------------------------------------------------------

class TestParseCommandLine:
    def test_success_returns_mapping_silently(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        parser = create_parser("prog", "Does things.")
        parser.add_argument("--verbose", action="store_true")

        assert parser.parse_command_line(["--verbose"]) == {"verbose": True}
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_help_goes_to_stdout_and_exits_zero(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.")
        parser.add_argument("--verbose", action="store_true")

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line(["--help"])

        assert _exit_code(exc_info) == 0
        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out.startswith("Usage: prog [-h] [--verbose]\n")
        assert "Does things." in captured.out

    def test_help_without_commands_has_two_usage_lines(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.")

        with pytest.raises(SystemExit):
            parser.parse_command_line(["-h"])

        assert _usage_lines(capsys.readouterr().out) == [
            "Usage: prog [-h]",
            "Usage: prog -h|--help",
        ]

    def test_help_with_two_commands_has_four_usage_lines(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command, _clean_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line(["-h"])

        assert _exit_code(exc_info) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Usage: prog [")
        assert lines[1:4] == [
            "Usage: prog COMMAND",
            "Usage: prog -h|--help",
            "Usage: prog COMMAND -h|--help",
        ]

    def test_command_help_uses_command_banner(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line(["build", "--help"])

        assert _exit_code(exc_info) == 0
        out = capsys.readouterr().out
        assert _usage_lines(out) == [
            "Usage: prog build [-h] target",
            "Usage: prog build -h|--help",
        ]
        assert "what to build" in out

    def test_error_goes_to_stderr_and_exits_one(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line(["--bogus"])

        assert _exit_code(exc_info) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        lines = captured.err.splitlines()
        assert lines[0].startswith("prog: error: ")
        assert "--bogus" in lines[0]
        assert lines[1].startswith("Usage: prog [")
        assert lines[2:5] == [
            "Usage: prog COMMAND",
            "Usage: prog -h|--help",
            "Usage: prog COMMAND -h|--help",
        ]

    def test_command_error_shows_top_level_help(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line(["build"])

        assert _exit_code(exc_info) == 1
        err = capsys.readouterr().err
        assert err.startswith("prog build: error: ")
        assert "Usage: prog COMMAND -h|--help" in err

    def test_widths_follow_the_output_stream(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        streams: list[TextIO] = []
        original = parser_module.apply_column_widths

        def recording(engine: ArgumentEngine, stream: TextIO) -> ColumnWidths:
            streams.append(stream)
            return original(engine, stream)

        parser = create_parser("prog", "Does things.")
        monkeypatch.setattr(parser_module, "apply_column_widths", recording)

        with pytest.raises(SystemExit):
            parser.parse_command_line(["--bogus"])
        assert streams == [sys.stdout, sys.stderr]

        streams.clear()
        with pytest.raises(SystemExit):
            parser.parse_command_line(["-h"])
        assert streams == [sys.stdout, sys.stdout]

        streams.clear()
        parser.parse_command_line([])
        assert streams == [sys.stdout]

    def test_error_help_sized_for_stderr(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(
            parser_module,
            "stream_fileno",
            lambda stream: 2 if stream is sys.stderr else 1,
        )
        monkeypatch.setattr(
            parser_module,
            "terminal_width",
            lambda fd: 40 if fd == 2 else 200,
        )
        parser = create_parser("prog", "Does things.")
        parser.add_argument("--name", help="word " * 30)

        with pytest.raises(SystemExit):
            parser.parse_command_line(["--bogus"])

        help_lines = capsys.readouterr().err.splitlines()[1:]
        # 40 columns less the 8-column indent leaves 32 for help text
        assert all(len(line) <= 32 for line in help_lines)


# ---------------------------------------------------------------------------
# parse_command_line_expecting_command_and_exit
# ---------------------------------------------------------------------------

class TestExpectingCommand:
    def test_missing_command(
        self, capsys: pytest.CaptureFixture[str], columns_100: None,
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line_expecting_command_and_exit([])

        assert _exit_code(exc_info) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error: Please supply a subcommand\n")
        assert "Usage: prog COMMAND -h|--help" in captured.err

    def test_dispatched_command_exits_zero(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        received: list[dict[str, Any]] = []

        def build(parser: CommandLineParser) -> ArgumentEngine:
            command = _build_command(parser)
            command.action(received.append)
            return command

        parser = create_parser("prog", "Does things.", build)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line_expecting_command_and_exit(["build", "docs"])

        assert _exit_code(exc_info) == 0
        assert received == [{"command": "build", "target": "docs"}]
        assert capsys.readouterr().err == ""

    def test_command_without_action_is_not_dispatched(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line_expecting_command_and_exit(["build", "docs"])

        assert _exit_code(exc_info) == 1
        assert "Please supply a subcommand" in capsys.readouterr().err

    def test_help_still_exits_zero(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line_expecting_command_and_exit(["-h"])

        assert _exit_code(exc_info) == 0
        assert capsys.readouterr().out.startswith("Usage: prog ")

    def test_parse_error_exits_one(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        parser = create_parser("prog", "Does things.", _build_command)

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_command_line_expecting_command_and_exit(["--bogus"])

        assert _exit_code(exc_info) == 1
        assert "Please supply a subcommand" not in capsys.readouterr().err

"""``argwrap doctor`` — terminal width diagnostics.

Reports how the width resolver sees stdout and stderr, and the help
column split each stream would get.  Renders a Rich table when Rich is
installed, plain text otherwise.
"""

from __future__ import annotations

import os
import platform
import sys
from typing import TextIO

from argwrap.cli import console, exit_codes
from argwrap.cli.parser import stream_fileno
from argwrap.core.layout import allocate_column_widths
from argwrap.infra.terminal import parse_columns_override, resolve_terminal_width
from argwrap.utils.constants import COLUMNS_ENV_VAR
from argwrap.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _argwrap_version_check() -> tuple[str, str, str]:
    return "argwrap", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _columns_env_check() -> tuple[str, str, str]:
    """Return the ``COLUMNS`` row; a rejected override is a warning."""
    raw = os.environ.get(COLUMNS_ENV_VAR)
    label = f"${COLUMNS_ENV_VAR}"
    if raw is None:
        return label, "unset", "[green]OK[/green]"
    if parse_columns_override(raw) is None:
        return label, repr(raw), "[yellow]WARN (ignored)[/yellow]"
    return label, raw, "[green]OK[/green]"


def _stream_check(label: str, stream: TextIO) -> tuple[str, str, str]:
    """Return the resolved width, its source, and the column split."""
    width = resolve_terminal_width(stream_fileno(stream))
    widths = allocate_column_widths(width.columns)
    value = (
        f"{width.columns} cols ({width.source}), "
        f"key {widths.key_width} / description {widths.description_width}"
    )
    return label, value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    out = sys.stdout
    print("\nargwrap doctor", file=out)
    print("=" * 72, file=out)
    print(f"{'Component':<12} {'Value':<50} {'Status':<8}", file=out)
    print("-" * 72, file=out)
    for label, value, status in checks:
        print(f"{label:<12} {value:<50} {_status_plain(status):<8}", file=out)
    print(file=out)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` unless a check fails outright;
        warnings do not change the result.
    """
    checks = [
        _argwrap_version_check(),
        _python_version_check(),
        _os_check(),
        _columns_env_check(),
        _stream_check("stdout", sys.stdout),
        _stream_check("stderr", sys.stderr),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="argwrap doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.stdout.print()
        console.stdout.print(table)
        console.stdout.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        return exit_codes.GENERAL_ERROR
    return exit_codes.SUCCESS

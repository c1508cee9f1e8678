"""Usage banners shown above the detailed option help.

Both builders pull usage and help text from the printer at call time,
so they always reflect the column widths applied just before rendering.
"""

from __future__ import annotations

from argwrap.core.protocols import HelpPrinter
from argwrap.utils.constants import USAGE_PREFIX


def build_usage_banner(
    printer: HelpPrinter,
    program_name: str,
    *,
    has_commands: bool,
    newline: str = "\n",
) -> str:
    """Render the top-level help+usage block.

    ::

        Usage: prog [options]
        Usage: prog COMMAND              (only with subcommands)
        Usage: prog -h|--help
        Usage: prog COMMAND -h|--help    (only with subcommands)
        <detailed help>
    """
    usage = [printer.generate_usage()]
    if has_commands:
        usage.append(f"{USAGE_PREFIX}{program_name} COMMAND")
    usage.append(f"{USAGE_PREFIX}{program_name} -h|--help")
    if has_commands:
        usage.append(f"{USAGE_PREFIX}{program_name} COMMAND -h|--help")

    return newline.join(usage) + newline + printer.generate_help()


def build_command_usage_banner(
    printer: HelpPrinter,
    display_name: str,
    *,
    newline: str = "\n",
) -> str:
    """Render a subcommand's help+usage block.

    *display_name* already carries the parent prefix, e.g. ``"prog build"``.
    """
    usage = [
        printer.generate_usage(),
        f"{USAGE_PREFIX}{display_name} -h|--help",
    ]
    return newline.join(usage) + newline + printer.generate_help()

"""argwrap — terminal-aware help formatting for command-line programs.

Decorates an argument-parsing engine with width-aware help output,
consistent help/error exit codes, and per-subcommand usage banners.
"""

from argwrap.cli.parser import CommandLineParser, create_parser
from argwrap.version import __version__

__all__: list[str] = ["CommandLineParser", "__version__", "create_parser"]

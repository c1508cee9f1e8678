"""Constants shared by the width resolver, layout, and banner code."""

from __future__ import annotations

COLUMNS_ENV_VAR: str = "COLUMNS"
"""Environment variable that overrides the detected terminal width."""

DEFAULT_COLUMNS: int = 80
"""Fallback width: the IBM punched-card standard of 80 columns."""

MAX_COLUMNS: int = 16384
"""Exclusive upper bound for a ``COLUMNS`` override; larger is nonsense."""

TAB_INDENT: int = 8
"""Columns reserved for indentation, so 80 columns leaves 72 usable."""

PROPORTIONAL_LIMIT: int = 72
"""Usable widths up to this value are split proportionally (25% / 75%)."""

WIDE_KEY_WIDTH: int = 18
"""Fixed option-key column width on terminals wider than the limit."""

USAGE_PREFIX: str = "Usage: "
"""Literal prefix that marks an engine message as help rather than error."""

COMMAND_DEST: str = "command"
"""Key under which the selected subcommand name is stored."""

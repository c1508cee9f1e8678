"""Column width allocation for two-column help text.

Pure computation — callers resolve the terminal width and apply the
result to an engine.
"""

from __future__ import annotations

import math

from argwrap.core.models import ColumnWidths
from argwrap.utils.constants import PROPORTIONAL_LIMIT, TAB_INDENT, WIDE_KEY_WIDTH


def allocate_column_widths(terminal_width: int, tab_indent: int = TAB_INDENT) -> ColumnWidths:
    """Split *terminal_width* between the option-key and description columns.

    On a default 80-column display the usable width is 72, giving the
    historical 18/54 split.  Narrower outputs scale proportionally
    (25% / 75%); wider terminals keep an 18-column key and give the
    rest to descriptions.

    Examples
    --------
    >>> allocate_column_widths(100)
    ColumnWidths(key_width=18, description_width=74)
    >>> allocate_column_widths(80)
    ColumnWidths(key_width=18, description_width=54)
    """
    usable = terminal_width - tab_indent

    if usable <= PROPORTIONAL_LIMIT:
        key_width = math.floor(usable * 0.25)
        description_width = math.floor(usable * 0.75)
    else:
        key_width = WIDE_KEY_WIDTH
        description_width = usable - key_width

    # A terminal narrower than the indent still needs drawable columns.
    return ColumnWidths(
        key_width=max(key_width, 1),
        description_width=max(description_width, 1),
    )

"""Translate the engine's two-value parse result into a tagged outcome.

The engine reports help text and error text through one message
channel.  The only distinguishing signal is the literal ``"Usage: "``
prefix that every help message starts with; this module is the single
place that inspects it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from argwrap.core.models import HelpRequested, ParseFailed, ParseOutcome, Parsed
from argwrap.utils.constants import USAGE_PREFIX


def is_help_message(message: str) -> bool:
    """Return ``True`` when *message* is help text rather than an error."""
    return message.startswith(USAGE_PREFIX)


def classify_parse_result(
    arguments: Mapping[str, Any] | None,
    message: str | None,
) -> ParseOutcome:
    """Classify an engine ``parse()`` return value.

    * no arguments and a ``"Usage: "`` message → :class:`HelpRequested`
    * no arguments and any other message → :class:`ParseFailed`
    * anything else → :class:`Parsed`
    """
    if arguments is None and message is not None:
        if is_help_message(message):
            return HelpRequested(text=message)
        return ParseFailed(message=message)
    return Parsed(arguments=arguments)

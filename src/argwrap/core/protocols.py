"""Protocols (interfaces) for the argument-parsing engine.

The help-formatting layer depends ONLY on these protocols — never on a
concrete engine — so that the engine can be replaced as long as it
keeps the ``"Usage: "`` help-message convention.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol


class HelpPrinter(Protocol):
    """Renders usage and help text for one engine instance."""

    def generate_usage(self) -> str:
        """Return the engine's one-line ``Usage: ...`` summary."""
        ...  # pragma: no cover

    def generate_help(self) -> str:
        """Return the detailed option help, without the usage line."""
        ...  # pragma: no cover

    def generate_help_and_usage(self) -> str:
        """Return the combined block shown on help and error paths."""
        ...  # pragma: no cover

    def install_banner(self, builder: Callable[[HelpPrinter], str]) -> None:
        """Replace the renderer used by :meth:`generate_help_and_usage`."""
        ...  # pragma: no cover


class ArgumentEngine(Protocol):
    """Contract for argument-parsing engines.

    Any object that implements these members satisfies the protocol
    structurally (no explicit inheritance required).
    """

    @property
    def name(self) -> str: ...  # pragma: no cover

    @property
    def description(self) -> str: ...  # pragma: no cover

    @property
    def printer(self) -> HelpPrinter: ...  # pragma: no cover

    def set_colsz(self, key_width: int, description_width: int) -> None:
        """Set the option-key and description column widths."""
        ...  # pragma: no cover

    def set_name(self, name: str) -> None: ...  # pragma: no cover

    def set_description(self, description: str) -> None: ...  # pragma: no cover

    def add_argument(self, *args: Any, **kwargs: Any) -> Any: ...  # pragma: no cover

    def add_command(self, name: str, description: str = "") -> ArgumentEngine:
        """Register a subcommand and return its own engine instance."""
        ...  # pragma: no cover

    def action(
        self,
        callback: Callable[[dict[str, Any]], object],
    ) -> Callable[[dict[str, Any]], object]:
        """Run *callback* with the parsed arguments when this command is chosen."""
        ...  # pragma: no cover

    def parse(
        self,
        argv: Sequence[str] | None = None,
    ) -> tuple[Mapping[str, Any] | None, str | None]:
        """Parse *argv* without printing or exiting.

        Returns
        -------
        tuple
            ``(arguments, None)`` on success, ``(None, None)`` when a
            subcommand action consumed the result, or ``(None, message)``
            where *message* is help text (starting with ``"Usage: "``)
            or an error description.
        """
        ...  # pragma: no cover

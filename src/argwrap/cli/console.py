"""CLI console helpers with optional Rich support.

Writers resolve ``sys.stdout`` / ``sys.stderr`` at call time so that
redirections (and test capture) made after import are honoured.

This module intentionally avoids module-level imports of optional UI
dependencies so that help and error output remain functional even when
Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from argwrap.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(stream: TextIO) -> Any:
	"""Create a Rich console instance targeting *stream*."""
	console_class = _load_rich_console_class()
	return console_class(file=stream)


class _StreamWriter:
	"""Writer bound to a standard stream by name, with Rich fallback."""

	def __init__(self, name: str) -> None:
		self._name = name

	@property
	def stream(self) -> TextIO:
		stream: TextIO = getattr(sys, self._name)
		return stream

	def write(self, text: str) -> None:
		"""Write *text* verbatim: no markup, highlighting, or wrapping."""
		try:
			rich_console = get_rich_console(self.stream)
		except EnvironmentError:
			self.stream.write(text)
			return
		rich_console.out(text, end="", highlight=False)

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain ``print``."""
		try:
			rich_console = get_rich_console(self.stream)
		except EnvironmentError:
			print(*objects, file=self.stream)
			return
		rich_console.print(*objects)


stdout = _StreamWriter("stdout")
stderr = _StreamWriter("stderr")

"""Allow ``python -m argwrap`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m argwrap`` behaves identically to the ``argwrap``
console script.
"""

from __future__ import annotations

from argwrap.cli.app import cli

if __name__ == "__main__":
    cli()

"""CLI layer — stream output, process exits, and the ``argwrap`` tool.

This package is the outermost layer.  It may import from ``core``,
``infra``, and ``utils``, but no other layer may import from ``cli``.
It is the only layer that writes to the standard streams or ends the
process.
"""

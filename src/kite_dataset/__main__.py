"""Allow ``python -m kite_dataset`` invocation.

This module delegates to the console-script entry point so that
``python -m kite_dataset`` behaves identically to ``kite-dataset``.
"""

from __future__ import annotations

from kite_dataset.cli.app import cli

if __name__ == "__main__":
    cli()

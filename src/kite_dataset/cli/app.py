"""CLI application entry point for kite-dataset.

Wires the console, the runtime configuration and the command registry
into a :class:`~kite_dataset.cli.dispatcher.Dispatcher`.  All dispatch
policy lives in the dispatcher; this module only builds objects and
translates the result into a process exit.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from kite_dataset.cli import exit_codes
from kite_dataset.cli.commands import COMMANDS
from kite_dataset.cli.console import Console, configure_logging
from kite_dataset.cli.dispatcher import Dispatcher
from kite_dataset.cli.registry import CommandRegistry
from kite_dataset.config import RuntimeConfig


def build_registry(console: Console) -> CommandRegistry:
    """Register every command, in help-listing order."""
    registry = CommandRegistry(console)
    for command_class in COMMANDS:
        registry.register(command_class.name, command_class(console))
    return registry


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    console: Console | None = None,
    conf: RuntimeConfig | None = None,
) -> int:
    """Run the kite-dataset CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    console:
        Message sink.  Defaults to the Rich-backed console logger.
    conf:
        Runtime configuration.  Defaults to the ``KITE_*`` environment.

    Returns
    -------
    int
        OS process exit code.
    """
    if console is None:
        console = configure_logging()
    if conf is None:
        conf = RuntimeConfig.from_environ()

    dispatcher = Dispatcher(build_registry(console), console, conf=conf)
    return dispatcher.dispatch(sys.argv[1:] if argv is None else argv)


# ---------------------------------------------------------------------------
# Script-level boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point."""
    try:
        code = main()
    except KeyboardInterrupt:
        configure_logging().warning("Aborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    sys.exit(code)

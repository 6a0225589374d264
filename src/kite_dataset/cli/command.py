"""Command protocol for the kite-dataset CLI.

A command is a capability set, not a class hierarchy: anything with a
``name``, a ``description``, ``examples``, ``add_arguments`` and ``run``
can be registered.  Commands own their argument definitions, so the
parser and the help renderer both build from the same schema.

Usage::

    class EchoCommand:
        name = "echo"
        description = "Print the given words"
        examples = ("# print hello", "hello")

        def add_arguments(self, parser: argparse.ArgumentParser) -> None:
            parser.add_argument("words", nargs="+")

        def run(self, args: argparse.Namespace) -> int:
            print(" ".join(args.words))
            return 0
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kite_dataset.config import RuntimeConfig


@runtime_checkable
class Command(Protocol):
    """Protocol every registered command satisfies.

    Attributes:
        name: The subcommand name (e.g. ``"create"``).
        description: One-line summary shown in the generic help listing.
        examples: Usage examples for per-command help.  Lines starting
            with ``#`` are comments; other lines are prefixed with the
            program and command name.
    """

    name: str
    description: str
    examples: Sequence[str]

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Declare the command's options on *parser*."""
        ...  # pragma: no cover

    def run(self, args: argparse.Namespace) -> int:
        """Execute the command and return its exit status."""
        ...  # pragma: no cover


@runtime_checkable
class Configurable(Protocol):
    """Commands that accept the runtime configuration before ``run``."""

    def configure(self, conf: RuntimeConfig) -> None:
        ...  # pragma: no cover

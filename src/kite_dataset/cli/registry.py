"""Command registry for the kite-dataset CLI.

An ordered mapping from command name (or alias) to a command instance.
Registration order is the order of the generic help listing.  The
registry is built once at startup and only read afterwards.

Usage::

    registry = CommandRegistry(console)     # already holds "help"
    registry.register("create", CreateDatasetCommand(console))
    registry.resolve("create")
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from kite_dataset.cli.help import HELP_ALIASES, HelpCommand, HelpRenderer

if TYPE_CHECKING:
    from kite_dataset.cli.command import Command
    from kite_dataset.cli.console import Console


class CommandRegistry:
    """Unique-keyed, insertion-ordered command table.

    Parameters
    ----------
    console:
        Sink handed to the synthetic ``help`` command.
    """

    def __init__(self, console: Console) -> None:
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}
        self.help_renderer = HelpRenderer(self, console)
        self.register(HelpCommand.name, HelpCommand(self.help_renderer), *HELP_ALIASES)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, command: Command, *aliases: str) -> None:
        """Add *command* under *name* and *aliases*.

        Raises
        ------
        ValueError
            If the name or an alias is already taken.  This is a
            programming error and surfaces at startup.
        """
        for key in (name, *aliases):
            if key in self:
                raise ValueError(f"Command name already registered: {key}")
        self._commands[name] = command
        for alias in aliases:
            self._aliases[alias] = name

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def canonical(self, name: str) -> str | None:
        """Return the primary name for *name* or one of its aliases."""
        if name in self._commands:
            return name
        return self._aliases.get(name)

    def resolve(self, name: str) -> Command | None:
        primary = self.canonical(name)
        if primary is None:
            return None
        return self._commands[primary]

    def names(self) -> tuple[str, ...]:
        """Primary names in registration order, aliases excluded."""
        return tuple(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands or name in self._aliases

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

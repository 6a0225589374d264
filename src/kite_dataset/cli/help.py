"""Help rendering and the ``help`` command.

:class:`HelpRenderer` is the single routine behind every help path:
the ``help`` command, an empty invocation, and the dispatcher's help
fallback on rejected arguments.  It only reads the registry.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import TYPE_CHECKING

from kite_dataset.cli import exit_codes
from kite_dataset.cli.options import (
    DEFAULT_PROGRAM_NAME,
    GLOBAL_FLAGS,
    build_command_parser,
)

if TYPE_CHECKING:
    from kite_dataset.cli.command import Command
    from kite_dataset.cli.console import Console
    from kite_dataset.cli.registry import CommandRegistry

PROGRAM_DESCRIPTION = "Kite dataset management utility"

HELP_ALIASES: tuple[str, ...] = ("-h", "-help", "--help")

_INDENT = "    "


def format_examples(command: Command, program_name: str) -> str | None:
    """Render *command*'s examples as an argparse epilog."""
    if not command.examples:
        return None
    lines = ["examples:"]
    for example in command.examples:
        if example.startswith("#"):
            lines.append(f"  {example}")
        else:
            lines.append(f"  {program_name} {command.name} {example}".rstrip())
    return "\n".join(lines)


class HelpRenderer:
    """Produces usage text from the registry's current contents."""

    def __init__(self, registry: CommandRegistry, console: Console) -> None:
        self._registry = registry
        self._console = console

    def render(
        self,
        commands: Sequence[str] = (),
        *,
        program_name: str = DEFAULT_PROGRAM_NAME,
    ) -> int:
        """Print help for *commands*, or the generic listing if empty.

        Returns
        -------
        int
            :data:`exit_codes.GENERAL_ERROR` if a name is not
            registered, :data:`exit_codes.SUCCESS` otherwise.
        """
        if not commands:
            self._console.info("%s", self.generic_usage(program_name))
            return exit_codes.SUCCESS

        for name in dict.fromkeys(commands):
            command = self._registry.resolve(name)
            if command is None:
                self._console.error("Unknown command: %s", name)
                self._console.info("%s", self.generic_usage(program_name))
                return exit_codes.GENERAL_ERROR
            self._console.info("%s", self.command_usage(command, program_name))
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Text builders
    # ------------------------------------------------------------------

    def generic_usage(self, program_name: str) -> str:
        lines = [
            PROGRAM_DESCRIPTION,
            "",
            f"Usage: {program_name} [options] [command] [command options]",
            "",
            "  Options:",
            "",
        ]
        for flag in GLOBAL_FLAGS:
            if flag.hidden:
                continue
            lines.append(f"{_INDENT}{', '.join(flag.flags)}")
            lines.append(f"{_INDENT}{_INDENT}{flag.help}")

        lines += ["", "  Commands:", ""]
        for name in self._registry.names():
            command = self._registry.resolve(name)
            lines.append(f"{_INDENT}{name}")
            if command is not None and command.description:
                lines.append(f"{_INDENT}{_INDENT}{command.description}")

        example = next(
            (name for name in self._registry.names() if name != HelpCommand.name),
            HelpCommand.name,
        )
        lines += [
            "",
            "  Examples:",
            "",
            f"{_INDENT}# print information for {example}",
            f"{_INDENT}{program_name} help {example}",
            "",
            f"  See '{program_name} help <command>' for more information "
            "on a specific command.",
        ]
        return "\n".join(lines)

    @staticmethod
    def command_usage(command: Command, program_name: str) -> str:
        parser = build_command_parser(
            command,
            program_name,
            epilog=format_examples(command, program_name),
        )
        return parser.format_help().rstrip()


class HelpCommand:
    """``help [<command> ...]``: show usage for commands."""

    name = "help"
    description = "Retrieves details on the functions of other commands"
    examples: tuple[str, ...] = (
        "# print information for create",
        "create",
        "# print the generic usage listing",
        "",
    )

    def __init__(self, renderer: HelpRenderer) -> None:
        self._renderer = renderer

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "commands",
            nargs="*",
            metavar="<command>",
            help="Commands to show help for",
        )

    def run(self, args: argparse.Namespace) -> int:
        return self._renderer.render(
            getattr(args, "commands", None) or (),
            program_name=getattr(args, "program_name", DEFAULT_PROGRAM_NAME),
        )

"""Option parsing for the kite-dataset CLI.

The argument list is split in two at the command token: the first
token that is neither a top-level flag nor the value of
``--dollar-zero``.  The part before it is bound by the top-level
parser, the part after it by the selected command's own parser.  Both
land on one :class:`argparse.Namespace`, so every command sees the
global flags too.

argparse never prints or exits here: a rejected argument list comes
back as a :class:`ParsedInvocation` carrying a
:class:`~kite_dataset.cli.failures.Failure`.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from kite_dataset.cli.failures import Failure, FailureKind

if TYPE_CHECKING:
    from kite_dataset.cli.command import Command
    from kite_dataset.cli.registry import CommandRegistry

DEFAULT_PROGRAM_NAME = "kite-dataset"


# ---------------------------------------------------------------------------
# Top-level flags
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GlobalFlag:
    """One top-level option, shared by the parser and the help listing."""

    flags: tuple[str, ...]
    dest: str
    help: str
    default: object = False
    takes_value: bool = False
    hidden: bool = False


GLOBAL_FLAGS: tuple[GlobalFlag, ...] = (
    GlobalFlag(
        flags=("-v", "--verbose", "--debug"),
        dest="debug",
        help="Print extra debugging information",
    ),
    GlobalFlag(
        flags=("--version",),
        dest="print_version",
        help="Print Kite version and exit",
    ),
    GlobalFlag(
        flags=("--dollar-zero",),
        dest="program_name",
        help="A way for the runtime path to be passed in",
        default=DEFAULT_PROGRAM_NAME,
        takes_value=True,
        hidden=True,
    ),
)

_VALUED_FLAGS: frozenset[str] = frozenset(
    name for flag in GLOBAL_FLAGS if flag.takes_value for name in flag.flags
)


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Values of the top-level flags."""

    debug: bool = False
    print_version: bool = False
    program_name: str = DEFAULT_PROGRAM_NAME

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> GlobalOptions:
        return cls(
            debug=bool(getattr(namespace, "debug", False)),
            print_version=bool(getattr(namespace, "print_version", False)),
            program_name=getattr(namespace, "program_name", None) or DEFAULT_PROGRAM_NAME,
        )


@dataclass(frozen=True, slots=True)
class ParsedInvocation:
    """Result of parsing one argument list.

    ``command`` is always a registered primary name or ``None``.  When
    ``failure`` is set, ``args`` holds whatever was bound before the
    parser gave up.
    """

    options: GlobalOptions
    command: str | None
    args: argparse.Namespace
    failure: Failure | None = None


# ---------------------------------------------------------------------------
# argparse plumbing
# ---------------------------------------------------------------------------

class ArgumentParserError(Exception):
    """Raised in place of argparse's print-and-exit on bad input."""


class _RaisingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ArgumentParserError(message)


def build_global_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog=DEFAULT_PROGRAM_NAME,
        add_help=False,
        allow_abbrev=False,
    )
    for flag in GLOBAL_FLAGS:
        help_text = argparse.SUPPRESS if flag.hidden else flag.help
        if flag.takes_value:
            parser.add_argument(*flag.flags, dest=flag.dest, default=flag.default, help=help_text)
        else:
            parser.add_argument(*flag.flags, dest=flag.dest, action="store_true", help=help_text)
    return parser


def build_command_parser(
    command: Command,
    program_name: str = DEFAULT_PROGRAM_NAME,
    *,
    epilog: str | None = None,
) -> argparse.ArgumentParser:
    """Return a fresh parser declaring *command*'s options."""
    parser = _RaisingArgumentParser(
        prog=f"{program_name} [general options] {command.name}",
        description=command.description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    command.add_arguments(parser)
    return parser


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class OptionParser:
    """Parses process arguments against the registry's commands."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    def parse(self, argv: Sequence[str]) -> ParsedInvocation:
        tokens = list(argv)
        index = self._command_index(tokens)
        prefix = tokens if index is None else tokens[:index]

        namespace = argparse.Namespace()
        try:
            build_global_parser().parse_args(prefix, namespace=namespace)
        except ArgumentParserError as exc:
            command = None if index is None else self._registry.canonical(tokens[index])
            return self._failed(namespace, FailureKind.PARSE, str(exc), command)

        options = GlobalOptions.from_namespace(namespace)
        if index is None:
            return ParsedInvocation(options=options, command=None, args=namespace)

        token = tokens[index]
        name = self._registry.canonical(token)
        command_obj = self._registry.resolve(token)
        if name is None or command_obj is None:
            return self._failed(
                namespace,
                FailureKind.USAGE,
                f"Expected a command, got {token}",
                None,
            )

        namespace.command = name
        parser = build_command_parser(command_obj, options.program_name)
        try:
            parser.parse_args(tokens[index + 1:], namespace=namespace)
        except ArgumentParserError as exc:
            return self._failed(namespace, FailureKind.PARSE, str(exc), name)

        return ParsedInvocation(options=options, command=name, args=namespace)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _command_index(self, tokens: list[str]) -> int | None:
        """Position of the command token, or ``None`` if there is none."""
        skip_value = False
        for index, token in enumerate(tokens):
            if skip_value:
                skip_value = False
                continue
            if token in self._registry:
                return index
            if token.startswith("-"):
                skip_value = token in _VALUED_FLAGS
                continue
            return index
        return None

    @staticmethod
    def _failed(
        namespace: argparse.Namespace,
        kind: FailureKind,
        message: str,
        command: str | None,
    ) -> ParsedInvocation:
        return ParsedInvocation(
            options=GlobalOptions.from_namespace(namespace),
            command=command,
            args=namespace,
            failure=Failure(kind=kind, message=message, command=command),
        )

"""Dispatch: parse, select a command, run it, classify the outcome.

This module is the **sole error boundary** for command execution.  It
turns every outcome into an exit code and at most one console message
(plus a traceback under ``--debug``):

* missing command: message, exit 1, no help;
* rejected arguments: help fallback (see :meth:`Dispatcher._recover`);
* ``--version``: version string, exit 0, nothing executed;
* no command: generic help, exit 1;
* ``help``: the help command's own status;
* anything else: the command's own status, or exit 1 if it raised.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from kite_dataset.cli import exit_codes
from kite_dataset.cli.command import Command, Configurable
from kite_dataset.cli.console import enable_debug_logging
from kite_dataset.cli.failures import Failure, FailureKind, Outcome, classify
from kite_dataset.cli.help import HELP_ALIASES, HelpCommand
from kite_dataset.cli.options import OptionParser, ParsedInvocation
from kite_dataset.version import resolve_version

if TYPE_CHECKING:
    from kite_dataset.cli.console import Console
    from kite_dataset.cli.registry import CommandRegistry
    from kite_dataset.config import RuntimeConfig

logger = logging.getLogger(__name__)

HELP_TOKENS: frozenset[str] = frozenset((*HELP_ALIASES, HelpCommand.name))

VersionResolver = Callable[..., str]


class Dispatcher:
    """Routes one argument list to a command and returns an exit code.

    Parameters
    ----------
    registry:
        The fixed command table.
    console:
        Sink for every user-visible message.
    conf:
        Runtime configuration injected into configurable commands.
    version_resolver:
        Called as ``version_resolver(console, debug=...)`` for
        ``--version``.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        console: Console,
        *,
        conf: RuntimeConfig | None = None,
        version_resolver: VersionResolver = resolve_version,
    ) -> None:
        self._registry = registry
        self._console = console
        self._conf = conf
        self._resolve_version = version_resolver
        self._parser = OptionParser(registry)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch(self, argv: Sequence[str]) -> int:
        args = list(argv)
        invocation = self._parser.parse(args)
        if invocation.failure is not None:
            return self._recover(invocation, invocation.failure, args)

        options = invocation.options

        if options.print_version:
            version = self._resolve_version(self._console, debug=options.debug)
            self._console.info('Kite version "%s"', version)
            return exit_codes.SUCCESS

        if options.debug:
            enable_debug_logging()

        if invocation.command is None:
            self._render_help((), options.program_name)
            return exit_codes.GENERAL_ERROR

        command = self._registry.resolve(invocation.command)
        if command is None:
            self._render_help((), options.program_name)
            return exit_codes.GENERAL_ERROR

        if invocation.command == HelpCommand.name:
            return command.run(invocation.args)

        outcome = self._execute(command, invocation.args)
        if isinstance(outcome, Failure):
            return self._report(outcome, debug=options.debug)
        return outcome

    # ------------------------------------------------------------------
    # Parse failures
    # ------------------------------------------------------------------

    def _recover(
        self,
        invocation: ParsedInvocation,
        failure: Failure,
        args: list[str],
    ) -> int:
        """Apply the help fallback to a rejected argument list."""
        if failure.kind is FailureKind.USAGE:
            self._console.error("%s", failure.message)
            return exit_codes.GENERAL_ERROR

        program_name = invocation.options.program_name
        targets = (failure.command,) if failure.command else ()

        # Only the command name was given: its required arguments are missing.
        if len(args) == 1:
            self._render_help(targets, program_name)
            return exit_codes.GENERAL_ERROR

        if any(arg in HELP_TOKENS for arg in args):
            self._render_help(targets, program_name)
            return exit_codes.SUCCESS

        self._console.error("%s", failure.message)
        return exit_codes.GENERAL_ERROR

    def _render_help(self, commands: Sequence[str], program_name: str) -> None:
        self._registry.help_renderer.render(commands, program_name=program_name)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(self, command: Command, args: argparse.Namespace) -> Outcome:
        logger.debug("Running command %s", command.name)
        try:
            if self._conf is not None and isinstance(command, Configurable):
                command.configure(self._conf)
            return command.run(args)
        except Exception as exc:  # noqa: BLE001
            return classify(exc)

    def _report(self, failure: Failure, *, debug: bool) -> int:
        if debug:
            self._console.error("%s", failure.kind.label, exc_info=failure.cause)
        elif failure.kind is FailureKind.NOT_FOUND:
            self._console.error("%s", failure.message)
        else:
            self._console.error("%s: %s", failure.kind.label, failure.message)

        if failure.hint:
            self._console.warning("Hint: %s", failure.hint)
        return exit_codes.GENERAL_ERROR

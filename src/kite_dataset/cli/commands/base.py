"""Shared base classes for kite-dataset commands.

:class:`BaseCommand` carries the console and the output helper.
:class:`DatasetCommand` adds the runtime configuration (it satisfies
:class:`~kite_dataset.cli.command.Configurable`) and lazy access to the
dataset backend.
"""

from __future__ import annotations

import argparse
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path
from urllib.parse import urlsplit
from typing import TYPE_CHECKING, ClassVar

from kite_dataset.config import RuntimeConfig
from kite_dataset.core.uris import dataset_uri
from kite_dataset.exceptions import ArgumentError, DatasetIOError
from kite_dataset.infra.backends import load_backend

if TYPE_CHECKING:
    from kite_dataset.cli.console import Console
    from kite_dataset.core.protocols import DatasetBackend

BackendFactory = Callable[[RuntimeConfig], "DatasetBackend"]

STDOUT_PATH = "-"


class BaseCommand(ABC):
    """Abstract base class for registered commands."""

    name: ClassVar[str]
    description: ClassVar[str]
    examples: ClassVar[tuple[str, ...]] = ()

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments to the parser."""

    @abstractmethod
    def run(self, args: argparse.Namespace) -> int:
        """Execute the command's logic."""

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @staticmethod
    def add_output_argument(parser: argparse.ArgumentParser, what: str) -> None:
        parser.add_argument(
            "-o",
            "--output",
            metavar="<file>",
            help=f"Save {what} to a file instead of printing it",
        )

    def output(self, content: str, path: str | None) -> None:
        """Print *content*, or write it to *path*.

        Raises
        ------
        DatasetIOError
            If *path* cannot be written.
        """
        if path is None or path == STDOUT_PATH:
            self.console.info("%s", content)
            return
        target = Path(path)
        try:
            target.write_text(content + "\n", encoding="utf-8")
        except OSError as exc:
            raise DatasetIOError(f"Cannot write {target}: {exc.strerror or exc}") from exc


class DatasetCommand(BaseCommand):
    """A command that talks to the dataset backend.

    Parameters
    ----------
    console:
        Message sink.
    backend_factory:
        Builds the backend from the runtime configuration.  Defaults to
        entry-point discovery.
    """

    def __init__(
        self,
        console: Console,
        backend_factory: BackendFactory = load_backend,
    ) -> None:
        super().__init__(console)
        self._backend_factory = backend_factory
        self._conf = RuntimeConfig()

    def configure(self, conf: RuntimeConfig) -> None:
        self._conf = conf

    @property
    def conf(self) -> RuntimeConfig:
        return self._conf

    def backend(self) -> DatasetBackend:
        return self._backend_factory(self._conf)

    # ------------------------------------------------------------------
    # Dataset names
    # ------------------------------------------------------------------

    @staticmethod
    def add_namespace_argument(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--namespace",
            metavar="<namespace>",
            help="Namespace for bare dataset names (default: KITE_DEFAULT_NAMESPACE or 'default')",
        )

    def uri_for(self, name: str, args: argparse.Namespace) -> str:
        namespace = getattr(args, "namespace", None) or self._conf.namespace
        return dataset_uri(name, namespace)

    def report_added(self, count: int, target: str) -> None:
        self.console.info('Added %d records to "%s"', count, target)


def parse_properties(pairs: Iterable[str] | None) -> dict[str, str]:
    """Turn ``key=value`` strings from ``--set`` into a dict.

    Raises
    ------
    ArgumentError
        If a pair has no ``=`` or an empty key.
    """
    properties: dict[str, str] = {}
    for pair in pairs or ():
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ArgumentError(f"Invalid property: {pair}", hint="Use --set key=value")
        properties[key.strip()] = value.strip()
    return properties


def check_writers(num_writers: int | None) -> None:
    """Reject a non-positive ``--num-writers`` value."""
    if num_writers is not None and num_writers < 1:
        raise ArgumentError(f"Number of writers must be positive: {num_writers}")


def require_local_path(path: str, what: str) -> None:
    """Check that a local (scheme-less) *path* exists.

    A one-letter scheme is a Windows drive (``C:/data``), not a URI.

    Raises
    ------
    ArgumentError
        If *path* has no URI scheme and does not exist.
    """
    if len(urlsplit(path).scheme) > 1:
        return
    if not Path(path).exists():
        raise ArgumentError(f"{what} path does not exist: {path}")

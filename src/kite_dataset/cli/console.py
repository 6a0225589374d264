"""Console sink and logging setup for the CLI layer.

Everything the user sees goes through a :class:`Console`: a leveled,
``%``-formatting message sink.  The dispatcher, the help renderer and
the commands receive it from the caller and never write to stdout or
stderr by name, which keeps them testable with a recording sink.

In production the sink is a :class:`logging.Logger` written through Rich:
messages below WARNING go to stdout verbatim, warnings and errors to
stderr through a :class:`~rich.logging.RichHandler`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from rich.console import Console as RichConsole
from rich.highlighter import NullHighlighter
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "kite_dataset"
CONSOLE_LOGGER_NAME = "kite_dataset.console"


class Console(Protocol):
    """Leveled message sink.  :class:`logging.Logger` satisfies it."""

    def info(self, msg: str, *args: object, **kwargs: Any) -> None:
        ...  # pragma: no cover

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None:
        ...  # pragma: no cover

    def error(self, msg: str, *args: object, **kwargs: Any) -> None:
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

class _LevelRangeFilter(logging.Filter):
    """Pass records with ``low <= levelno < high``."""

    def __init__(self, low: int, high: int) -> None:
        super().__init__()
        self._low = low
        self._high = high

    def filter(self, record: logging.LogRecord) -> bool:
        return self._low <= record.levelno < self._high


def _rich_handler(*, stderr: bool, **options: Any) -> RichHandler:
    handler = RichHandler(
        console=RichConsole(stderr=stderr),
        rich_tracebacks=True,
        markup=False,
        highlighter=NullHighlighter(),
        **options,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _message_handler(*, stderr: bool, low: int, high: int) -> RichHandler:
    """Message-only handler: no time, level or source columns."""
    handler = _rich_handler(
        stderr=stderr,
        show_time=False,
        show_level=False,
        show_path=False,
    )
    handler.addFilter(_LevelRangeFilter(low, high))
    return handler


class _PayloadHandler(logging.Handler):
    """Writes each message verbatim: no wrapping, padding or highlighting.

    Command output (schemas, configs, records, help) is often redirected
    to a file, so it must come out byte for byte.
    """

    def __init__(self, console: RichConsole, *, high: int) -> None:
        super().__init__()
        self._console = console
        self.setFormatter(logging.Formatter("%(message)s"))
        self.addFilter(_LevelRangeFilter(logging.NOTSET, high))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._console.out(self.format(record), highlight=False)
        except Exception:  # noqa: BLE001
            self.handleError(record)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def configure_logging() -> logging.Logger:
    """Attach Rich handlers and return the console logger.

    Safe to call more than once; handlers are only attached the first
    time.  The package logger starts at WARNING; ``--debug`` lowers it
    through :func:`enable_debug_logging`.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        package_logger.addHandler(_rich_handler(stderr=True, show_path=False))
        package_logger.setLevel(logging.WARNING)

    console_logger = logging.getLogger(CONSOLE_LOGGER_NAME)
    if not console_logger.handlers:
        console_logger.addHandler(
            _PayloadHandler(RichConsole(), high=logging.WARNING),
        )
        console_logger.addHandler(
            _message_handler(stderr=True, low=logging.WARNING, high=logging.CRITICAL + 1),
        )
        console_logger.propagate = False
    console_logger.setLevel(logging.INFO)
    return console_logger


def enable_debug_logging() -> None:
    """Lower the package logger to DEBUG for the rest of the process."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(logging.DEBUG)

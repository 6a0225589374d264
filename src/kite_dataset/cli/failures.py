"""Explicit failure values for parse and execution outcomes.

The option parser and the dispatcher never let an exception decide
control flow on their own: parse problems are returned as a
:class:`Failure`, and exceptions escaping a command are converted into
one by :func:`classify` at the dispatcher boundary.

An execution outcome is therefore ``int | Failure`` (see
:data:`Outcome`): an integer is the command's own exit status, a
:class:`Failure` is always reported and mapped to exit code 1.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from kite_dataset.exceptions import (
    DatasetIOError,
    DatasetNotFoundError,
    KiteError,
    StateError,
    ValidationError,
)


class FailureKind(enum.Enum):
    """What went wrong, and how it is labelled on the console."""

    USAGE = "Usage error"
    PARSE = "Parse error"
    ARGUMENT = "Argument error"
    STATE = "State error"
    VALIDATION = "Validation error"
    NOT_FOUND = "Cannot find dataset"
    IO = "IO error"
    UNKNOWN = "Unknown error"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """A classified failure.

    Attributes
    ----------
    kind : FailureKind
        Category used for the message prefix.
    message : str
        One-line, human-readable description.
    cause : BaseException | None
        The exception the failure was built from, for full diagnostics.
    hint : str | None
        Optional actionable guidance.
    command : str | None
        For parse failures, the command that was recognised (if any).
    """

    kind: FailureKind
    message: str
    cause: BaseException | None = None
    hint: str | None = None
    command: str | None = None


Outcome = Union[int, Failure]


# Order matters: ValidationError is also a ValueError.
_CLASSIFICATION: tuple[tuple[type[BaseException] | tuple[type[BaseException], ...], FailureKind], ...] = (
    (ValidationError, FailureKind.VALIDATION),
    (DatasetNotFoundError, FailureKind.NOT_FOUND),
    ((DatasetIOError, OSError), FailureKind.IO),
    (ValueError, FailureKind.ARGUMENT),
    (StateError, FailureKind.STATE),
)


def classify(exc: Exception) -> Failure:
    """Convert an exception raised by a command into a :class:`Failure`."""
    kind = FailureKind.UNKNOWN
    for exc_types, candidate in _CLASSIFICATION:
        if isinstance(exc, exc_types):
            kind = candidate
            break

    hint = exc.hint if isinstance(exc, KiteError) else None
    return Failure(
        kind=kind,
        message=str(exc) or type(exc).__name__,
        cause=exc,
        hint=hint,
    )

"""Custom exception hierarchy for kite-dataset.

Every error a command raises on purpose must inherit from
:class:`KiteError`.  The dispatcher classifies exceptions by kind (see
:mod:`kite_dataset.cli.failures`); the kind only changes the message
prefix, never the exit code.

Hierarchy
---------
KiteError
├── ArgumentError         (also ValueError)
├── StateError            (also RuntimeError)
├── ValidationError       (also ValueError)
├── DatasetNotFoundError
└── DatasetIOError
"""

from __future__ import annotations


class KiteError(Exception):
    """Base exception for all kite-dataset errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Caller mistakes -------------------------------------------------------

class ArgumentError(KiteError, ValueError):
    """Raised when a command receives an argument it cannot use."""


class ValidationError(KiteError, ValueError):
    """Raised when a name, schema or descriptor fails validation."""


# --- Runtime state ---------------------------------------------------------

class StateError(KiteError, RuntimeError):
    """Raised when the environment is not in a state a command can run in."""


# --- Datasets --------------------------------------------------------------

class DatasetNotFoundError(KiteError):
    """Raised when a dataset does not exist.

    The message already names the dataset (``No such dataset: <name>``),
    so the dispatcher prints it without a prefix.
    """


class DatasetIOError(KiteError):
    """Raised when reading or writing dataset data or local files fails."""

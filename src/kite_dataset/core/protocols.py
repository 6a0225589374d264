"""Protocols (interfaces) consumed by the command layer.

The dataset library itself lives outside this project.  Commands depend
ONLY on :class:`DatasetBackend`; a concrete backend is discovered at
run time by :func:`kite_dataset.infra.backends.load_backend`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from kite_dataset.core.models import CopyTask, DatasetDescriptor, ImportTask, SchemaRequest


class DatasetBackend(Protocol):
    """Contract for dataset storage backends.

    Implementations report problems with
    :class:`~kite_dataset.exceptions.KiteError` subclasses; a missing
    dataset must raise
    :class:`~kite_dataset.exceptions.DatasetNotFoundError` (or return
    ``False`` from :meth:`delete`).
    """

    def create(self, uri: str, descriptor: DatasetDescriptor) -> None:
        """Create an empty dataset."""
        ...  # pragma: no cover

    def update(self, uri: str, descriptor: DatasetDescriptor) -> None:
        """Replace the descriptor fields that are set on *descriptor*."""
        ...  # pragma: no cover

    def delete(self, uri: str) -> bool:
        """Delete a dataset or view; ``False`` if it did not exist."""
        ...  # pragma: no cover

    def describe(self, uri: str) -> str:
        """Human-readable description of a dataset's metadata."""
        ...  # pragma: no cover

    def schema(self, uri: str) -> dict[str, Any]:
        ...  # pragma: no cover

    def read(self, uri: str, limit: int) -> Iterable[Any]:
        """Yield at most *limit* records."""
        ...  # pragma: no cover

    def copy(self, task: CopyTask) -> int:
        """Copy records and return how many were written."""
        ...  # pragma: no cover

    def import_records(self, task: ImportTask) -> int:
        """Import records and return how many were written."""
        ...  # pragma: no cover

    def infer_schema(self, request: SchemaRequest) -> dict[str, Any]:
        ...  # pragma: no cover

    def merge_schemas(self, schemas: Sequence[dict[str, Any]]) -> dict[str, Any]:
        ...  # pragma: no cover

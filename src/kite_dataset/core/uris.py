"""Dataset name to URI resolution."""

from __future__ import annotations

import re

from kite_dataset.config import DEFAULT_NAMESPACE
from kite_dataset.exceptions import ArgumentError, ValidationError

URI_PREFIXES: tuple[str, ...] = ("dataset:", "view:")

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def is_dataset_uri(value: str) -> bool:
    return value.startswith(URI_PREFIXES)


def dataset_uri(name: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Return the URI for *name*.

    ``dataset:`` and ``view:`` URIs are returned unchanged; bare names
    resolve to ``dataset:hive:<namespace>/<name>``.

    Raises
    ------
    ArgumentError
        If *name* is empty.
    ValidationError
        If *name* or *namespace* is not alphanumeric (plus ``_``).
    """
    stripped = name.strip()
    if not stripped:
        raise ArgumentError("Dataset name must not be empty.")
    if is_dataset_uri(stripped):
        return stripped
    if not _NAME_PATTERN.match(stripped):
        raise ValidationError(f"Dataset name {stripped} is not alphanumeric (plus '_')")
    if not _NAME_PATTERN.match(namespace):
        raise ValidationError(f"Namespace {namespace} is not alphanumeric (plus '_')")
    return f"dataset:hive:{namespace}/{stripped}"

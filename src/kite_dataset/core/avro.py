"""Loading Avro record schemas and other JSON descriptors from disk.

Schemas are kept as plain JSON-compatible dicts; nothing here depends
on an Avro library.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from kite_dataset.exceptions import DatasetIOError, ValidationError


def load_json(path: str | Path) -> Any:
    """Read and decode a JSON document.

    Raises
    ------
    DatasetIOError
        If the file cannot be read.
    ValidationError
        If the content is not valid JSON.
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetIOError(f"Cannot read {source}: {exc.strerror or exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid JSON in {source}: {exc.msg}") from exc


def load_schema(path: str | Path) -> dict[str, Any]:
    """Read an Avro record schema.

    Raises
    ------
    DatasetIOError
        If the file cannot be read.
    ValidationError
        If the document is not an Avro record with a ``fields`` list.
    """
    schema = load_json(path)
    if not isinstance(schema, dict) or schema.get("type") != "record":
        raise ValidationError(f"Schema in {path} is not a record schema")
    fields = schema.get("fields")
    if not isinstance(fields, list):
        raise ValidationError(f"Schema in {path} has no field list")
    return schema


def field_names(schema: dict[str, Any]) -> tuple[str, ...]:
    """Top-level field names of a record schema, in declaration order."""
    return tuple(
        str(entry["name"])
        for entry in schema.get("fields", [])
        if isinstance(entry, dict) and "name" in entry
    )


def dump_schema(schema: Any, *, minimize: bool = False) -> str:
    """Serialise a schema or descriptor for output."""
    if minimize:
        return json.dumps(schema, separators=(",", ":"))
    return json.dumps(schema, indent=2)

"""Domain models for kite-dataset.

All models are **frozen** dataclasses: immutable value objects that
commands build from parsed options and hand to a
:class:`~kite_dataset.core.protocols.DatasetBackend`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DatasetDescriptor:
    """What a dataset looks like: schema, storage format and layout."""

    schema: dict[str, Any] | None = None
    """Avro record schema, or ``None`` to keep the current one."""

    format: str | None = None
    """Storage format (``avro`` or ``parquet``)."""

    partition_strategy: list[dict[str, Any]] | None = None

    column_mapping: list[dict[str, Any]] | None = None

    location: str | None = None
    """Explicit storage location, or ``None`` for the repository default."""

    properties: Mapping[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Partition strategies and column mappings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PartitionField:
    """One partitioner, parsed from ``source:type`` or ``source:hash[N]``."""

    source: str
    type: str
    name: str
    buckets: int | None = None

    def to_json(self) -> dict[str, Any]:
        entry: dict[str, Any] = {"name": self.name, "source": self.source, "type": self.type}
        if self.buckets is not None:
            entry["buckets"] = self.buckets
        return entry


@dataclass(frozen=True, slots=True)
class ColumnMapping:
    """One field-to-column mapping, parsed from ``source:...``."""

    source: str
    type: str
    family: str | None = None
    qualifier: str | None = None

    def to_json(self) -> dict[str, Any]:
        entry: dict[str, Any] = {"source": self.source, "type": self.type}
        if self.family is not None:
            entry["family"] = self.family
        if self.qualifier is not None:
            entry["qualifier"] = self.qualifier
        return entry


# ---------------------------------------------------------------------------
# Data movement requests
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CopyTask:
    """Copy (and optionally transform) records between datasets."""

    source: str
    target: str
    transform: str | None = None
    """Import path of a record transform (``module:function``)."""

    num_writers: int | None = None
    compact: bool = True
    overwrite: bool = False


@dataclass(frozen=True, slots=True)
class ImportTask:
    """Load records from files into a dataset."""

    format: str
    """Source format: ``csv``, ``json``, ``inputformat`` or ``tar``."""

    path: str
    target: str
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SchemaRequest:
    """Infer a schema from a data sample or a class."""

    kind: str
    """``csv``, ``json`` or ``object``."""

    source: str
    record_name: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

"""Partition strategy and column mapping builders.

Pure functions: they parse ``field:type`` style specifications and
check them against a record schema's fields.  Syntax problems raise
:class:`ArgumentError`; specifications that parse but do not fit the
schema raise :class:`ValidationError`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any

from kite_dataset.core.models import ColumnMapping, PartitionField
from kite_dataset.exceptions import ArgumentError, ValidationError

PARTITION_TYPES: tuple[str, ...] = (
    "identity",
    "hash",
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "provided",
)

# Time partitioners are named after their unit; the others after the source.
_TIME_TYPES = frozenset(("year", "month", "day", "hour", "minute"))

_PARTITION_PATTERN = re.compile(
    r"^(?P<source>[A-Za-z_][A-Za-z0-9_]*):(?P<type>[a-z]+)(?:\[(?P<buckets>\d+)\])?$"
)


# ---------------------------------------------------------------------------
# Partition strategies
# ---------------------------------------------------------------------------

def parse_partition_field(spec: str) -> PartitionField:
    """Parse ``source:type`` or ``source:hash[N]``.

    Raises
    ------
    ArgumentError
        If *spec* is malformed or names an unknown partition type.
    """
    match = _PARTITION_PATTERN.match(spec.strip())
    if match is None:
        raise ArgumentError(
            f"Invalid partition: {spec}",
            hint="Use field:type, for example created_at:year or id:hash[16]",
        )

    source = match.group("source")
    kind = match.group("type")
    raw_buckets = match.group("buckets")

    if kind not in PARTITION_TYPES:
        raise ArgumentError(
            f"Unknown partition type: {kind}",
            hint=f"Supported types: {', '.join(PARTITION_TYPES)}",
        )
    if raw_buckets is not None and kind != "hash":
        raise ArgumentError(f"Only hash partitions take a bucket count: {spec}")

    if kind == "hash":
        name = f"{source}_hash"
    elif kind == "identity":
        name = f"{source}_copy"
    elif kind in _TIME_TYPES:
        name = kind
    else:
        name = source

    return PartitionField(
        source=source,
        type=kind,
        name=name,
        buckets=int(raw_buckets) if raw_buckets is not None else None,
    )


def build_partition_strategy(
    specs: Iterable[str],
    schema_fields: Sequence[str],
) -> list[dict[str, Any]]:
    """Build a JSON partition strategy from ``field:type`` specs.

    Raises
    ------
    ArgumentError
        If a spec is malformed.
    ValidationError
        If a source field is not in the schema, a hash partition has no
        positive bucket count, or two partitions share a name.
    """
    known = set(schema_fields)
    strategy: list[dict[str, Any]] = []
    seen: set[str] = set()

    for spec in specs:
        partition = parse_partition_field(spec)
        if partition.type != "provided" and partition.source not in known:
            raise ValidationError(f"Partition source field not found in schema: {partition.source}")
        if partition.type == "hash" and not partition.buckets:
            raise ValidationError(f"Hash partition requires a positive bucket count: {spec}")
        if partition.name in seen:
            raise ValidationError(f"Duplicate partition name: {partition.name}")
        seen.add(partition.name)
        strategy.append(partition.to_json())

    return strategy


# ---------------------------------------------------------------------------
# Column mappings
# ---------------------------------------------------------------------------

def parse_column_mapping(spec: str) -> ColumnMapping:
    """Parse one mapping.

    * ``field:key`` -- part of the storage key
    * ``field:version`` -- optimistic-concurrency version column
    * ``field:family:qualifier`` -- a single column
    * ``field:family`` -- map or record fields as columns of *family*

    Raises
    ------
    ArgumentError
        If *spec* does not have two or three non-empty parts.
    """
    parts = spec.strip().split(":")
    if len(parts) not in (2, 3) or not all(parts):
        raise ArgumentError(
            f"Invalid column mapping: {spec}",
            hint="Use field:key, field:version, field:family or field:family:qualifier",
        )

    source = parts[0]
    if len(parts) == 3:
        return ColumnMapping(source=source, type="column", family=parts[1], qualifier=parts[2])
    if parts[1] in ("key", "version"):
        return ColumnMapping(source=source, type=parts[1])
    return ColumnMapping(source=source, type="keyAsColumn", family=parts[1])


def build_column_mapping(
    specs: Iterable[str],
    schema_fields: Sequence[str],
    partition_strategy: Sequence[dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Build a JSON column mapping from mapping specs.

    Raises
    ------
    ArgumentError
        If a spec is malformed.
    ValidationError
        If a source field is not in the schema, more than one version
        field is given, or a key field is not a partition source.
    """
    known = set(schema_fields)
    partition_sources = (
        {str(entry.get("source")) for entry in partition_strategy}
        if partition_strategy is not None
        else None
    )

    mapping: list[dict[str, Any]] = []
    versions = 0
    for spec in specs:
        column = parse_column_mapping(spec)
        if column.source not in known:
            raise ValidationError(f"Mapped field not found in schema: {column.source}")
        if column.type == "version":
            versions += 1
            if versions > 1:
                raise ValidationError("Only one version field can be mapped")
        if (
            column.type == "key"
            and partition_sources is not None
            and column.source not in partition_sources
        ):
            raise ValidationError(f"Key field is not a partition source: {column.source}")
        mapping.append(column.to_json())

    return mapping

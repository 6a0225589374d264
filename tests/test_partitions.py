"""Tests for partition strategy and column mapping builders (core/partitions.py)."""

from __future__ import annotations

import pytest

from kite_dataset.core.partitions import (
    build_column_mapping,
    build_partition_strategy,
    parse_column_mapping,
    parse_partition_field,
)
from kite_dataset.exceptions import ArgumentError, ValidationError

FIELDS = ("id", "email", "username", "created_at", "preferences")


# ---------------------------------------------------------------------------
# parse_partition_field
# ---------------------------------------------------------------------------

class TestParsePartitionField:
    @pytest.mark.parametrize(
        ("spec", "name"),
        [
            ("email:identity", "email_copy"),
            ("email:hash[16]", "email_hash"),
            ("created_at:year", "year"),
            ("created_at:minute", "minute"),
            ("region:provided", "region"),
        ],
    )
    def test_names(self, spec: str, name: str) -> None:
        assert parse_partition_field(spec).name == name

    def test_bucket_count(self) -> None:
        assert parse_partition_field("email:hash[16]").buckets == 16
        assert parse_partition_field("email:identity").buckets is None

    @pytest.mark.parametrize("spec", ["email", "email:", ":year", "email:hash[x]", "1st:year"])
    def test_malformed(self, spec: str) -> None:
        with pytest.raises(ArgumentError, match="Invalid partition"):
            parse_partition_field(spec)

    def test_unknown_type(self) -> None:
        with pytest.raises(ArgumentError, match="Unknown partition type: week") as exc_info:
            parse_partition_field("created_at:week")
        assert "identity" in exc_info.value.hint

    def test_buckets_only_for_hash(self) -> None:
        with pytest.raises(ArgumentError, match="Only hash"):
            parse_partition_field("created_at:year[4]")


# ---------------------------------------------------------------------------
# build_partition_strategy
# ---------------------------------------------------------------------------

class TestBuildPartitionStrategy:
    def test_builds_in_order(self) -> None:
        strategy = build_partition_strategy(
            ["email:hash[16]", "email:identity", "created_at:year"], FIELDS,
        )
        assert strategy == [
            {"name": "email_hash", "source": "email", "type": "hash", "buckets": 16},
            {"name": "email_copy", "source": "email", "type": "identity"},
            {"name": "year", "source": "created_at", "type": "year"},
        ]

    def test_unknown_source_field(self) -> None:
        with pytest.raises(ValidationError, match="not found in schema: missing"):
            build_partition_strategy(["missing:identity"], FIELDS)

    def test_provided_needs_no_schema_field(self) -> None:
        assert build_partition_strategy(["region:provided"], FIELDS)[0]["source"] == "region"

    @pytest.mark.parametrize("spec", ["email:hash", "email:hash[0]"])
    def test_hash_requires_buckets(self, spec: str) -> None:
        with pytest.raises(ValidationError, match="bucket count"):
            build_partition_strategy([spec], FIELDS)

    def test_duplicate_name(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate partition name: year"):
            build_partition_strategy(["created_at:year", "id:year"], FIELDS)


# ---------------------------------------------------------------------------
# Column mappings
# ---------------------------------------------------------------------------

class TestParseColumnMapping:
    def test_key(self) -> None:
        assert parse_column_mapping("email:key").to_json() == {"source": "email", "type": "key"}

    def test_version(self) -> None:
        assert parse_column_mapping("created_at:version").type == "version"

    def test_column(self) -> None:
        mapping = parse_column_mapping("username:u:username")
        assert (mapping.type, mapping.family, mapping.qualifier) == ("column", "u", "username")

    def test_key_as_column(self) -> None:
        mapping = parse_column_mapping("preferences:prefs")
        assert (mapping.type, mapping.family) == ("keyAsColumn", "prefs")

    @pytest.mark.parametrize("spec", ["email", "email::x", "a:b:c:d", ":key"])
    def test_malformed(self, spec: str) -> None:
        with pytest.raises(ArgumentError, match="Invalid column mapping"):
            parse_column_mapping(spec)


class TestBuildColumnMapping:
    def test_builds_in_order(self) -> None:
        mapping = build_column_mapping(["email:key", "username:u:username"], FIELDS)
        assert [entry["source"] for entry in mapping] == ["email", "username"]

    def test_unknown_field(self) -> None:
        with pytest.raises(ValidationError, match="not found in schema: nope"):
            build_column_mapping(["nope:key"], FIELDS)

    def test_single_version_field(self) -> None:
        with pytest.raises(ValidationError, match="one version field"):
            build_column_mapping(["id:version", "created_at:version"], FIELDS)

    def test_key_must_be_partition_source(self) -> None:
        strategy = [{"name": "id_hash", "source": "id", "type": "hash", "buckets": 4}]
        with pytest.raises(ValidationError, match="not a partition source: email"):
            build_column_mapping(["email:key"], FIELDS, strategy)

    def test_key_matches_partition_source(self) -> None:
        strategy = [{"name": "email_hash", "source": "email", "type": "hash", "buckets": 4}]
        assert build_column_mapping(["email:key"], FIELDS, strategy) == [
            {"source": "email", "type": "key"},
        ]

"""End-to-end tests through ``main()`` with the real command table.

Entry-point discovery is patched wherever a command would reach a backend.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kite_dataset.cli import exit_codes
from kite_dataset.cli.app import build_registry, main
from kite_dataset.cli.commands import COMMANDS
from kite_dataset.cli.help import PROGRAM_DESCRIPTION
from kite_dataset.config import RuntimeConfig

from conftest import RecordingConsole

COMMAND_NAMES = [command.name for command in COMMANDS]


def _run(console: RecordingConsole, *argv: str, conf: RuntimeConfig | None = None) -> int:
    return main(list(argv), console=console, conf=conf or RuntimeConfig())


class TestCommandTable:
    def test_listing_order(self, console: RecordingConsole) -> None:
        assert build_registry(console).names() == (
            "help",
            "create",
            "copy",
            "transform",
            "update",
            "delete",
            "schema",
            "info",
            "show",
            "merge-schemas",
            "obj-schema",
            "inputformat-import",
            "csv-schema",
            "csv-import",
            "json-schema",
            "json-import",
            "partition-config",
            "mapping-config",
            "log4j-config",
            "flume-config",
            "tar-import",
        )

    def test_generic_help_lists_every_command(self, console: RecordingConsole) -> None:
        assert _run(console, "help") == exit_codes.SUCCESS
        for name in COMMAND_NAMES:
            assert f"    {name}\n" in console.text


class TestEveryCommand:
    @pytest.mark.parametrize("name", COMMAND_NAMES)
    def test_alone_shows_its_help_and_fails(self, console: RecordingConsole, name: str) -> None:
        assert _run(console, name) == exit_codes.GENERAL_ERROR
        assert console.messages("error") == []
        assert f"[general options] {name}" in console.text

    @pytest.mark.parametrize("name", COMMAND_NAMES)
    def test_help_flag_after_command(self, console: RecordingConsole, name: str) -> None:
        assert _run(console, name, "--help") == exit_codes.SUCCESS
        assert f"[general options] {name}" in console.text

    @pytest.mark.parametrize("name", COMMAND_NAMES)
    def test_help_flag_wins_over_malformed_arguments(self, console: RecordingConsole, name: str) -> None:
        assert _run(console, name, "--bogus", "x", "-n", "--help") == exit_codes.SUCCESS
        assert console.messages("error") == []
        assert f"[general options] {name}" in console.text

    @pytest.mark.parametrize("name", COMMAND_NAMES)
    def test_help_command(self, console: RecordingConsole, name: str) -> None:
        assert _run(console, "help", name) == exit_codes.SUCCESS
        assert "examples:" in console.text
        assert f"kite-dataset {name} " in console.text


class TestTopLevel:
    def test_no_arguments(self, console: RecordingConsole) -> None:
        assert _run(console) == exit_codes.GENERAL_ERROR
        assert console.messages("info")[0].startswith(PROGRAM_DESCRIPTION)

    def test_unknown_command(self, console: RecordingConsole) -> None:
        assert _run(console, "frobnicate") == exit_codes.GENERAL_ERROR
        assert console.messages("error") == ["Expected a command, got frobnicate"]

    def test_version(self, console: RecordingConsole) -> None:
        with patch("kite_dataset.version.metadata.version", return_value="1.1.0"):
            assert _run(console, "--version") == exit_codes.SUCCESS
        assert console.messages("info") == ['Kite version "1.1.0"']

    def test_dollar_zero(self, console: RecordingConsole) -> None:
        assert _run(console, "--dollar-zero", "bin/kite-dataset", "help", "info") == exit_codes.SUCCESS
        assert "bin/kite-dataset info" in console.text

    def test_reads_sys_argv_by_default(self, console: RecordingConsole, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["kite-dataset", "help"])
        assert main(console=console, conf=RuntimeConfig()) == exit_codes.SUCCESS


class TestBackendDiscovery:
    def test_missing_backend_is_a_state_error(self, console: RecordingConsole) -> None:
        with patch("kite_dataset.infra.backends.entry_points", return_value=[]):
            assert _run(console, "info", "users") == exit_codes.GENERAL_ERROR
        assert console.messages("error") == ["State error: No dataset backend is installed."]
        assert console.messages("warning")[0].startswith("Hint: ")

    def test_installed_backend_is_used(self, console: RecordingConsole) -> None:
        backend = MagicMock()
        backend.describe.return_value = "users: avro, 3 partitions"
        entry_point = MagicMock()
        entry_point.name = "fake"
        entry_point.load.return_value = lambda conf: backend

        with patch("kite_dataset.infra.backends.entry_points", return_value=[entry_point]):
            code = _run(
                console,
                "info",
                "users",
                conf=RuntimeConfig({"default.namespace": "analytics"}),
            )

        assert code == exit_codes.SUCCESS
        backend.describe.assert_called_once_with("dataset:hive:analytics/users")
        assert console.messages("info") == ["users: avro, 3 partitions"]


# ---------------------------------------------------------------------------
# --debug only changes error verbosity
# ---------------------------------------------------------------------------

def _successful_argv(name: str, tmp_path: Path, schema: Path) -> list[str]:
    sample_csv = tmp_path / "sample.csv"
    sample_csv.write_text("id,email\n1,a@example.com\n", encoding="utf-8")
    sample_json = tmp_path / "sample.json"
    sample_json.write_text('{"id": 1}', encoding="utf-8")
    csv, json_, avsc = str(sample_csv), str(sample_json), str(schema)
    return {
        "create": ["users", "-s", avsc],
        "copy": ["movies_avro", "movies_parquet"],
        "transform": ["movies_src", "movies", "--transform", "my_transforms:normalize"],
        "update": ["users", "--set", "a=b"],
        "delete": ["users"],
        "schema": ["users"],
        "info": ["users"],
        "show": ["users"],
        "merge-schemas": [avsc, avsc],
        "obj-schema": ["my_models.User"],
        "inputformat-import": [csv, "users", "--format", "sequencefile"],
        "csv-schema": [csv, "--class", "Sample"],
        "csv-import": [csv, "users"],
        "json-schema": [json_, "--class", "Sample"],
        "json-import": [json_, "users"],
        "partition-config": ["email:hash[16]", "created_at:year", "-s", avsc],
        "mapping-config": ["email:key", "username:u:username", "-s", avsc],
        "log4j-config": ["users", "--host", "flume.example.com", "--log-all"],
        "flume-config": ["users", "--channel-type", "memory"],
        "tar-import": [csv, "users"],
    }[name]


@pytest.fixture
def fake_backend():
    """Install one backend whose every call succeeds."""
    backend = MagicMock()
    backend.delete.return_value = True
    backend.describe.return_value = "users: avro"
    backend.schema.return_value = {"type": "record", "name": "User", "fields": []}
    backend.infer_schema.return_value = {"type": "record", "name": "Sample", "fields": []}
    backend.merge_schemas.return_value = {"type": "record", "name": "Merged", "fields": []}
    backend.read.return_value = [{"id": 1}]
    backend.copy.return_value = 2
    backend.import_records.return_value = 1

    entry_point = MagicMock()
    entry_point.name = "fake"
    entry_point.load.return_value = lambda conf: backend
    with patch("kite_dataset.infra.backends.entry_points", return_value=[entry_point]):
        yield backend


class TestDebugFlag:
    @pytest.mark.parametrize("name", COMMAND_NAMES)
    def test_success_output_unchanged(
        self,
        console: RecordingConsole,
        fake_backend: MagicMock,
        tmp_path: Path,
        user_schema_path: Path,
        name: str,
    ) -> None:
        argv = [name, *_successful_argv(name, tmp_path, user_schema_path)]

        plain_code = _run(console, *argv)
        plain_records = list(console.records)
        console.records.clear()
        debug_code = _run(console, "--debug", *argv)

        assert plain_code == debug_code == exit_codes.SUCCESS
        assert console.records == plain_records
        assert console.messages("error") == []

    @pytest.mark.parametrize("name", COMMAND_NAMES)
    def test_failure_exit_code_unchanged(self, console: RecordingConsole, name: str) -> None:
        assert _run(console, name) == _run(console, "--debug", name) == exit_codes.GENERAL_ERROR

    def test_failure_gains_traceback_only_with_debug(self, console: RecordingConsole) -> None:
        with patch("kite_dataset.infra.backends.entry_points", return_value=[]):
            plain_code = _run(console, "info", "users")
            plain = list(console.records)
            console.records.clear()
            debug_code = _run(console, "--debug", "info", "users")

        assert plain_code == debug_code == exit_codes.GENERAL_ERROR
        assert plain[0][2] is None
        level, text, exc_info = console.records[0]
        assert (level, text) == ("error", "State error")
        assert exc_info is not None

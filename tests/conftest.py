"""Shared pytest fixtures and configuration for the kite-dataset test suite.

Guidelines
----------
* No dataset backend is ever installed or contacted; commands get a
  ``MagicMock`` backend through their ``backend_factory``.
* Console output is captured with :class:`RecordingConsole`, never by
  reading stdout.
* Tests must not depend on ``KITE_*`` variables in the environment.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from kite_dataset.cli.console import PACKAGE_LOGGER_NAME
from kite_dataset.config import RuntimeConfig


class RecordingConsole:
    """Console sink that keeps every message for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, Any]] = []

    def _record(self, level: str, msg: str, args: tuple[object, ...], kwargs: dict[str, Any]) -> None:
        text = msg % args if args else msg
        self.records.append((level, text, kwargs.get("exc_info")))

    def info(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._record("info", msg, args, kwargs)

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._record("warning", msg, args, kwargs)

    def error(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._record("error", msg, args, kwargs)

    def messages(self, level: str | None = None) -> list[str]:
        return [text for lvl, text, _ in self.records if level is None or lvl == level]

    @property
    def text(self) -> str:
        return "\n".join(self.messages())


class StubCommand:
    """Minimal command: one optional positional, one flag, scripted ``run``."""

    def __init__(
        self,
        name: str,
        *,
        description: str = "",
        examples: tuple[str, ...] = (),
        required: bool = False,
        result: int = 0,
        raises: Exception | None = None,
    ) -> None:
        self.name = name
        self.description = description or f"Run {name}"
        self.examples = examples
        self.required = required
        self.result = result
        self.raises = raises
        self.calls: list[Any] = []

    def add_arguments(self, parser) -> None:
        parser.add_argument("targets", nargs="+" if self.required else "*", metavar="<target>")
        parser.add_argument("--flag", action="store_true", help="A flag")

    def run(self, args) -> int:
        self.calls.append(args)
        if self.raises is not None:
            raise self.raises
        return self.result


class ConfigurableStub(StubCommand):
    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.configured: list[RuntimeConfig] = []

    def configure(self, conf: RuntimeConfig) -> None:
        self.configured.append(conf)


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def conf() -> RuntimeConfig:
    return RuntimeConfig()


@pytest.fixture
def backend() -> MagicMock:
    return MagicMock(name="backend")


@pytest.fixture
def user_schema_path(tmp_path: Path) -> Path:
    """An Avro record schema with a handful of fields."""
    schema = {
        "type": "record",
        "name": "User",
        "fields": [
            {"name": "id", "type": "long"},
            {"name": "email", "type": "string"},
            {"name": "username", "type": "string"},
            {"name": "created_at", "type": "long"},
            {"name": "preferences", "type": {"type": "map", "values": "string"}},
        ],
    }
    path = tmp_path / "user.avsc"
    path.write_text(json.dumps(schema), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _restore_package_logger_level():
    """``--debug`` lowers the package logger; put it back after each test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    level = package_logger.level
    yield
    package_logger.setLevel(level)


@pytest.fixture(autouse=True)
def _clear_kite_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for name in list(os.environ):
        if name.startswith("KITE_"):
            monkeypatch.delenv(name)

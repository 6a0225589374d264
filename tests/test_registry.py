"""Tests for the command registry (cli/registry.py)."""

from __future__ import annotations

import pytest

from kite_dataset.cli.command import Command
from kite_dataset.cli.help import HELP_ALIASES, HelpCommand
from kite_dataset.cli.registry import CommandRegistry

from conftest import RecordingConsole, StubCommand


@pytest.fixture
def registry(console: RecordingConsole) -> CommandRegistry:
    return CommandRegistry(console)


class TestRegistration:
    def test_help_is_registered_first(self, registry: CommandRegistry) -> None:
        assert registry.names() == (HelpCommand.name,)
        assert isinstance(registry.resolve("help"), HelpCommand)

    def test_names_keep_registration_order(self, registry: CommandRegistry) -> None:
        for name in ("zeta", "alpha", "mid"):
            registry.register(name, StubCommand(name))
        assert registry.names() == ("help", "zeta", "alpha", "mid")

    def test_duplicate_name_rejected(self, registry: CommandRegistry) -> None:
        registry.register("create", StubCommand("create"))
        with pytest.raises(ValueError, match="already registered: create"):
            registry.register("create", StubCommand("create"))

    def test_alias_cannot_shadow_existing_name(self, registry: CommandRegistry) -> None:
        registry.register("create", StubCommand("create"))
        with pytest.raises(ValueError, match="create"):
            registry.register("make", StubCommand("make"), "create")

    def test_name_cannot_reuse_help_alias(self, registry: CommandRegistry) -> None:
        with pytest.raises(ValueError, match="--help"):
            registry.register("--help", StubCommand("--help"))

    def test_len_counts_primary_names(self, registry: CommandRegistry) -> None:
        registry.register("create", StubCommand("create"))
        assert len(registry) == 2


class TestLookup:
    @pytest.mark.parametrize("alias", HELP_ALIASES)
    def test_help_aliases_resolve_to_help(self, registry: CommandRegistry, alias: str) -> None:
        assert alias in registry
        assert registry.canonical(alias) == "help"
        assert registry.resolve(alias) is registry.resolve("help")

    def test_aliases_not_listed(self, registry: CommandRegistry) -> None:
        assert not set(HELP_ALIASES) & set(registry.names())

    def test_unknown_name(self, registry: CommandRegistry) -> None:
        assert "nope" not in registry
        assert registry.canonical("nope") is None
        assert registry.resolve("nope") is None

    def test_custom_alias(self, registry: CommandRegistry) -> None:
        command = StubCommand("create")
        registry.register("create", command, "mk")
        assert registry.resolve("mk") is command
        assert registry.canonical("mk") == "create"

    def test_iteration_yields_commands(self, registry: CommandRegistry) -> None:
        command = StubCommand("create")
        registry.register("create", command)
        assert list(registry)[1] is command
        assert all(isinstance(entry, Command) for entry in registry)

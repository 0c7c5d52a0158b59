"""Tests for the command registry."""

from unittest.mock import MagicMock

import pytest

from typo3_console.commands.base import NamedCommand
from typo3_console.exceptions import UnknownCommandError
from typo3_console.registry import CommandRegistry


def test_get_constructs_lazily_and_caches():
    """Test the factory runs on first access only."""
    factory = MagicMock(side_effect=lambda: NamedCommand("demo:run"))
    registry = CommandRegistry()
    registry.add_lazy_command("demo:run", factory, "Run demo")

    factory.assert_not_called()
    command = registry.get("demo:run")
    assert registry.get("demo:run") is command
    factory.assert_called_once()


def test_registering_again_replaces_registration():
    """Test an identifier is registered once, the last registration wins."""
    registry = CommandRegistry()
    registry.add_lazy_command("demo:run", lambda: NamedCommand("first"), "First")
    first = registry.get("demo:run")
    registry.add_lazy_command("demo:run", lambda: NamedCommand("second"), "Second")

    assert len(registry) == 1
    assert registry.description("demo:run") == "Second"
    assert registry.get("demo:run") is not first
    assert registry.get("demo:run").name == "second"


def test_unknown_identifier():
    """Test unknown identifiers raise UnknownCommandError."""
    registry = CommandRegistry()
    with pytest.raises(UnknownCommandError):
        registry.get("demo:missing")
    with pytest.raises(UnknownCommandError):
        registry.description("demo:missing")


def test_membership_and_order():
    """Test membership checks and registration order."""
    registry = CommandRegistry()
    registry.add_lazy_command("b:two", lambda: NamedCommand("b:two"), "Two")
    registry.add_lazy_command("a:one", lambda: NamedCommand("a:one"), "One")

    assert registry.has("a:one")
    assert "b:two" in registry
    assert "c:three" not in registry
    assert list(registry) == ["b:two", "a:one"]
    assert registry.descriptions() == {"b:two": "Two", "a:one": "One"}

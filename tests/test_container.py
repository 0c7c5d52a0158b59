"""Tests for the service container."""

import pytest

import typo3_console.container as container_module
from typo3_console.config import ConsoleConfig
from typo3_console.console import ConsoleOutput
from typo3_console.core.boot_service import BootService
from typo3_console.core.configuration_manager import ConfigurationManager
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import ServiceNotFoundError
from typo3_console.registry import CommandRegistry
from typo3_console.container import ServiceContainer, assemble, get_context, set_context


@pytest.fixture
def config(tmp_path):
    return ConsoleConfig(project_path=tmp_path, max_attempts=2)


def test_services_are_created_once(config):
    """Test lazy services are cached."""
    container = ServiceContainer(config)
    assert container.paths is container.paths
    assert container.boot_service is container.boot_service
    assert container.boot_service.configuration_manager is container.configuration_manager


def test_get_by_type(config, make_io):
    """Test services are looked up by type."""
    io = make_io()
    container = ServiceContainer(config, io)

    assert container.get(ConsoleConfig) is config
    assert isinstance(container.get(ProjectPaths), ProjectPaths)
    assert isinstance(container.get(ConfigurationManager), ConfigurationManager)
    assert container.get(BootService) is container.boot_service
    assert container.get(ConsoleOutput) is io
    assert isinstance(container.get(CommandRegistry), CommandRegistry)


def test_get_unknown_type(config):
    """Test unknown service types raise ServiceNotFoundError."""
    with pytest.raises(ServiceNotFoundError):
        ServiceContainer(config).get(dict)


def test_io_uses_configured_attempts(config):
    """Test the default attempt limit comes from the configuration."""
    io = ServiceContainer(config).io
    assert io._get_question_helper().default_attempts == 2


def test_readiness_is_checked_once(config):
    """Test readiness does not change after it was first computed."""
    container = assemble(config)
    assert container.application_is_ready is False

    container.configuration_manager.set_local_configuration_value(
        "DB/Connections/Default", {"driver": "pdo_sqlite"}
    )
    assert container.application_is_ready is False
    assert container.registry.get("configuration:set").is_enabled() is False


def test_assemble_registers_commands(config):
    """Test assemble wires every command into the registry."""
    container = assemble(config)
    assert len(container.registry) == 15
    assert "install:setup" in container.registry


def test_context(config, monkeypatch):
    """Test the global context accessors."""
    monkeypatch.setattr(container_module, "_container", None)
    with pytest.raises(RuntimeError):
        get_context()

    container = ServiceContainer(config)
    set_context(container)
    assert get_context() is container

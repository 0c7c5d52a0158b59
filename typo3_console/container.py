"""Service container with lazy-initialized dependencies."""

import logging
from typing import Any

from typo3_console.config import ConsoleConfig
from typo3_console.console import ConsoleOutput
from typo3_console.core.boot_service import BootService
from typo3_console.core.configuration_manager import ConfigurationManager
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import ServiceNotFoundError
from typo3_console.registry import CommandRegistry
from typo3_console.service_provider import ServiceProvider

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Shared services for commands, created on first access.

    Usage:
        container = assemble()
        container.registry.get("install:setup").run(container.io, container.paths)
    """

    def __init__(self, config: ConsoleConfig | None = None, io: ConsoleOutput | None = None):
        """Initialize the container.

        Args:
            config: Console configuration (loaded from the environment if not provided)
            io: Console output to use (created on first access if not provided)
        """
        self._config = config
        self._io = io

        # Lazy-loaded dependencies
        self._paths: ProjectPaths | None = None
        self._configuration_manager: ConfigurationManager | None = None
        self._boot_service: BootService | None = None
        self._application_is_ready: bool | None = None
        self.registry = CommandRegistry()

    @property
    def config(self) -> ConsoleConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = ConsoleConfig.from_env()
        return self._config

    @property
    def paths(self) -> ProjectPaths:
        if self._paths is None:
            self._paths = ProjectPaths.from_config(self.config)
        return self._paths

    @property
    def configuration_manager(self) -> ConfigurationManager:
        if self._configuration_manager is None:
            self._configuration_manager = ConfigurationManager(self.paths.settings)
        return self._configuration_manager

    @property
    def boot_service(self) -> BootService:
        if self._boot_service is None:
            self._boot_service = BootService(self.configuration_manager, self.paths)
        return self._boot_service

    @property
    def io(self) -> ConsoleOutput:
        if self._io is None:
            self._io = ConsoleOutput(default_attempts=self.config.max_attempts)
        return self._io

    @property
    def application_is_ready(self) -> bool:
        """Whether essential configuration exists, checked once."""
        if self._application_is_ready is None:
            self._application_is_ready = (
                self.configuration_manager.essential_configuration_exists()
            )
        return self._application_is_ready

    def get(self, service_type: type) -> Any:
        """Get a service by its type.

        Raises:
            ServiceNotFoundError: If the container does not provide the type
        """
        services = {
            ConsoleConfig: lambda: self.config,
            ProjectPaths: lambda: self.paths,
            ConfigurationManager: lambda: self.configuration_manager,
            BootService: lambda: self.boot_service,
            ConsoleOutput: lambda: self.io,
            CommandRegistry: lambda: self.registry,
        }
        if service_type not in services:
            raise ServiceNotFoundError(f"No service registered for {service_type.__name__}")
        return services[service_type]()


def assemble(config: ConsoleConfig | None = None, io: ConsoleOutput | None = None) -> ServiceContainer:
    """Build the container, check readiness once and register the commands."""
    container = ServiceContainer(config, io)
    # Readiness is fixed for the rest of the process
    logger.debug(f"Application ready: {container.application_is_ready}")
    ServiceProvider.configure_commands(container, container.registry)
    return container


# Global container instance (set by the Typer callback)
_container: ServiceContainer | None = None


def get_context() -> ServiceContainer:
    """Get the current service container.

    Raises:
        RuntimeError: If the container is not initialized
    """
    if _container is None:
        raise RuntimeError("Service container not initialized. This should not happen.")
    return _container


def set_context(container: ServiceContainer) -> None:
    global _container
    _container = container

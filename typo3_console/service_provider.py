"""Registration of the installation and configuration commands."""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Protocol

from typo3_console.commands import (
    Command,
    ConfigurationRemoveCommand,
    ConfigurationSetCommand,
    ConfigurationShowLocalCommand,
    DatabaseUpdateSchemaCommand,
    InstallActionNeedsExecutionCommand,
    InstallDatabaseConnectCommand,
    InstallDatabaseDataCommand,
    InstallDatabaseSelectCommand,
    InstallDefaultConfigurationCommand,
    InstallEnvironmentAndFoldersCommand,
    InstallExtensionSetupIfPossibleCommand,
    InstallFixFolderStructureCommand,
    InstallSetupCommand,
    LockInstallToolCommand,
    UnlockInstallToolCommand,
)
from typo3_console.core.boot_service import BootService
from typo3_console.exceptions import UnknownCommandError
from typo3_console.registry import CommandRegistry

logger = logging.getLogger(__name__)


class CommandId(str, Enum):
    """Identifiers of the commands this provider registers."""

    CONFIGURATION_REMOVE = "configuration:remove"
    CONFIGURATION_SET = "configuration:set"
    CONFIGURATION_SHOW_LOCAL = "configuration:showlocal"
    DATABASE_UPDATE_SCHEMA = "database:updateschema"
    INSTALL_SETUP = "install:setup"
    INSTALL_FIX_FOLDER_STRUCTURE = "install:fixfolderstructure"
    INSTALL_EXTENSION_SETUP_IF_POSSIBLE = "install:extensionsetupifpossible"
    INSTALL_ENVIRONMENT_AND_FOLDERS = "install:environmentandfolders"
    INSTALL_DATABASE_CONNECT = "install:databaseconnect"
    INSTALL_DATABASE_DATA = "install:databasedata"
    INSTALL_DATABASE_SELECT = "install:databaseselect"
    INSTALL_DEFAULT_CONFIGURATION = "install:defaultconfiguration"
    INSTALL_ACTION_NEEDS_EXECUTION = "install:actionneedsexecution"
    INSTALL_LOCK = "install:lock"
    INSTALL_UNLOCK = "install:unlock"


class Dependency(Enum):
    """What a command factory receives."""

    NONE = "none"  # the command identifier
    READINESS = "readiness"  # whether essential configuration exists
    BOOT_SERVICE = "boot_service"  # the BootService from the container


class Container(Protocol):
    application_is_ready: bool

    def get(self, service_type: type) -> Any: ...


@dataclass(frozen=True)
class CommandDescriptor:
    identifier: CommandId
    factory: Callable[..., Command]
    description: str
    dependency: Dependency = Dependency.NONE


COMMANDS: dict[CommandId, CommandDescriptor] = {
    descriptor.identifier: descriptor
    for descriptor in (
        CommandDescriptor(
            CommandId.CONFIGURATION_REMOVE,
            ConfigurationRemoveCommand,
            "Remove configuration value",
            Dependency.READINESS,
        ),
        CommandDescriptor(
            CommandId.CONFIGURATION_SET,
            ConfigurationSetCommand,
            "Set configuration value",
            Dependency.READINESS,
        ),
        CommandDescriptor(
            CommandId.CONFIGURATION_SHOW_LOCAL,
            ConfigurationShowLocalCommand,
            "Show local configuration value",
            Dependency.READINESS,
        ),
        CommandDescriptor(
            CommandId.DATABASE_UPDATE_SCHEMA,
            DatabaseUpdateSchemaCommand,
            "Update database schema (TYPO3 Database Compare)",
            Dependency.BOOT_SERVICE,
        ),
        CommandDescriptor(
            CommandId.INSTALL_SETUP,
            InstallSetupCommand,
            "TYPO3 Setup",
        ),
        CommandDescriptor(
            CommandId.INSTALL_FIX_FOLDER_STRUCTURE,
            InstallFixFolderStructureCommand,
            "Fix folder structure",
        ),
        CommandDescriptor(
            CommandId.INSTALL_EXTENSION_SETUP_IF_POSSIBLE,
            InstallExtensionSetupIfPossibleCommand,
            "Fix folder structure",
        ),
        CommandDescriptor(
            CommandId.INSTALL_ENVIRONMENT_AND_FOLDERS,
            InstallEnvironmentAndFoldersCommand,
            "Check environment / create folders",
        ),
        CommandDescriptor(
            CommandId.INSTALL_DATABASE_CONNECT,
            InstallDatabaseConnectCommand,
            "Connect to database",
        ),
        CommandDescriptor(
            CommandId.INSTALL_DATABASE_DATA,
            InstallDatabaseDataCommand,
            "Add database data",
            Dependency.BOOT_SERVICE,
        ),
        CommandDescriptor(
            CommandId.INSTALL_DATABASE_SELECT,
            InstallDatabaseSelectCommand,
            "Select database",
        ),
        CommandDescriptor(
            CommandId.INSTALL_DEFAULT_CONFIGURATION,
            InstallDefaultConfigurationCommand,
            "Write default configuration",
            Dependency.BOOT_SERVICE,
        ),
        CommandDescriptor(
            CommandId.INSTALL_ACTION_NEEDS_EXECUTION,
            InstallActionNeedsExecutionCommand,
            "Calls needs execution on the given action and returns the result",
        ),
        CommandDescriptor(
            CommandId.INSTALL_LOCK,
            LockInstallToolCommand,
            "Lock Install Tool",
        ),
        CommandDescriptor(
            CommandId.INSTALL_UNLOCK,
            UnlockInstallToolCommand,
            "Unlock Install Tool",
        ),
    )
}

_missing = set(CommandId) - set(COMMANDS)
if _missing:
    raise RuntimeError(f"No descriptor for commands: {sorted(_missing)}")


class ServiceProvider:
    """Wire the commands into a host command registry.

    Usage:
        registry = ServiceProvider.configure_commands(container, CommandRegistry())
        command = registry.get("install:setup")
    """

    commands = COMMANDS

    @classmethod
    def resolve(cls, identifier: CommandId | str, container: Container) -> Command:
        """Construct the command for an identifier.

        Only the dependency declared by the command's descriptor is taken from
        the container.

        Raises:
            UnknownCommandError: If the identifier is not known
        """
        try:
            command_id = CommandId(identifier)
        except ValueError:
            raise UnknownCommandError(f'Command "{identifier}" is not defined')
        descriptor = cls.commands[command_id]

        if descriptor.dependency is Dependency.READINESS:
            command = descriptor.factory(container.application_is_ready)
        elif descriptor.dependency is Dependency.BOOT_SERVICE:
            command = descriptor.factory(container.get(BootService))
        else:
            command = descriptor.factory(command_id.value)

        logger.debug(f"Constructed {command!r}")
        return command

    @classmethod
    def configure_commands(
        cls, container: Container, registry: CommandRegistry
    ) -> CommandRegistry:
        """Add one lazy command per known identifier to the registry."""
        for command_id, descriptor in cls.commands.items():
            registry.add_lazy_command(
                command_id.value,
                partial(cls.resolve, command_id, container),
                descriptor.description,
            )
        return registry

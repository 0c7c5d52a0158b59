"""Console commands package."""

from typo3_console.commands.base import Command
from typo3_console.commands.configuration import (
    ConfigurationRemoveCommand,
    ConfigurationSetCommand,
    ConfigurationShowLocalCommand,
)
from typo3_console.commands.database import DatabaseUpdateSchemaCommand
from typo3_console.commands.install import (
    InstallActionNeedsExecutionCommand,
    InstallDatabaseConnectCommand,
    InstallDatabaseDataCommand,
    InstallDatabaseSelectCommand,
    InstallDefaultConfigurationCommand,
    InstallEnvironmentAndFoldersCommand,
    InstallExtensionSetupIfPossibleCommand,
    InstallFixFolderStructureCommand,
    InstallSetupCommand,
)
from typo3_console.commands.install_tool import (
    LockInstallToolCommand,
    UnlockInstallToolCommand,
)

__all__ = [
    "Command",
    "ConfigurationRemoveCommand",
    "ConfigurationSetCommand",
    "ConfigurationShowLocalCommand",
    "DatabaseUpdateSchemaCommand",
    "InstallActionNeedsExecutionCommand",
    "InstallDatabaseConnectCommand",
    "InstallDatabaseDataCommand",
    "InstallDatabaseSelectCommand",
    "InstallDefaultConfigurationCommand",
    "InstallEnvironmentAndFoldersCommand",
    "InstallExtensionSetupIfPossibleCommand",
    "InstallFixFolderStructureCommand",
    "InstallSetupCommand",
    "LockInstallToolCommand",
    "UnlockInstallToolCommand",
]

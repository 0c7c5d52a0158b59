"""Core services shared by the commands."""

from typo3_console.core.boot_service import BootService
from typo3_console.core.configuration_manager import ConfigurationManager
from typo3_console.core.paths import ProjectPaths

__all__ = ["BootService", "ConfigurationManager", "ProjectPaths"]

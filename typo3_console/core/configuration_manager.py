"""Access to the local configuration file."""

import json
import logging
from pathlib import Path
from typing import Any

from typo3_console.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DATABASE_CONNECTION_PATH = "DB/Connections/Default"


def _split_path(path: str) -> list[str]:
    segments = [segment for segment in path.strip("/").split("/") if segment]
    if not segments:
        raise ConfigurationError("Configuration path must not be empty")
    return segments


class ConfigurationManager:
    """Read and write the local configuration.

    The local configuration is a JSON document of nested objects. Values are
    addressed by slash separated paths, e.g. "DB/Connections/Default/host".
    """

    def __init__(self, settings_path: Path):
        self.settings_path = settings_path

    def get_local_configuration(self) -> dict[str, Any]:
        """Load the local configuration (empty if the file does not exist)."""
        if not self.settings_path.exists():
            return {}
        try:
            configuration = json.loads(self.settings_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Local configuration {self.settings_path} is not valid JSON: {e}"
            )
        if not isinstance(configuration, dict):
            raise ConfigurationError(
                f"Local configuration {self.settings_path} must contain an object"
            )
        return configuration

    def write_local_configuration(self, configuration: dict[str, Any]) -> None:
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        self.settings_path.write_text(
            json.dumps(configuration, indent=4, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        logger.debug(f"Wrote local configuration to {self.settings_path}")

    def has_local_configuration_value(self, path: str) -> bool:
        try:
            self.get_local_configuration_value(path)
        except ConfigurationError:
            return False
        return True

    def get_local_configuration_value(self, path: str) -> Any:
        """Get a value from the local configuration.

        Raises:
            ConfigurationError: If nothing is configured at the path
        """
        value: Any = self.get_local_configuration()
        for segment in _split_path(path):
            if not isinstance(value, dict) or segment not in value:
                raise ConfigurationError(f'No configuration found for path "{path}"')
            value = value[segment]
        return value

    def set_local_configuration_value(self, path: str, value: Any) -> None:
        """Set a value, creating intermediate objects as needed."""
        configuration = self.get_local_configuration()
        *parents, key = _split_path(path)

        node = configuration
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigurationError(
                    f'Cannot set "{path}": "{segment}" holds a value, not an object'
                )
            node = child
        node[key] = value

        self.write_local_configuration(configuration)
        logger.info(f"Set local configuration {path}")

    def set_local_configuration_values(self, values: dict[str, Any]) -> None:
        for path, value in values.items():
            self.set_local_configuration_value(path, value)

    def remove_local_configuration_value(self, path: str) -> bool:
        """Remove a value. Returns False if nothing was configured at the path."""
        configuration = self.get_local_configuration()
        *parents, key = _split_path(path)

        node: Any = configuration
        for segment in parents:
            if not isinstance(node, dict) or segment not in node:
                return False
            node = node[segment]
        if not isinstance(node, dict) or key not in node:
            return False

        del node[key]
        self.write_local_configuration(configuration)
        logger.info(f"Removed local configuration {path}")
        return True

    def essential_configuration_exists(self) -> bool:
        """Whether the configuration needed to boot the application exists."""
        if not self.settings_path.exists():
            return False
        try:
            connection = self.get_local_configuration_value(DATABASE_CONNECTION_PATH)
        except ConfigurationError:
            return False
        return isinstance(connection, dict) and bool(connection)

"""Commands reading and writing the local configuration."""

import json
import logging
from typing import Any

from typo3_console.commands.base import ReadinessAwareCommand
from typo3_console.console import ConsoleOutput
from typo3_console.core.configuration_manager import ConfigurationManager
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import ConfigurationError, InvalidValueError

logger = logging.getLogger(__name__)


def _display_value(value: Any, as_json: bool) -> str:
    if as_json or isinstance(value, (dict, list)):
        return json.dumps(value, indent=4, sort_keys=True)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigurationSetCommand(ReadinessAwareCommand):
    name = "configuration:set"
    description = "Set configuration value"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        path: str = "",
        value: str = "",
        as_json: bool = False,
        **options: Any,
    ) -> int:
        """Set a value in the local configuration.

        With as_json the value is decoded as JSON first, so arrays, numbers
        and booleans can be stored.
        """
        new_value: Any = value
        if as_json:
            try:
                new_value = json.loads(value)
            except json.JSONDecodeError as e:
                raise InvalidValueError(f"Value is not valid JSON: {e}")

        ConfigurationManager(paths.settings).set_local_configuration_value(path, new_value)
        io.output_line('<info>Successfully set value for path "%s".</info>', [path])
        return 0


class ConfigurationRemoveCommand(ReadinessAwareCommand):
    name = "configuration:remove"
    description = "Remove configuration value"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        path: str = "",
        force: bool = False,
        **options: Any,
    ) -> int:
        """Remove one or more comma separated paths, confirming each unless forced."""
        configuration_manager = ConfigurationManager(paths.settings)

        for single_path in (p.strip() for p in path.split(",") if p.strip()):
            if not configuration_manager.has_local_configuration_value(single_path):
                io.output_line(
                    '<warning>Path "%s" does not exist in local configuration.</warning>',
                    [single_path],
                )
                continue

            if not force and not io.ask_confirmation(
                f'Remove "{single_path}" from local configuration? (yes/<b>no</b>): ',
                default=False,
            ):
                logger.debug(f"Removal of {single_path} cancelled")
                continue

            configuration_manager.remove_local_configuration_value(single_path)
            io.output_line('<info>Removed "%s" from local configuration.</info>', [single_path])

        return 0


class ConfigurationShowLocalCommand(ReadinessAwareCommand):
    name = "configuration:showlocal"
    description = "Show local configuration value"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        path: str = "",
        as_json: bool = False,
        **options: Any,
    ) -> int:
        configuration_manager = ConfigurationManager(paths.settings)
        try:
            if path:
                value = configuration_manager.get_local_configuration_value(path)
            else:
                value = configuration_manager.get_local_configuration()
        except ConfigurationError:
            io.output_line('<error>No configuration found for path "%s"</error>', [path])
            return 1

        io.output_line(_display_value(value, as_json))
        return 0

"""Command registry holding lazily constructed commands."""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from typo3_console.commands import Command
from typo3_console.exceptions import UnknownCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LazyCommand:
    """A command registered by identifier, constructed on first use."""

    identifier: str
    factory: Callable[[], Command]
    description: str


class CommandRegistry:
    """Registry of commands by identifier.

    Registering an identifier again replaces the earlier registration, so
    each identifier appears once.
    """

    def __init__(self):
        self._commands: dict[str, LazyCommand] = {}
        self._instances: dict[str, Command] = {}

    def add_lazy_command(
        self, identifier: str, factory: Callable[[], Command], description: str
    ) -> None:
        if identifier in self._commands:
            logger.debug(f"Replacing registration of command {identifier}")
            self._instances.pop(identifier, None)
        self._commands[identifier] = LazyCommand(identifier, factory, description)

    def has(self, identifier: str) -> bool:
        return identifier in self._commands

    def get(self, identifier: str) -> Command:
        """Get the command, constructing it on first access.

        Raises:
            UnknownCommandError: If no command is registered for the identifier
        """
        if identifier not in self._commands:
            raise UnknownCommandError(f'Command "{identifier}" is not defined')
        if identifier not in self._instances:
            self._instances[identifier] = self._commands[identifier].factory()
        return self._instances[identifier]

    def description(self, identifier: str) -> str:
        if identifier not in self._commands:
            raise UnknownCommandError(f'Command "{identifier}" is not defined')
        return self._commands[identifier].description

    def descriptions(self) -> dict[str, str]:
        """Descriptions by identifier, in registration order."""
        return {
            identifier: command.description
            for identifier, command in self._commands.items()
        }

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

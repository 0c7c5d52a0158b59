"""Base class for console commands."""

from typing import Any

from typo3_console.console import ConsoleOutput
from typo3_console.core.boot_service import BootService
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import CommandNotEnabledError


class Command:
    """A console command.

    Subclasses set name and description and implement execute(). The project
    paths are passed when the command runs, not when it is constructed, so
    constructing a command never touches the file system.
    """

    name: str = ""
    description: str = ""

    def is_enabled(self) -> bool:
        return True

    def run(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        """Run the command, returning its exit code.

        Raises:
            CommandNotEnabledError: If the command cannot run in the current state
        """
        if not self.is_enabled():
            raise CommandNotEnabledError(
                f'Command "{self.name}" is not available, essential configuration is missing'
            )
        return self.execute(io, paths, **options)

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class NamedCommand(Command):
    """Command constructed with its identifier."""

    def __init__(self, name: str):
        self.name = name


class ReadinessAwareCommand(Command):
    """Command that is only enabled once essential configuration exists."""

    def __init__(self, application_is_ready: bool):
        self.application_is_ready = application_is_ready

    def is_enabled(self) -> bool:
        return self.application_is_ready


class BootingCommand(Command):
    """Command that boots the application through the boot service when run."""

    def __init__(self, boot_service: BootService):
        self.boot_service = boot_service

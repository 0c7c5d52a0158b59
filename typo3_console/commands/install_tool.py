"""Lock and unlock the install tool."""

import logging
from typing import Any

from typo3_console.commands.base import NamedCommand
from typo3_console.console import ConsoleOutput
from typo3_console.core.paths import ProjectPaths

logger = logging.getLogger(__name__)


class LockInstallToolCommand(NamedCommand):
    description = "Lock Install Tool"

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        lock_file = paths.install_tool_lock
        if lock_file.exists():
            lock_file.unlink()
            logger.info(f"Removed {lock_file}")
            io.output_line("<info>Install Tool has been locked.</info>")
        else:
            io.output_line("Install Tool is already locked.")
        return 0


class UnlockInstallToolCommand(NamedCommand):
    description = "Unlock Install Tool"

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        lock_file = paths.install_tool_lock
        lock_file.parent.mkdir(parents=True, exist_ok=True)
        lock_file.touch()
        logger.info(f"Created {lock_file}")
        io.output_line("<info>Install Tool has been unlocked.</info>")
        return 0

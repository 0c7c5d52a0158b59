"""TYPO3 console: console I/O and installation command wiring."""

import logging
import sys
from pathlib import Path

from typo3_console.config import ConsoleConfig

__version__ = "0.1.0"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
STDERR_FORMAT = "%(levelname)s: %(message)s"


def _stderr_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    return logging.INFO if verbose else logging.WARNING


def _log_file(config: ConsoleConfig) -> Path:
    """Log file path; a relative log directory lives below the project."""
    log_dir = config.log_dir
    if not log_dir.is_absolute():
        log_dir = config.project_path / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / config.log_filename


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: ConsoleConfig | None = None
) -> None:
    """Send every record to the project log file and notable ones to stderr.

    Args:
        verbose: Show INFO records on stderr
        quiet: Show only ERROR records on stderr (wins over verbose)
        config: ConsoleConfig with the log location (loaded from the environment if omitted)
    """
    if config is None:
        config = ConsoleConfig.from_env()

    file_handler = logging.FileHandler(_log_file(config))
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # stdout carries command output
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(_stderr_level(verbose, quiet))
    stderr_handler.setFormatter(logging.Formatter(STDERR_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Called once per CLI invocation; replace rather than stack handlers
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(stderr_handler)


def main() -> None:
    """Run the typo3-console CLI."""
    from typo3_console.cli import app

    app()


__all__ = ["main", "setup_logging"]

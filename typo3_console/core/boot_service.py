"""Boot service: gives commands access to the booted application."""

import logging
import sqlite3

from typo3_console.core.configuration_manager import (
    DATABASE_CONNECTION_PATH,
    ConfigurationManager,
)
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import (
    ConfigurationError,
    DatabaseError,
    EssentialConfigurationMissingError,
    UnsupportedDriverError,
)

logger = logging.getLogger(__name__)

SUPPORTED_DRIVERS = ("pdo_sqlite",)


class BootService:
    """Boot the application on demand.

    Commands that need a configured system receive this service and call
    boot() (or connect()) when they run, never at construction time.
    """

    def __init__(self, configuration_manager: ConfigurationManager, paths: ProjectPaths):
        self.configuration_manager = configuration_manager
        self.paths = paths
        self.booted = False

    def boot(self) -> "BootService":
        """Boot once; fails when essential configuration is missing."""
        if self.booted:
            return self
        if not self.configuration_manager.essential_configuration_exists():
            raise EssentialConfigurationMissingError(
                "Essential configuration missing, run install:setup first"
            )
        self.booted = True
        logger.info("Application booted")
        return self

    def connect(self) -> sqlite3.Connection:
        """Open a connection to the default database."""
        self.boot()
        connection = self.configuration_manager.get_local_configuration_value(
            DATABASE_CONNECTION_PATH
        )

        driver = connection.get("driver")
        if driver not in SUPPORTED_DRIVERS:
            raise UnsupportedDriverError(
                f"Database driver '{driver}' is not supported "
                f"(supported: {', '.join(SUPPORTED_DRIVERS)})"
            )
        if not connection.get("path"):
            raise ConfigurationError(
                "No database selected, run install:databaseselect first"
            )

        path = self.paths.project / connection["path"]
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Connecting to SQLite database {path}")
        try:
            return sqlite3.connect(path)
        except sqlite3.Error as e:
            raise DatabaseError(f"Could not open SQLite database {path}: {e}")

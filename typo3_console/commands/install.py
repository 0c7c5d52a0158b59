"""Installation step commands and the setup command running them."""

import hashlib
import json
import logging
import re
import secrets
from pathlib import Path
from typing import Any

from typo3_console.commands.base import BootingCommand, NamedCommand
from typo3_console.console import ConsoleOutput
from typo3_console.core.boot_service import BootService
from typo3_console.core.configuration_manager import (
    DATABASE_CONNECTION_PATH,
    ConfigurationManager,
)
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import ConfigurationError, InvalidValueError

logger = logging.getLogger(__name__)

DRIVERS = {
    "pdo_sqlite": "SQLite",
    "pdo_mysql": "MySQL / MariaDB",
    "pdo_pgsql": "PostgreSQL",
}
DEFAULT_PORTS = {"pdo_mysql": 3306, "pdo_pgsql": 5432}

DEFAULT_CONFIGURATION: dict[str, Any] = {
    "SYS/trustedHostsPattern": ".*",
    "SYS/devIPmask": "",
    "SYS/displayErrors": 0,
    "BE/lockSSL": False,
    "FE/debug": False,
    "LOG/writerConfiguration/level": "warning",
}

# Order in which install:setup runs the steps
INSTALL_ACTIONS = [
    "environmentandfolders",
    "databaseconnect",
    "databaseselect",
    "databasedata",
    "defaultconfiguration",
]

PASSWORD_ITERATIONS = 100_000


def hash_password(password: str, iterations: int = PASSWORD_ITERATIONS) -> str:
    """Hash a password as pbkdf2_sha256$<iterations>$<salt>$<digest>."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    ).hex()
    return f"pbkdf2_sha256${iterations}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    algorithm, iterations, salt, digest = password_hash.split("$")
    if algorithm != "pbkdf2_sha256":
        return False
    candidate = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
    ).hex()
    return secrets.compare_digest(candidate, digest)


def validate_not_empty(value: Any) -> str:
    if value is None or not str(value).strip():
        raise InvalidValueError("Value must not be empty")
    return str(value).strip()


def validate_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise InvalidValueError(f'Port "{value}" is not a number')
    if not 1 <= port <= 65535:
        raise InvalidValueError(f"Port {port} is out of range (1-65535)")
    return port


def validate_database_name(value: Any) -> str:
    name = validate_not_empty(value)
    if not re.fullmatch(r"[A-Za-z0-9_-]+", name):
        raise InvalidValueError(
            f'Database name "{name}" may only contain letters, digits, "_" and "-"'
        )
    return name


def validate_admin_password(value: Any) -> str:
    if value is None or len(str(value)) < 8:
        raise InvalidValueError("Password must be at least 8 characters long")
    return str(value)


def _connection(configuration_manager: ConfigurationManager) -> dict[str, Any]:
    try:
        connection = configuration_manager.get_local_configuration_value(
            DATABASE_CONNECTION_PATH
        )
    except ConfigurationError:
        return {}
    return connection if isinstance(connection, dict) else {}


def create_missing_folders(paths: ProjectPaths) -> list[Path]:
    missing = paths.missing_folders()
    for folder in missing:
        folder.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created folder {folder}")
    return missing


def action_needs_execution(action: str, paths: ProjectPaths) -> bool:
    """Whether the given install action still has work to do.

    Raises:
        InvalidValueError: If the action is unknown
    """
    action = action.lower()
    configuration_manager = ConfigurationManager(paths.settings)
    connection = _connection(configuration_manager)

    if action == "environmentandfolders":
        return bool(paths.missing_folders())
    if action == "databaseconnect":
        return not connection.get("driver")
    if action == "databaseselect":
        return not (connection.get("path") or connection.get("dbname"))
    if action == "databasedata":
        return not (
            configuration_manager.has_local_configuration_value("SYS/sitename")
            and configuration_manager.has_local_configuration_value("BE/adminUser")
        )
    if action == "defaultconfiguration":
        return any(
            not configuration_manager.has_local_configuration_value(path)
            for path in DEFAULT_CONFIGURATION
        )
    raise InvalidValueError(
        f'Unknown install action "{action}" (known: {", ".join(INSTALL_ACTIONS)})'
    )


class InstallEnvironmentAndFoldersCommand(NamedCommand):
    description = "Check environment / create folders"

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        created = create_missing_folders(paths)
        for folder in created:
            io.output_line("<info>Created folder %s</info>", [folder])
        if not created:
            io.output_line("Environment and folders are in place.")
        return 0


class InstallFixFolderStructureCommand(NamedCommand):
    description = "Fix folder structure"

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        created = create_missing_folders(paths)
        if not created:
            io.output_line("<success>Folder structure is ok.</success>")
            return 0

        io.output_line("The following folders have been created:")
        for folder in created:
            io.output_formatted(str(folder), left_padding=2)
        io.output_line("<success>Folder structure has been fixed.</success>")
        return 0


class InstallDatabaseConnectCommand(NamedCommand):
    description = "Connect to database"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        driver: str | None = None,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        **options: Any,
    ) -> int:
        """Write the default database connection, asking for missing values."""
        if driver is None:
            driver = io.select("Database driver:", DRIVERS, default="pdo_sqlite")
        if driver not in DRIVERS:
            raise InvalidValueError(
                f'Database driver "{driver}" is invalid (known: {", ".join(DRIVERS)})'
            )

        connection: dict[str, Any] = {"driver": driver}
        if driver != "pdo_sqlite":
            if host is None:
                host = io.ask("Database host (<comment>127.0.0.1</comment>): ", "127.0.0.1")
            if port is None:
                default_port = str(DEFAULT_PORTS[driver])
                port = io.ask_and_validate(
                    f"Database port (<comment>{default_port}</comment>): ",
                    validate_port,
                    default=default_port,
                )
            if username is None:
                username = io.ask_and_validate("Database user name: ", validate_not_empty)
            if password is None:
                password = io.ask_hidden_response("Database user password: ") or ""
            connection.update(
                host=host, port=validate_port(port), user=username, password=password
            )

        configuration_manager = ConfigurationManager(paths.settings)
        for key, value in connection.items():
            configuration_manager.set_local_configuration_value(
                f"{DATABASE_CONNECTION_PATH}/{key}", value
            )
        io.output_line("<success>Database connection for %s saved.</success>", [DRIVERS[driver]])
        return 0


class InstallDatabaseSelectCommand(NamedCommand):
    description = "Select database"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        database_name: str | None = None,
        **options: Any,
    ) -> int:
        configuration_manager = ConfigurationManager(paths.settings)
        driver = _connection(configuration_manager).get("driver")
        if not driver:
            raise ConfigurationError(
                "No database connection configured, run install:databaseconnect first"
            )

        if database_name is None:
            database_name = io.ask_and_validate(
                "Database name (<comment>typo3</comment>): ",
                validate_database_name,
                default="typo3",
            )
        else:
            database_name = validate_database_name(database_name)

        if driver == "pdo_sqlite":
            configuration_manager.set_local_configuration_value(
                f"{DATABASE_CONNECTION_PATH}/path", f"var/sqlite/{database_name}.sqlite"
            )
        else:
            configuration_manager.set_local_configuration_value(
                f"{DATABASE_CONNECTION_PATH}/dbname", database_name
            )
        io.output_line('<success>Database "%s" selected.</success>', [database_name])
        return 0


class InstallDatabaseDataCommand(BootingCommand):
    name = "install:databasedata"
    description = "Add database data"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        admin_username: str | None = None,
        admin_password: str | None = None,
        site_name: str | None = None,
        **options: Any,
    ) -> int:
        """Store the site name and the admin user, asking for missing values."""
        self.boot_service.boot()

        if admin_username is None:
            admin_username = io.ask_and_validate(
                "Admin user name (<comment>admin</comment>): ",
                validate_not_empty,
                default="admin",
            )
        if admin_password is None:
            admin_password = io.ask_hidden_response_and_validate(
                "Admin password: ", validate_admin_password, attempts=3
            )
        else:
            admin_password = validate_admin_password(admin_password)
        if site_name is None:
            site_name = io.ask("Site name (<comment>New TYPO3 site</comment>): ", "New TYPO3 site")

        self.boot_service.configuration_manager.set_local_configuration_values(
            {
                "SYS/sitename": site_name,
                "BE/adminUser": {
                    "username": validate_not_empty(admin_username),
                    "password": hash_password(admin_password),
                },
            }
        )
        io.output_line('<success>Admin user "%s" created.</success>', [admin_username])
        return 0


class InstallDefaultConfigurationCommand(BootingCommand):
    name = "install:defaultconfiguration"
    description = "Write default configuration"

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        self.boot_service.boot()
        configuration_manager = self.boot_service.configuration_manager

        written = 0
        for path, value in DEFAULT_CONFIGURATION.items():
            if configuration_manager.has_local_configuration_value(path):
                continue
            configuration_manager.set_local_configuration_value(path, value)
            written += 1

        io.output_line("<success>Default configuration written (%d values).</success>", [written])
        return 0


class InstallExtensionSetupIfPossibleCommand(NamedCommand):
    description = "Fix folder structure"

    def execute(self, io: ConsoleOutput, paths: ProjectPaths, **options: Any) -> int:
        """Record the available extensions once the application can boot."""
        configuration_manager = ConfigurationManager(paths.settings)
        if not configuration_manager.essential_configuration_exists():
            io.output_line(
                "<warning>Extension setup skipped, essential configuration is missing.</warning>"
            )
            return 0

        extensions = []
        if paths.extensions.is_dir():
            extensions = sorted(
                folder.name for folder in paths.extensions.iterdir() if folder.is_dir()
            )
        configuration_manager.set_local_configuration_value("EXT/setup", extensions)

        for extension in extensions:
            io.output_line('Set up extension "%s"', [extension])
        io.output_line("<success>Extension setup done (%d extensions).</success>", [len(extensions)])
        return 0


class InstallActionNeedsExecutionCommand(NamedCommand):
    description = "Calls needs execution on the given action and returns the result"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        action: str = "",
        **options: Any,
    ) -> int:
        io.output_line(json.dumps(action_needs_execution(action, paths)))
        return 0


class InstallSetupCommand(NamedCommand):
    description = "TYPO3 Setup"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        force: bool = False,
        **options: Any,
    ) -> int:
        """Run every install step that still needs execution.

        Options not used here (database credentials, admin user, site name)
        are handed to the steps; steps ask for whatever is missing.
        """
        boot_service = BootService(ConfigurationManager(paths.settings), paths)
        steps = [
            InstallEnvironmentAndFoldersCommand("install:environmentandfolders"),
            InstallDatabaseConnectCommand("install:databaseconnect"),
            InstallDatabaseSelectCommand("install:databaseselect"),
            InstallDatabaseDataCommand(boot_service),
            InstallDefaultConfigurationCommand(boot_service),
        ]

        io.output_line("<i>TYPO3 Setup</i>")
        summary: list[list[str]] = []
        for action, step in zip(INSTALL_ACTIONS, steps):
            if not force and not action_needs_execution(action, paths):
                logger.debug(f"Skipping {step.name}, nothing to do")
                summary.append([step.name, "skipped"])
                continue

            io.output_line()
            io.output_line("<b>%s</b>", [step.description])
            exit_code = step.run(io, paths, **options)
            if exit_code != 0:
                summary.append([step.name, "<error>failed</error>"])
                io.output_table(summary, ["Step", "Result"])
                return exit_code
            summary.append([step.name, "<success>done</success>"])

        extension_setup = InstallExtensionSetupIfPossibleCommand(
            "install:extensionsetupifpossible"
        )
        io.output_line()
        extension_setup.run(io, paths)
        summary.append([extension_setup.name, "<success>done</success>"])

        io.output_line()
        io.output_table(summary, ["Step", "Result"])
        io.output_line("<success>Successfully installed TYPO3</success>")
        return 0

"""Typer application exposing the registered commands."""

import logging
from typing import Any, List, Optional

import typer
from typing_extensions import Annotated

from typo3_console import setup_logging
from typo3_console.config import ConsoleConfig
from typo3_console.container import assemble, get_context, set_context
from typo3_console.exceptions import Typo3ConsoleError

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="TYPO3 console: installation and configuration commands.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show informational log messages")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    """Set up logging and the service container."""
    config = ConsoleConfig.from_env()
    setup_logging(verbose=verbose, quiet=quiet, config=config)
    set_context(assemble(config))


def _run(identifier: str, **options: Any) -> None:
    """Run a registered command and exit with its exit code."""
    ctx = get_context()
    try:
        command = ctx.registry.get(identifier)
        exit_code = command.run(ctx.io, ctx.paths, **options)
    except Typo3ConsoleError as e:
        logger.error(f"{identifier}: {e}")
        raise typer.Exit(1)
    if exit_code:
        raise typer.Exit(exit_code)


@app.command("list")
def list_commands() -> None:
    """List the available commands."""
    ctx = get_context()
    rows = [
        [identifier, description]
        for identifier, description in ctx.registry.descriptions().items()
    ]
    ctx.io.output_table(rows, ["Command", "Description"])


@app.command("configuration:set")
def configuration_set(
    path: Annotated[str, typer.Argument(help="Path to the value, e.g. SYS/sitename")],
    value: Annotated[str, typer.Argument(help="Value to set")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Decode the value as JSON")
    ] = False,
) -> None:
    """Set configuration value."""
    _run("configuration:set", path=path, value=value, as_json=as_json)


@app.command("configuration:remove")
def configuration_remove(
    paths: Annotated[str, typer.Argument(help="Comma separated paths to remove")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation prompt")
    ] = False,
) -> None:
    """Remove configuration value."""
    _run("configuration:remove", path=paths, force=force)


@app.command("configuration:showlocal")
def configuration_show_local(
    path: Annotated[
        str, typer.Argument(help="Path to show (whole configuration if omitted)")
    ] = "",
    as_json: Annotated[
        bool, typer.Option("--json", help="Output the value as JSON")
    ] = False,
) -> None:
    """Show local configuration value."""
    _run("configuration:showlocal", path=path, as_json=as_json)


@app.command("database:updateschema")
def database_update_schema(
    schema_update_types: Annotated[
        Optional[List[str]],
        typer.Option(
            "--schema-update-types",
            "-t",
            help="Update types to perform (safe, *, table.add, field.add)",
        ),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Only show the updates")
    ] = False,
) -> None:
    """Update database schema (TYPO3 Database Compare)."""
    _run(
        "database:updateschema",
        schema_update_types=schema_update_types,
        dry_run=dry_run,
    )


@app.command("install:setup")
def install_setup(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Run every step, even when done")
    ] = False,
    driver: Annotated[Optional[str], typer.Option(help="Database driver")] = None,
    host: Annotated[Optional[str], typer.Option(help="Database host")] = None,
    port: Annotated[Optional[int], typer.Option(help="Database port")] = None,
    username: Annotated[Optional[str], typer.Option(help="Database user name")] = None,
    password: Annotated[Optional[str], typer.Option(help="Database user password")] = None,
    database_name: Annotated[Optional[str], typer.Option(help="Database name")] = None,
    admin_username: Annotated[Optional[str], typer.Option(help="Admin user name")] = None,
    admin_password: Annotated[Optional[str], typer.Option(help="Admin password")] = None,
    site_name: Annotated[Optional[str], typer.Option(help="Site name")] = None,
) -> None:
    """TYPO3 Setup."""
    _run(
        "install:setup",
        force=force,
        driver=driver,
        host=host,
        port=port,
        username=username,
        password=password,
        database_name=database_name,
        admin_username=admin_username,
        admin_password=admin_password,
        site_name=site_name,
    )


@app.command("install:fixfolderstructure")
def install_fix_folder_structure() -> None:
    """Fix folder structure."""
    _run("install:fixfolderstructure")


@app.command("install:extensionsetupifpossible")
def install_extension_setup_if_possible() -> None:
    """Set up extensions if the application can boot."""
    _run("install:extensionsetupifpossible")


@app.command("install:environmentandfolders")
def install_environment_and_folders() -> None:
    """Check environment / create folders."""
    _run("install:environmentandfolders")


@app.command("install:databaseconnect")
def install_database_connect(
    driver: Annotated[Optional[str], typer.Option(help="Database driver")] = None,
    host: Annotated[Optional[str], typer.Option(help="Database host")] = None,
    port: Annotated[Optional[int], typer.Option(help="Database port")] = None,
    username: Annotated[Optional[str], typer.Option(help="Database user name")] = None,
    password: Annotated[Optional[str], typer.Option(help="Database user password")] = None,
) -> None:
    """Connect to database."""
    _run(
        "install:databaseconnect",
        driver=driver,
        host=host,
        port=port,
        username=username,
        password=password,
    )


@app.command("install:databasedata")
def install_database_data(
    admin_username: Annotated[Optional[str], typer.Option(help="Admin user name")] = None,
    admin_password: Annotated[Optional[str], typer.Option(help="Admin password")] = None,
    site_name: Annotated[Optional[str], typer.Option(help="Site name")] = None,
) -> None:
    """Add database data."""
    _run(
        "install:databasedata",
        admin_username=admin_username,
        admin_password=admin_password,
        site_name=site_name,
    )


@app.command("install:databaseselect")
def install_database_select(
    database_name: Annotated[Optional[str], typer.Option(help="Database name")] = None,
) -> None:
    """Select database."""
    _run("install:databaseselect", database_name=database_name)


@app.command("install:defaultconfiguration")
def install_default_configuration() -> None:
    """Write default configuration."""
    _run("install:defaultconfiguration")


@app.command("install:actionneedsexecution")
def install_action_needs_execution(
    action: Annotated[str, typer.Argument(help="Install action, e.g. databaseconnect")],
) -> None:
    """Calls needs execution on the given action and returns the result."""
    _run("install:actionneedsexecution", action=action)


@app.command("install:lock")
def install_lock() -> None:
    """Lock Install Tool."""
    _run("install:lock")


@app.command("install:unlock")
def install_unlock() -> None:
    """Unlock Install Tool."""
    _run("install:unlock")

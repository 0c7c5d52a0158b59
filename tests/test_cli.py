"""Tests for the Typer application."""

import json

import pytest
from typer.testing import CliRunner

import typo3_console.cli as cli_module
import typo3_console.container as container_module
from typo3_console.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def project(tmp_path, monkeypatch):
    """Run every command in an empty project without touching logging."""
    monkeypatch.setenv("TYPO3_PATH_APP", str(tmp_path))
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.delenv("TYPO3_PATH_ROOT", raising=False)
    monkeypatch.delenv("TYPO3_CONSOLE_MAX_ATTEMPTS", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli_module, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(container_module, "_container", None)
    return tmp_path


def _setup(*extra):
    return runner.invoke(
        app,
        [
            "install:setup",
            "--driver",
            "pdo_sqlite",
            "--database-name",
            "site",
            "--admin-username",
            "admin",
            "--admin-password",
            "password1",
            "--site-name",
            "CLI Site",
            *extra,
        ],
    )


def test_list_shows_commands():
    """Test the list command shows every command with its description."""
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "install:setup" in result.stdout
    assert "Update database schema (TYPO3 Database Compare)" in result.stdout


def test_configuration_commands_need_setup():
    """Test configuration commands fail before the installation."""
    result = runner.invoke(app, ["configuration:set", "SYS/sitename", "x"])
    assert result.exit_code == 1


def test_setup_then_configure(project):
    """Test a full installation followed by configuration commands."""
    result = _setup()
    assert result.exit_code == 0, result.stdout
    assert "Successfully installed TYPO3" in result.stdout

    result = runner.invoke(app, ["configuration:set", "SYS/features", '["a"]', "--json"])
    assert result.exit_code == 0, result.stdout

    result = runner.invoke(app, ["configuration:showlocal", "SYS/features"])
    assert json.loads(result.stdout) == ["a"]

    result = runner.invoke(app, ["configuration:remove", "SYS/features", "--force"])
    assert result.exit_code == 0
    result = runner.invoke(app, ["configuration:showlocal", "SYS/features"])
    assert result.exit_code == 1


def test_action_needs_execution():
    """Test the needs-execution check prints JSON."""
    result = runner.invoke(app, ["install:actionneedsexecution", "databaseconnect"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "true"

    result = runner.invoke(app, ["install:actionneedsexecution", "nothing"])
    assert result.exit_code == 1


def test_unlock_and_lock(project):
    """Test the install tool lock commands."""
    assert runner.invoke(app, ["install:unlock"]).exit_code == 0
    assert (project / "var" / "transient" / "ENABLE_INSTALL_TOOL").exists()
    assert runner.invoke(app, ["install:lock"]).exit_code == 0
    assert not (project / "var" / "transient" / "ENABLE_INSTALL_TOOL").exists()


def test_update_schema_dry_run(project):
    """Test database:updateschema after setup."""
    assert _setup().exit_code == 0
    extension = project / "extensions" / "site"
    extension.mkdir(parents=True)
    (extension / "ext_tables.sql").write_text("CREATE TABLE tx_site (uid INTEGER);")

    result = runner.invoke(app, ["database:updateschema", "--dry-run", "-t", "safe"])
    assert result.exit_code == 0, result.stdout
    assert "tx_site" in result.stdout


def test_update_schema_needs_setup():
    """Test database:updateschema fails without essential configuration."""
    result = runner.invoke(app, ["database:updateschema"])
    assert result.exit_code == 1


def test_database_select_interactive():
    """Test answers are read from standard input."""
    assert runner.invoke(app, ["install:databaseconnect", "--driver", "pdo_sqlite"]).exit_code == 0
    result = runner.invoke(app, ["install:databaseselect"], input="mysite\n")
    assert result.exit_code == 0, result.stdout
    assert 'Database "mysite" selected.' in result.stdout

import io

import pytest
from rich.console import Console

from typo3_console.config import SUB_PROCESS_ENV, ConsoleConfig
from typo3_console.console import ConsoleOutput
from typo3_console.core.boot_service import BootService
from typo3_console.core.configuration_manager import ConfigurationManager
from typo3_console.core.paths import ProjectPaths


@pytest.fixture(autouse=True)
def no_sub_process(monkeypatch):
    """Run every test with styled (not raw) output unless it opts in."""
    monkeypatch.delenv(SUB_PROCESS_ENV, raising=False)


@pytest.fixture
def console():
    """Rich console writing plain text to a buffer."""
    return Console(file=io.StringIO(), width=80, color_system=None)


@pytest.fixture
def make_io(console):
    """Create a ConsoleOutput answering questions from the given text."""

    def _make(answers: str = "", **kwargs) -> ConsoleOutput:
        return ConsoleOutput(console=console, input_stream=io.StringIO(answers), **kwargs)

    return _make


@pytest.fixture
def output(console):
    """Return everything written to the test console so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def paths(tmp_path):
    """Project paths inside a temporary project."""
    return ProjectPaths.from_config(ConsoleConfig(project_path=tmp_path))


@pytest.fixture
def configuration_manager(paths):
    return ConfigurationManager(paths.settings)


@pytest.fixture
def sqlite_project(paths, configuration_manager):
    """Project with a configured SQLite database connection."""
    configuration_manager.set_local_configuration_value(
        "DB/Connections/Default",
        {"driver": "pdo_sqlite", "path": "var/sqlite/typo3.sqlite"},
    )
    return paths


@pytest.fixture
def boot_service(paths, configuration_manager):
    return BootService(configuration_manager, paths)

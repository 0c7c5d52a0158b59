"""Project paths dataclass for consistent path access."""

from dataclasses import dataclass
from pathlib import Path

from typo3_console.config import ConsoleConfig


@dataclass(frozen=True)
class ProjectPaths:
    """Paths of a TYPO3 project.

    Always returns paths regardless of whether they exist.
    """

    project: Path  # composer project root (TYPO3_PATH_APP)
    public: Path  # web root (TYPO3_PATH_ROOT)
    settings: Path  # local configuration file

    @classmethod
    def from_config(cls, config: ConsoleConfig) -> "ProjectPaths":
        project = config.project_path
        public = config.public_path
        if not public.is_absolute():
            public = project / public
        settings = config.settings_file
        if not settings.is_absolute():
            settings = project / settings
        return cls(project=project, public=public, settings=settings)

    @property
    def var(self) -> Path:
        return self.project / "var"

    @property
    def extensions(self) -> Path:
        return self.project / "extensions"

    @property
    def install_tool_lock(self) -> Path:
        """File whose presence enables the install tool."""
        return self.var / "transient" / "ENABLE_INSTALL_TOOL"

    @property
    def required_folders(self) -> list[Path]:
        """Folders a working installation needs."""
        return [
            self.public / "fileadmin",
            self.public / "fileadmin" / "_temp_",
            self.public / "typo3temp",
            self.public / "typo3temp" / "assets",
            self.settings.parent,
            self.extensions,
            self.var / "cache",
            self.var / "lock",
            self.var / "log",
            self.var / "transient",
        ]

    def missing_folders(self) -> list[Path]:
        return [folder for folder in self.required_folders if not folder.is_dir()]

"""Configuration for the TYPO3 console."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

SUB_PROCESS_ENV = "TYPO3_CONSOLE_SUB_PROCESS"


def is_sub_process() -> bool:
    """Whether output is consumed by a parent console process.

    Any non-empty value counts, "0" included.
    """
    return bool(os.environ.get(SUB_PROCESS_ENV))


class ConsoleConfig(BaseModel):
    """Console configuration with Pydantic validation."""

    # Project layout
    project_path: Path = Field(default=Path("."))
    public_path: Path = Field(default=Path("public"))
    settings_file: Path = Field(default=Path("config/system/settings.json"))

    # Logging
    log_dir: Path = Field(default=Path("var/log"))
    log_filename: str = Field(default="typo3_console.log")

    # Prompts
    max_attempts: int | None = Field(default=None, ge=1)

    @classmethod
    def from_env(cls) -> "ConsoleConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv()

        config_dict = {}

        if "TYPO3_PATH_APP" in os.environ:
            config_dict["project_path"] = Path(os.environ["TYPO3_PATH_APP"])
        if "TYPO3_PATH_ROOT" in os.environ:
            config_dict["public_path"] = Path(os.environ["TYPO3_PATH_ROOT"])

        if "TYPO3_CONSOLE_LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["TYPO3_CONSOLE_LOG_DIR"])
        if "TYPO3_CONSOLE_LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["TYPO3_CONSOLE_LOG_FILENAME"]

        if "TYPO3_CONSOLE_MAX_ATTEMPTS" in os.environ:
            try:
                max_attempts = int(os.environ["TYPO3_CONSOLE_MAX_ATTEMPTS"])
            except ValueError:
                max_attempts = 0
            # Keep default (unlimited) if invalid
            if max_attempts > 0:
                config_dict["max_attempts"] = max_attempts

        return cls(**config_dict)

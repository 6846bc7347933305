"""Configuration module for the Dev Notes MCP server."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from devnotes_mcp import __version__

# Load environment variables from the project root .env file.
# Anchored to __file__ so it works regardless of the process CWD
# (e.g. when launched by an MCP client as a subprocess).
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# User-level config, kept outside the notes directory
_USER_ENV = Path.home() / ".dev-notes" / ".env"
load_dotenv(_USER_ENV)

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DevNotesConfig(BaseModel):
    """Configuration for the Dev Notes server.

    All values are resolved once when the instance is created. The notes
    directory stays fixed for the lifetime of a server process.
    """

    # Environment-derived defaults go through the validators too
    model_config = ConfigDict(validate_default=True)

    # Storage configuration
    notes_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("DEV_NOTES_DIR", str(Path.home() / "dev-notes"))
        )
    )
    note_extension: str = Field(default=".md")
    # Server identity
    server_name: str = Field(
        default_factory=lambda: os.getenv("DEV_NOTES_SERVER_NAME", "dev-notes-server")
    )
    server_version: str = Field(default=__version__)
    # Logging configuration (stderr always, rotating file only when log_dir is set)
    log_level: str = Field(
        default_factory=lambda: os.getenv("DEV_NOTES_LOG_LEVEL", "INFO")
    )
    log_dir: Optional[Path] = Field(
        default_factory=lambda: (
            Path(os.getenv("DEV_NOTES_LOG_DIR"))
            if os.getenv("DEV_NOTES_LOG_DIR")
            else None
        )
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name and reject unknown levels."""
        level = v.strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}, got {v!r}"
            )
        return level

    @field_validator("note_extension")
    @classmethod
    def validate_note_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("note_extension must start with '.'")
        return v

    def get_notes_dir(self) -> Path:
        """Get the absolute notes directory, with ``~`` expanded."""
        return self.notes_dir.expanduser().absolute()

    def get_log_dir(self) -> Optional[Path]:
        """Get the absolute log directory, or None when file logging is off."""
        if self.log_dir is None:
            return None
        return self.log_dir.expanduser().absolute()


# Create a global config instance
config = DevNotesConfig()

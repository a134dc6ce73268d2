"""Settings model for the sync service."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .error_codes import ErrorCode
from .exceptions import ConfigurationError

DEFAULT_MANAGED_TAG = "obsidian_simple_anki_sync_created"


class Config(BaseSettings):
    """Service configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Obsidian
    # Empty from env means unset; validate_config reports it
    vault_path: Path | str = Field(default="", description="Path to Obsidian vault")
    vault_name: str | None = Field(
        default=None,
        description="Vault name used in obsidian:// back-links (defaults to the vault folder name)",
    )
    excluded_dirs: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [".obsidian", ".trash", ".git"],
        description="Vault folders never scanned for documents",
    )

    # Anki
    anki_connect_url: str = Field(
        default="http://127.0.0.1:8765", description="AnkiConnect URL"
    )
    anki_timeout: float = Field(
        default=30.0, gt=0, description="AnkiConnect request timeout in seconds"
    )
    anki_note_type: str = Field(default="Basic", description="Anki note type")
    front_field: str = Field(default="Front", description="Note type field for the front")
    back_field: str = Field(default="Back", description="Note type field for the back")
    managed_tag: str = Field(
        default=DEFAULT_MANAGED_TAG,
        description="Tag carried by every note this tool creates or updates",
    )

    # Back-link appended to the back field
    include_backlink: bool = Field(
        default=True, description="Append an obsidian:// link to the back field"
    )
    backlink_label: str = Field(default="Obsidian Note", description="Back-link text")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_dir: Path | None = Field(
        default=None, description="Directory for JSON log files (disabled when unset)"
    )

    @field_validator("vault_path", mode="before")
    @classmethod
    def parse_vault_path(cls, v: Any) -> Path:
        """Convert string to an absolute Path for vault_path."""
        if v is None or v == "":
            return Path()
        if isinstance(v, (str, Path)):
            return Path(v).expanduser().resolve()
        msg = f"vault_path must be string or Path, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("log_dir", mode="before")
    @classmethod
    def parse_log_dir(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(str(v)).expanduser()

    @field_validator("excluded_dirs", mode="before")
    @classmethod
    def parse_excluded_dirs(cls, v: Any) -> list[str]:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("managed_tag")
    @classmethod
    def validate_managed_tag(cls, v: str) -> str:
        if not v or any(ch.isspace() for ch in v):
            msg = "managed_tag must be a single non-empty Anki tag (no whitespace)"
            raise ValueError(msg)
        return v

    @property
    def effective_vault_name(self) -> str:
        """Vault name for back-links."""
        return self.vault_name or self.vault_path.name

    def validate_config(self) -> None:
        """Validate settings that depend on the filesystem.

        Raises:
            ConfigurationError: If the vault path is unset or not a directory
        """
        if self.vault_path == Path() or not str(self.vault_path):
            raise ConfigurationError(
                "VAULT_PATH is not configured",
                suggestion="Set VAULT_PATH in your .env file, config.yaml or environment",
                error_code=ErrorCode.CFG_INVALID.value,
            )
        if not self.vault_path.is_dir():
            raise ConfigurationError(
                f"Vault path is not a directory: {self.vault_path}",
                suggestion="Point VAULT_PATH at the root folder of your Obsidian vault",
                error_code=ErrorCode.CFG_INVALID.value,
                context={"vault_path": str(self.vault_path)},
            )
        if self.front_field == self.back_field:
            raise ConfigurationError(
                "front_field and back_field must name different note fields",
                error_code=ErrorCode.CFG_INVALID.value,
            )

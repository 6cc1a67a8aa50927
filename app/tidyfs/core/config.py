"""Maintenance configuration and settings.

This module provides the immutable configuration model shared by every
operation, and the I/O functions that read and write it.

Configuration is stored in ~/.config/tidyfs/config.toml. It is read once
at startup, merged with command-line overrides, and passed explicitly to
each component; nothing modifies it afterwards.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tidyfs.core.paths import get_config_path

logger = logging.getLogger(__name__)

# Files at or below this size are never considered for duplicate detection
DEFAULT_MIN_DUPLICATE_SIZE = 1024 * 1024


class MaintenanceConfig(BaseModel):
    """Configuration for a tidyfs run.

    Attributes:
        target_dir: Directory whose files are normalized by rename.
        duplicate_dir: Directory tree searched for duplicate files.
        log_days: Age in days after which system logs are deleted.
        dry_run: Preview mode; describe actions without performing them.
        min_duplicate_size: Only files strictly larger than this are compared.
        workspace_dir: Parent directory for the scoped workspace
            (None = system temporary directory).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_dir: Annotated[
        Path,
        Field(default_factory=Path.home, description="Directory to normalize filenames in"),
    ]
    duplicate_dir: Annotated[
        Path,
        Field(
            default_factory=lambda: Path.home() / "Documents",
            description="Directory tree to search for duplicates",
        ),
    ]
    log_days: Annotated[
        int,
        Field(ge=0, description="Delete system logs older than this many days"),
    ] = 7
    dry_run: Annotated[
        bool,
        Field(description="Describe actions instead of performing them"),
    ] = True
    min_duplicate_size: Annotated[
        int,
        Field(ge=0, description="Minimum file size in bytes for duplicate detection"),
    ] = DEFAULT_MIN_DUPLICATE_SIZE
    workspace_dir: Annotated[
        Path | None,
        Field(description="Parent directory for temporary scratch data"),
    ] = None

    @field_validator("target_dir", "duplicate_dir", "workspace_dir", mode="after")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ~ in configured directories."""
        if v is None:
            return None
        return v.expanduser()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_config(path: Path | None = None, **overrides: Any) -> MaintenanceConfig:
    """Load configuration from a TOML file and apply overrides.

    A missing file is not an error: defaults are used. Overrides whose
    value is None are ignored, so CLI options that were not given leave
    the file value in place.

    Args:
        path: Path to the config file. If None, uses the default path.
        **overrides: Field values taking precedence over the file.

    Returns:
        Validated, immutable MaintenanceConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()
    data: dict[str, Any] = {}

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config {config_path}: {e}") from e
        logger.debug("Loaded configuration from %s", config_path)
    else:
        logger.debug("No configuration file at %s, using defaults", config_path)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return MaintenanceConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def save_config(config: MaintenanceConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The configuration to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: MaintenanceConfig) -> dict[str, Any]:
    """Convert a configuration to a TOML-serializable dictionary.

    None values are omitted since TOML has no null.
    """
    result: dict[str, Any] = {}
    for key, value in config.model_dump().items():
        if value is None:
            continue
        result[key] = str(value) if isinstance(value, Path) else value
    return result

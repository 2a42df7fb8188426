"""Configuration model and TOML I/O.

The configuration selects the external program used to open files and,
optionally, relocates the trash directory. It is loaded once and injected
into the engine as an immutable value.

Configuration is stored in ~/.config/filemanip/config.toml::

    default = "xdg-open"
    trash_dir = "/data/trash"

    [exec]
    feh = ["jpg", "jpeg", "png"]
    zathura = ["pdf"]
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from filemanip.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM = "xdg-open"


class Config(BaseModel):
    """Immutable configuration injected into the engine.

    Attributes:
        default: Program used when no extension mapping matches.
        exec: Map of program name to the file extensions it opens.
        trash_dir: Optional trash directory override.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    default: Annotated[
        str,
        Field(min_length=1, description="Fallback program for opening files"),
    ] = DEFAULT_PROGRAM
    exec: Annotated[
        dict[str, list[str]],
        Field(description="Program -> extensions it opens"),
    ] = Field(default_factory=dict)
    trash_dir: Annotated[
        Path | None,
        Field(description="Trash directory (None = XDG data dir)"),
    ] = None

    @field_validator("exec")
    @classmethod
    def validate_exec(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Normalize extensions: lower-case, no leading dot."""
        return {
            program: [ext.strip().lstrip(".").lower() for ext in extensions if ext.strip()]
            for program, extensions in v.items()
        }

    @property
    def extension_map(self) -> dict[str, str]:
        """Invert ``exec`` into an extension -> program lookup.

        When two programs claim the same extension the one listed last wins.
        """
        mapping: dict[str, str] = {}
        for program, extensions in self.exec.items():
            for ext in extensions:
                mapping[ext] = program
        return mapping


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> Config:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated Config object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return Config.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> Config:
    """Load configuration, falling back to defaults when the file is absent.

    Parse and schema errors still propagate; only a missing file is tolerated.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return Config()


def save_config(config: Config, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The Config object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
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


def _config_to_dict(config: Config) -> dict[str, object]:
    """Convert Config to a dictionary for TOML serialization.

    Only includes non-None values since TOML has no null.
    """
    result: dict[str, object] = {"default": config.default}

    if config.trash_dir is not None:
        result["trash_dir"] = str(config.trash_dir)

    result["exec"] = {program: list(exts) for program, exts in config.exec.items()}
    return result

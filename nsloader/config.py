"""Loader configuration.

LoaderConfig holds the options consulted on every lookup. LoaderSettings adds
the declarative registration data (delimiters, search paths, prefixes, module
tree) so a whole loader can be described in one YAML file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

from .errors import ConfigurationError
from .paths import PathEntry

logger = logging.getLogger(__name__)

BASE_PATH_ENV = "NSLOADER_APPLICATION_PATH"
DEFAULT_FILE_EXTENSION = ".py"


def default_base_path() -> Path:
    """Two directory levels above the directory holding the resolver."""
    return Path(__file__).resolve().parent.parent.parent


class LoaderConfig(BaseModel):
    """Options consulted on every lookup."""

    strict: bool = Field(default=False, description="Require an exact extension match")
    auto_register: bool = Field(default=False, description="Install the import hook on construction")
    file_extension: str = Field(default=DEFAULT_FILE_EXTENSION, description="Extension for module-tree lookups")
    base_path: Path | None = Field(None, description="Directory module paths are anchored to")

    @classmethod
    def from_env(cls, **overrides: Any) -> "LoaderConfig":
        """Build a config, taking base_path from NSLOADER_APPLICATION_PATH when set."""
        if "base_path" not in overrides and (env_value := os.getenv(BASE_PATH_ENV)):
            logger.debug(f"[nsloader:config] base path from {BASE_PATH_ENV}: {env_value}")
            overrides["base_path"] = Path(env_value)
        return cls(**overrides)

    def effective_base_path(self) -> Path:
        return self.base_path if self.base_path is not None else default_base_path()


class ModuleSettings(BaseModel):
    """One node of a declaratively configured module tree."""

    path: str = Field(default="", description="Relative or absolute directory fragment")
    extensions: list[str] = Field(default_factory=list, description="Extensions for files in this module")
    modules: dict[str, "ModuleSettings"] = Field(default_factory=dict, description="Submodules by identifier")


class LoaderSettings(LoaderConfig):
    """Complete loader description, as read from a settings file."""

    delimiters: list[str] = Field(default_factory=list, description="Delimiters added to the default one")
    paths: list[PathEntry] = Field(default_factory=list, description="Fallback search paths, in order")
    prefixes: dict[str, list[str]] = Field(default_factory=dict, description="Prefixes by directory")
    modules: dict[str, ModuleSettings] = Field(default_factory=dict, description="Top-level modules")

    def options(self) -> LoaderConfig:
        return LoaderConfig(
            strict=self.strict,
            auto_register=self.auto_register,
            file_extension=self.file_extension,
            base_path=self.base_path,
        )


def load_settings(path: str | Path) -> LoaderSettings:
    """Read and validate a YAML settings file.

    A relative base_path in the file is anchored to the file's directory, and
    NSLOADER_APPLICATION_PATH applies when the file sets none.

    Raises:
        ConfigurationError: File missing, unreadable, or invalid
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {config_path} must contain a mapping")

    if data.get("base_path") is None and (env_value := os.getenv(BASE_PATH_ENV)):
        data["base_path"] = env_value

    try:
        settings = LoaderSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {config_path}:\n{e}") from e

    if settings.base_path is not None and not settings.base_path.is_absolute():
        settings.base_path = (config_path.parent / settings.base_path).resolve()

    logger.debug(f"[nsloader:config] loaded settings from {config_path}")
    return settings

"""YAML configuration for govm.

This module defines the on-disk layout and download settings as one explicit
value (GovmConfig) that is threaded into every entry point, and loads
overrides for it from an optional YAML file.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from govm.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BASE = "/usr/local"
DEFAULT_URL_TEMPLATE = "https://go.dev/dl/go{version}.{os}-{arch}.tar.gz"
CONFIG_ENV_VAR = "GOVM_CONFIG"


def default_config_path() -> Path:
    """Get the per-user configuration file path (~/.config/govm/config.yaml)."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    root = Path(xdg) if xdg else Path.home() / ".config"
    return root / "govm" / "config.yaml"


@dataclass(frozen=True)
class GovmConfig:
    """Layout of the managed installations and download settings."""

    base: Path = Path(DEFAULT_BASE)
    """Base directory of all other paths"""

    root_dir: str = "go"
    """Name of the toolchain root symlink, relative to base"""

    versions_dir: str = "govm/go-versions"
    """Directory holding one installation per version, relative to base"""

    version_file: str = ".govm"
    """Project marker file naming the default version"""

    root_env_var: str = "GOROOT"
    """Environment variable that overrides the toolchain root location"""

    url_template: str = DEFAULT_URL_TEMPLATE
    """Download URL with {version}, {os} and {arch} placeholders"""

    show_progress: bool = True
    """Whether installs draw a spinner on the output stream"""

    def __post_init__(self):
        object.__setattr__(self, "base", Path(self.base).expanduser())
        if not self.root_dir:
            raise ConfigError("root_dir cannot be empty")
        if not self.versions_dir:
            raise ConfigError("versions_dir cannot be empty")

    @property
    def root_path(self) -> Path:
        """Configured toolchain root (ignores the environment override)."""
        return self.base / self.root_dir

    @property
    def versions_path(self) -> Path:
        return self.base / self.versions_dir

    def installation(self, version) -> Path:
        """
        Get the installation directory for a version.

        Args:
            version: Version instance (its canonical token names the directory)

        Returns:
            Path of the form <versions_path>/go<token>
        """
        return self.versions_path / f"go{version.token}"

    def with_overrides(self, **overrides: Any) -> "GovmConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _parse_and_validate(data: Dict[str, Any], source: Path) -> GovmConfig:
    """Parse and validate a configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {source} must be a mapping")

    known = {f.name for f in fields(GovmConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys in {source}: {', '.join(unknown)}")

    if "show_progress" in data and not isinstance(data["show_progress"], bool):
        raise ConfigError("show_progress must be a boolean")

    for key in ("root_dir", "versions_dir", "version_file", "root_env_var", "url_template"):
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"{key} must be a string")

    template = data.get("url_template")
    if template is not None and "{version}" not in template:
        raise ConfigError("url_template must contain a {version} placeholder")

    return GovmConfig(**data)


def load_config(config_path: Optional[Union[str, Path]] = None) -> GovmConfig:
    """
    Load configuration from YAML.

    Lookup order: explicit path, $GOVM_CONFIG, ~/.config/govm/config.yaml.
    An explicit path must exist; the implicit ones are optional.

    Args:
        config_path: Optional explicit configuration file

    Returns:
        Parsed configuration (defaults when no file is found)

    Raises:
        ConfigError: If the file is missing (explicit path), unreadable or invalid
    """
    required = config_path is not None
    if config_path is None and os.environ.get(CONFIG_ENV_VAR):
        config_path = os.environ[CONFIG_ENV_VAR]
        required = True
    path = Path(config_path).expanduser() if config_path else default_config_path()

    if not path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug(f"Config file not found (optional): {path}")
        return GovmConfig()

    logger.debug(f"Loading configuration from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if data is None:
        return GovmConfig()
    return _parse_and_validate(data, path)

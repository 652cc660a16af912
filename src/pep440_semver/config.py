# SPDX-License-Identifier: MIT
"""Configuration loading from pyproject.toml and the environment.

Settings live in the ``[tool.pep440-semver]`` table:

    [tool.pep440-semver]
    include_prereleases = true
    lossy_semver = false

Environment variables ``PEP440_SEMVER_INCLUDE_PRERELEASES`` and
``PEP440_SEMVER_LOSSY_SEMVER`` override the file.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

TOOL_TABLE = "pep440-semver"
ENV_PREFIX = "PEP440_SEMVER_"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


@dataclass
class ToolConfig:
    """Default behaviour for matching and conversion.

    Attributes:
        include_prereleases: Let specifier sets accept pre-release versions
        lossy_semver: Truncate instead of failing when converting to semver
        project_dir: Directory the configuration was read from, if any
    """

    include_prereleases: bool = False
    lossy_semver: bool = False
    project_dir: Optional[Path] = None

    @classmethod
    def from_pyproject(cls, project_dir: str | Path) -> "ToolConfig":
        """Load configuration from pyproject.toml.

        A missing file gives the default configuration.

        Raises:
            ConfigError: If the file is not valid TOML or has bad values
        """
        project_path = Path(project_dir)
        pyproject_path = project_path / "pyproject.toml"

        if not pyproject_path.exists():
            return cls(project_dir=project_path)

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {pyproject_path}: {e}") from e

        return cls.from_pyproject_dict(pyproject, project_path)

    @classmethod
    def from_pyproject_dict(
        cls,
        pyproject: dict[str, Any],
        project_dir: Optional[Path] = None,
    ) -> "ToolConfig":
        """Create ToolConfig from a parsed pyproject.toml dictionary."""
        tool = pyproject.get("tool", {})
        if not isinstance(tool, dict):
            raise ConfigError("[tool] must be a table")
        table = tool.get(TOOL_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[tool.{TOOL_TABLE}] must be a table")

        known = {f.name for f in fields(cls) if f.name != "project_dir"}
        unknown = sorted(set(table) - known)
        if unknown:
            raise ConfigError(f"Unknown keys in [tool.{TOOL_TABLE}]: {', '.join(unknown)}")

        values: dict[str, bool] = {}
        for key, value in table.items():
            if not isinstance(value, bool):
                raise ConfigError(
                    f"[tool.{TOOL_TABLE}].{key} must be a boolean, got {type(value).__name__}"
                )
            values[key] = value

        return cls(project_dir=project_dir, **values)

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "ToolConfig":
        """Override values from ``PEP440_SEMVER_*`` environment variables.

        Raises:
            ConfigError: If a variable is not a recognizable boolean
        """
        environ = os.environ if environ is None else environ

        for name in ("include_prereleases", "lossy_semver"):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            value = raw.strip().lower()
            if value in _TRUE_VALUES:
                setattr(self, name, True)
            elif value in _FALSE_VALUES:
                setattr(self, name, False)
            else:
                raise ConfigError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {raw!r}")

        return self


def find_project_root(start_dir: Optional[str | Path] = None) -> Optional[Path]:
    """Find the nearest directory containing pyproject.toml.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the project root, or None if there is none
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent

    return None


def load_config(
    project_dir: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ToolConfig:
    """Load configuration for the project directory.

    Args:
        project_dir: Project directory (defaults to finding project root)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ToolConfig instance, with defaults where nothing is configured

    Raises:
        ConfigError: If configuration cannot be loaded
    """
    if project_dir is None:
        project_dir = find_project_root()

    if project_dir is None:
        config = ToolConfig()
    else:
        config = ToolConfig.from_pyproject(project_dir)

    return config.apply_env(environ)

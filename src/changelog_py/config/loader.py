"""Configuration loading from pyproject.toml.

Settings live under ``[tool.changelog-py]``. Keyword overrides passed to
load_config() win over file values, so a caller can layer command line
options on top.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from changelog_py.config.models import ChangelogConfig
from changelog_py.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_SECTION = "changelog-py"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in start or any of its parents.

    Args:
        start: Directory to start searching from, defaults to cwd

    Returns:
        Path to pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or any parent directory")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_changelog_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.changelog-py]`` table, or an empty dict.

    Keys are normalized to snake_case so ``commitLimit``, ``commit-limit``
    and ``commit_limit`` all name the same option.
    """
    section = pyproject.get("tool", {}).get(TOOL_SECTION, {})
    return _normalize_keys(section)


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {to_snake(key.replace("-", "_")): value for key, value in data.items()}


def build_config(data: dict[str, Any]) -> ChangelogConfig:
    """Validate raw option values into a ChangelogConfig.

    Raises:
        ConfigValidationError: If any option is invalid
    """
    try:
        return ChangelogConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid changelog-py configuration:\n{e}") from e


def load_config(path: Path | None = None, **overrides: Any) -> ChangelogConfig:
    """Load configuration for the project at path.

    Args:
        path: Project directory or pyproject.toml, defaults to cwd
        **overrides: Option values taking precedence over the file

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If no pyproject.toml can be found
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        pyproject_path = find_pyproject_toml(path)

    data = extract_changelog_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded %d option(s) from %s", len(data), pyproject_path)

    data.update(_normalize_keys({k: v for k, v in overrides.items() if v is not None}))
    return build_config(data)

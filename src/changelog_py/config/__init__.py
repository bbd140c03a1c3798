"""Configuration management for changelog-py."""

from __future__ import annotations

from changelog_py.config.loader import build_config, load_config
from changelog_py.config.models import ChangelogConfig, CompiledPatterns, SortCommits

__all__ = [
    "ChangelogConfig",
    "CompiledPatterns",
    "SortCommits",
    "build_config",
    "load_config",
]

"""changelog-py - build changelog release entries from git history."""

from __future__ import annotations

from changelog_py.config import ChangelogConfig, load_config
from changelog_py.core import Release, build_changelog
from changelog_py.vcs import Commit, CompareUrlRemote

__version__ = "0.1.0"

__all__ = [
    "ChangelogConfig",
    "Commit",
    "CompareUrlRemote",
    "Release",
    "__version__",
    "build_changelog",
    "load_config",
]

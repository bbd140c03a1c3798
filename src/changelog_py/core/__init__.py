"""Core business logic for changelog-py.

This module contains the release construction pipeline:
- Semantic version parsing and comparison of release tags
- Commit classification, filtering, sorting and truncation
- Grouping commits into releases and ordering the result
"""

from __future__ import annotations

from changelog_py.core.commits import (
    ClassifiedCommit,
    CommitCategory,
    CommitsByCategory,
    categorize_commits,
    classify_commit,
    filter_commit,
    get_summary,
    slice_commits,
    sort_commits,
)
from changelog_py.core.releases import (
    Release,
    build_changelog,
    compare_releases,
    dedupe_releases,
    filter_releases_by_tag,
    get_releases,
    group_commits_by_version,
    parse_releases,
    sort_releases,
)
from changelog_py.core.version import SemVer, infer_semver, is_valid_semver, parse_semver

__all__ = [
    # Commits
    "ClassifiedCommit",
    "CommitCategory",
    "CommitsByCategory",
    # Releases
    "Release",
    # Version
    "SemVer",
    "build_changelog",
    "categorize_commits",
    "classify_commit",
    "compare_releases",
    "dedupe_releases",
    "filter_commit",
    "filter_releases_by_tag",
    "get_releases",
    "get_summary",
    "group_commits_by_version",
    "infer_semver",
    "is_valid_semver",
    "parse_releases",
    "parse_semver",
    "slice_commits",
    "sort_commits",
    "sort_releases",
]

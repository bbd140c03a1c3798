"""Release construction from commit history.

The commit history (newest first) is split into one bucket per release
tag, every bucket is turned into a Release, and releases from all
gathered branches are deduplicated and ordered newest first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any

from changelog_py.config.models import CompiledPatterns
from changelog_py.core.commits import (
    ClassifiedCommit,
    categorize_commits,
    classify_commit,
    filter_commit,
    get_summary,
    slice_commits,
    sort_commits,
)
from changelog_py.core.version import compare_semver, infer_semver, is_valid_semver, version_diff
from changelog_py.vcs.models import FixReference

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Iterable, Sequence

    from changelog_py.config.models import ChangelogConfig
    from changelog_py.vcs.models import Commit, MergeInfo
    from changelog_py.vcs.remote import Remote

    FetchBranchCommits = Callable[[str], Sequence[Commit]]

logger = logging.getLogger(__name__)

UNRELEASED_TITLE = "Unreleased"
HEAD_REF = "HEAD"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def nice_date(value: datetime) -> str:
    """Format a date like ``1 March 2020``, in UTC."""
    utc = value.astimezone(UTC)
    return f"{utc.day} {MONTH_NAMES[utc.month - 1]} {utc.year}"


@dataclass(frozen=True)
class Release:
    """A changelog section: one tag and the commits that went into it.

    Category tuples are None when empty; to_dict() omits their keys.
    """

    tag: str | None
    title: str
    date: datetime
    iso_date: str
    nice_date: str
    feature_commits: tuple[ClassifiedCommit, ...] | None = None
    bug_fix_commits: tuple[ClassifiedCommit, ...] | None = None
    improvement_commits: tuple[ClassifiedCommit, ...] | None = None
    other_commits: tuple[ClassifiedCommit, ...] | None = None
    all_commits: tuple[ClassifiedCommit, ...] | None = None
    merges: tuple[MergeInfo, ...] = field(default_factory=tuple)
    fixes: tuple[FixReference, ...] = field(default_factory=tuple)
    summary: str | None = None
    major: bool = False
    href: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Template context for this release, with camelCase keys."""

        data: dict[str, Any] = {
            "tag": self.tag,
            "title": self.title,
            "date": self.date.isoformat(),
            "isoDate": self.iso_date,
            "niceDate": self.nice_date,
            "merges": [
                {"id": m.id, "message": m.message, "href": m.href, "author": m.author}
                for m in self.merges
            ],
            "fixes": [
                {
                    "fixes": list(f.fixes),
                    "commit": _commit_to_dict(classify_commit(f.commit)),
                }
                for f in self.fixes
            ],
            "summary": self.summary,
            "major": self.major,
            "href": self.href,
        }
        # Empty categories are left out entirely
        buckets = {
            "featureCommits": self.feature_commits,
            "bugFixCommits": self.bug_fix_commits,
            "improvementCommits": self.improvement_commits,
            "otherCommits": self.other_commits,
            "allCommits": self.all_commits,
        }
        for key, items in buckets.items():
            if items is not None:
                data[key] = [_commit_to_dict(item) for item in items]
        return data


def _commit_to_dict(item: ClassifiedCommit) -> dict[str, Any]:
    commit = item.commit
    return {
        "hash": commit.hash,
        "shorthash": commit.short_hash,
        "subject": item.subject,
        "message": commit.message,
        "date": commit.date.isoformat() if commit.date else None,
        "breaking": commit.breaking,
        "insertions": commit.insertions,
        "deletions": commit.deletions,
        "feature": item.feature,
        "bugFix": item.bug_fix,
        "enhancement": item.enhancement,
        "deprecate": item.deprecate,
        "remove": item.remove,
    }


def group_commits_by_version(
    commits: Iterable[Commit],
    latest_version: str | None = None,
) -> dict[str | None, list[Commit]]:
    """Split history into per-release buckets.

    Commits are scanned newest first. A tagged commit opens the bucket for
    its own tag; untagged commits join the most recently opened bucket.
    Commits seen before any tag go under latest_version, or under the None
    key (unreleased) when no latest version is known.

    Returns:
        Buckets in the order their keys were first seen
    """
    buckets: dict[str | None, list[Commit]] = {}
    version = latest_version
    for commit in commits:
        version = commit.tag or version
        buckets.setdefault(version, []).append(commit)
    return buckets


def _build_release(
    key: str | None,
    commits: Sequence[Commit],
    previous_version: str | None,
    remote: Remote,
    config: ChangelogConfig,
    patterns: CompiledPatterns,
) -> Release:
    version_commit = next((c for c in commits if c.tag), None)
    message = version_commit.message if version_commit else None
    tag = version_commit.tag if version_commit else key
    date = (version_commit.date if version_commit else None) or datetime.now(UTC)

    # Collected before filtering drops the commits that carry them
    merges = tuple(c.merge for c in commits if c.merge)
    fixes = tuple(FixReference(tuple(c.fixes), c) for c in commits if c.fixes)
    empty_release = not merges and not fixes

    kept = sort_commits(
        (c for c in commits if filter_commit(c, merges, patterns.ignore_commit)),
        config.sort_commits,
    )
    shown = slice_commits(
        kept,
        config.commit_limit,
        config.backfill_limit,
        empty_release=empty_release,
    )
    logger.debug(
        "Release %s: showing %d of %d commits", tag or UNRELEASED_TITLE, len(shown), len(commits)
    )
    categories = categorize_commits(shown)

    major = bool(
        not config.tag_pattern
        and tag
        and previous_version
        and version_diff(tag, previous_version) == "major"
    )

    href = None
    if previous_version:
        to_ref = f"{config.tag_prefix}{tag}" if tag else HEAD_REF
        href = remote.get_compare_link(f"{config.tag_prefix}{previous_version}", to_ref)

    return Release(
        tag=tag,
        title=tag or UNRELEASED_TITLE,
        date=date,
        iso_date=date.strftime("%Y-%m-%d"),
        nice_date=nice_date(date),
        feature_commits=categories.feature,
        bug_fix_commits=categories.bug_fix,
        improvement_commits=categories.improvement,
        other_commits=categories.other,
        all_commits=categories.all,
        merges=merges,
        fixes=fixes,
        summary=get_summary(message, config.release_summary),
        major=major,
        href=href,
    )


def parse_releases(
    commits: Sequence[Commit],
    remote: Remote,
    latest_version: str | None,
    config: ChangelogConfig,
    patterns: CompiledPatterns | None = None,
) -> list[Release]:
    """Build releases from the history of a single branch.

    Args:
        commits: Commits, newest first
        remote: Used to build compare links between releases
        latest_version: Version for commits newer than the latest tag
        config: Changelog options
        patterns: Precompiled patterns, compiled from config when omitted

    Returns:
        Releases in history order; the untagged release is dropped unless
        config.unreleased is set

    Raises:
        InvalidPatternError: If a configured pattern does not compile
    """
    if patterns is None:
        patterns = CompiledPatterns.from_config(config)

    buckets = group_commits_by_version(commits, latest_version)
    logger.debug("Grouped %d commits into %d release(s)", len(commits), len(buckets))

    versions = list(buckets)
    releases = [
        _build_release(
            key,
            buckets[key],
            versions[index + 1] if index + 1 < len(versions) else None,
            remote,
            config,
            patterns,
        )
        for index, key in enumerate(versions)
    ]
    if config.unreleased:
        return releases
    return [release for release in releases if release.tag]


def compare_releases(a: Release, b: Release) -> int:
    """Comparison function ordering releases newest first.

    Partial tags are expanded (``v1`` -> ``v1.0.0``) before comparing.
    Semantic versions compare by precedence, anything else by plain string
    comparison. A release without a tag sorts before any tagged release.
    """
    tag_a, tag_b = infer_semver(a.tag), infer_semver(b.tag)
    if tag_a and tag_b:
        if is_valid_semver(tag_a) and is_valid_semver(tag_b):
            return compare_semver(tag_b, tag_a)
        if tag_a == tag_b:
            return 0
        return 1 if tag_a < tag_b else -1
    if tag_a:
        return 1
    if tag_b:
        return -1
    return 0


def sort_releases(releases: Iterable[Release]) -> list[Release]:
    """Sort releases newest first, unreleased changes on top."""
    return sorted(releases, key=cmp_to_key(compare_releases))


def dedupe_releases(releases: Iterable[Release]) -> list[Release]:
    """Drop releases whose tag was already seen, keeping the first."""
    seen: set[str | None] = set()
    unique = []
    for release in releases:
        if release.tag in seen:
            continue
        seen.add(release.tag)
        unique.append(release)
    return unique


def get_releases(
    commits: Sequence[Commit],
    remote: Remote,
    latest_version: str | None,
    config: ChangelogConfig,
    fetch_branch_commits: FetchBranchCommits | None = None,
    patterns: CompiledPatterns | None = None,
) -> list[Release]:
    """Build the ordered release list, including extra branches.

    Each branch in config.include_branch is fetched through
    fetch_branch_commits, one after another, and parsed on its own. The
    release lists are concatenated with the main branch first, then
    deduplicated by tag and sorted.
    """
    if patterns is None:
        patterns = CompiledPatterns.from_config(config)

    releases = parse_releases(commits, remote, latest_version, config, patterns)
    if config.include_branch and fetch_branch_commits is not None:
        for branch in config.include_branch:
            branch_commits = fetch_branch_commits(branch)
            logger.debug("Fetched %d commits from branch %s", len(branch_commits), branch)
            releases.extend(
                parse_releases(branch_commits, remote, latest_version, config, patterns)
            )
    elif config.include_branch:
        logger.warning(
            "include_branch is set but no branch fetcher was given; ignoring %s",
            ", ".join(config.include_branch),
        )

    unique = dedupe_releases(releases)
    logger.debug("Kept %d of %d releases after removing duplicate tags", len(unique), len(releases))
    return sort_releases(unique)


def filter_releases_by_tag(
    releases: Iterable[Release],
    tag_pattern: re.Pattern[str] | None,
) -> list[Release]:
    """Keep only releases whose tag matches tag_pattern.

    Releases without a tag never match. Without a pattern all releases
    are returned.
    """
    if tag_pattern is None:
        return list(releases)
    return [r for r in releases if r.tag and tag_pattern.search(r.tag)]


def build_changelog(
    commits: Sequence[Commit],
    remote: Remote,
    latest_version: str | None,
    config: ChangelogConfig,
    fetch_branch_commits: FetchBranchCommits | None = None,
) -> list[Release]:
    """Turn commit history into the release list handed to templates.

    Patterns are compiled once up front, so a bad regular expression fails
    before any work is done.

    Raises:
        InvalidPatternError: If a configured pattern does not compile
    """
    patterns = CompiledPatterns.from_config(config)
    releases = get_releases(commits, remote, latest_version, config, fetch_branch_commits, patterns)
    return filter_releases_by_tag(releases, patterns.tag)

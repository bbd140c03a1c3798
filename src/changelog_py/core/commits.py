"""Per-commit stages of release construction.

Commits in a release go through filter -> sort -> slice -> classify.
Each stage is a plain function over Commit values; classification wraps
commits in ClassifiedCommit instead of modifying them, so the same
history can be processed more than once (e.g. once per branch).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from changelog_py.core.version import is_valid_semver

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import datetime

    from changelog_py.config.models import SortCommits
    from changelog_py.vcs.models import Commit, MergeInfo

MERGE_COMMIT_PATTERN = re.compile(r"^Merge (remote-tracking )?branch '.+'")


class CommitCategory(str, Enum):
    """Category assigned from a bracketed marker in the subject."""

    FEATURE = "feature"
    BUG_FIX = "bug_fix"
    ENHANCEMENT = "enhancement"
    DEPRECATE = "deprecate"
    REMOVE = "remove"
    OTHER = "other"

    @property
    def is_improvement(self) -> bool:
        return self in (CommitCategory.ENHANCEMENT, CommitCategory.DEPRECATE, CommitCategory.REMOVE)


# Checked in order, first match wins
CATEGORY_MARKERS: tuple[tuple[str, CommitCategory], ...] = (
    ("[feature]", CommitCategory.FEATURE),
    ("[bug]", CommitCategory.BUG_FIX),
    ("[enhancement]", CommitCategory.ENHANCEMENT),
    ("[deprecate]", CommitCategory.DEPRECATE),
    ("[remove]", CommitCategory.REMOVE),
)

# Removed from subjects before display, first occurrence of each
DISPLAY_MARKERS: tuple[str, ...] = (
    "[Feature]",
    "[feature]",
    "[Enhancement]",
    "[enhancement]",
    "[Bug]",
    "[bug]",
    "[Deprecate]",
    "[deprecate]",
    "[Remove]",
    "[remove]",
)


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit together with its category and display subject."""

    commit: Commit
    category: CommitCategory
    subject: str | None

    @property
    def hash(self) -> str:
        return self.commit.hash

    @property
    def date(self) -> datetime | None:
        return self.commit.date

    @property
    def breaking(self) -> bool:
        return self.commit.breaking

    @property
    def feature(self) -> bool:
        return self.category is CommitCategory.FEATURE

    @property
    def bug_fix(self) -> bool:
        return self.category is CommitCategory.BUG_FIX

    @property
    def enhancement(self) -> bool:
        return self.category is CommitCategory.ENHANCEMENT

    @property
    def deprecate(self) -> bool:
        return self.category is CommitCategory.DEPRECATE

    @property
    def remove(self) -> bool:
        return self.category is CommitCategory.REMOVE


@dataclass(frozen=True)
class CommitsByCategory:
    """Classified commits of one release, partitioned by category.

    Each bucket is None rather than empty when nothing falls into it.
    """

    feature: tuple[ClassifiedCommit, ...] | None = None
    bug_fix: tuple[ClassifiedCommit, ...] | None = None
    improvement: tuple[ClassifiedCommit, ...] | None = None
    other: tuple[ClassifiedCommit, ...] | None = None
    all: tuple[ClassifiedCommit, ...] | None = None


def strip_markers(subject: str) -> str:
    """Remove category markers from a subject for display."""
    for marker in DISPLAY_MARKERS:
        subject = subject.replace(marker, "", 1)
    return subject.strip()


def classify_commit(commit: Commit) -> ClassifiedCommit:
    """Determine the category of a commit from its subject.

    Markers are matched case-insensitively. A commit without a subject is
    categorized as OTHER and its subject is left alone.
    """
    if not commit.subject:
        return ClassifiedCommit(commit, CommitCategory.OTHER, commit.subject)

    lowered = commit.subject.lower()
    category = next(
        (category for marker, category in CATEGORY_MARKERS if marker in lowered),
        CommitCategory.OTHER,
    )
    return ClassifiedCommit(commit, category, strip_markers(commit.subject))


def categorize_commits(commits: Iterable[Commit]) -> CommitsByCategory:
    """Classify commits and partition them into display buckets.

    Enhancements, deprecations and removals share the improvement bucket.
    """
    buckets: dict[str, list[ClassifiedCommit]] = {
        "feature": [],
        "bug_fix": [],
        "improvement": [],
        "other": [],
    }
    classified = [classify_commit(commit) for commit in commits]
    for item in classified:
        if item.category is CommitCategory.FEATURE:
            buckets["feature"].append(item)
        elif item.category is CommitCategory.BUG_FIX:
            buckets["bug_fix"].append(item)
        elif item.category.is_improvement:
            buckets["improvement"].append(item)
        else:
            buckets["other"].append(item)

    return CommitsByCategory(
        **{name: tuple(items) or None for name, items in buckets.items()},
        all=tuple(classified) or None,
    )


def filter_commit(
    commit: Commit,
    merges: Sequence[MergeInfo],
    ignore_pattern: re.Pattern[str] | None = None,
) -> bool:
    """Decide whether a commit is shown in its release.

    Args:
        commit: Commit to check
        merges: Merges already listed for the release
        ignore_pattern: Commits whose subject matches are dropped

    Returns:
        True to keep the commit
    """
    if commit.fixes or commit.merge:
        # Already listed under the release's fixes or merges
        return False
    if commit.breaking:
        return True
    if ignore_pattern is not None:
        return ignore_pattern.search(commit.subject or "") is None
    if is_valid_semver(commit.subject):
        return False
    if commit.subject and MERGE_COMMIT_PATTERN.match(commit.subject):
        return False
    return not any(merge.message == commit.subject for merge in merges)


def _timestamp(commit: Commit) -> float:
    # Undated commits count as the epoch
    return commit.date.timestamp() if commit.date is not None else 0.0


_SECONDARY_KEYS: dict[str, Callable[[Commit], float]] = {
    "date": _timestamp,
    "date-desc": lambda c: -_timestamp(c),
    "relevance": lambda c: -c.changes,
}


def sort_commits(commits: Iterable[Commit], sort_by: SortCommits = "relevance") -> list[Commit]:
    """Order commits with breaking changes first.

    Within the same breaking status commits are ordered by date (``date``),
    newest date first (``date-desc``), or by number of changed lines,
    largest first (``relevance``). The sort is stable, so ties keep their
    history order.
    """
    secondary = _SECONDARY_KEYS.get(sort_by, _SECONDARY_KEYS["relevance"])
    return sorted(commits, key=lambda c: (not c.breaking, secondary(c)))


def slice_commits(
    commits: Sequence[Commit],
    commit_limit: int | None,
    backfill_limit: int | None,
    *,
    empty_release: bool,
) -> list[Commit]:
    """Truncate a sorted commit list for display.

    Releases without merges or fixes use backfill_limit instead of
    commit_limit. Breaking changes are never cut: at least as many
    commits as there are breaking ones are kept.

    Args:
        commits: Sorted commits of the release
        commit_limit: Maximum commits to show, None to show all
        backfill_limit: Maximum commits for empty releases, None for zero
        empty_release: Release has no merges and no fixes
    """
    if commit_limit is None:
        return list(commits)

    limit = (backfill_limit or 0) if empty_release else commit_limit
    min_limit = sum(1 for c in commits if c.breaking)
    return list(commits[: max(min_limit, limit)])


SUMMARY_PATTERN = re.compile(r"\n+([\s\S]+)")


def get_summary(message: str | None, release_summary: bool) -> str | None:
    """Extract the body of a tag commit's message as the release summary."""
    if not message or not release_summary:
        return None
    match = SUMMARY_PATTERN.search(message)
    return match.group(1) if match else None

"""Commit records as produced by the git collaborator.

These are plain frozen dataclasses. The pipeline never mutates them;
classification produces separate values that wrap a Commit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True)
class MergeInfo:
    """A merged pull request referenced by a merge commit."""

    id: str
    message: str
    href: str | None = None
    author: str | None = None


@dataclass(frozen=True)
class Commit:
    """A single commit from the history, newest first.

    Attributes:
        hash: Full commit hash
        subject: First line of the commit message
        message: Full commit message, may span several lines
        date: Author date, None when git gave us nothing usable
        tag: Release tag, only set on the commit that closes a release
        merge: Merge information when the commit merges a pull request
        fixes: Issue ids referenced by the commit
        breaking: Subject matched the breaking change pattern
        insertions: Lines added
        deletions: Lines removed
    """

    hash: str
    subject: str | None
    message: str | None = None
    date: datetime | None = None
    tag: str | None = None
    merge: MergeInfo | None = None
    fixes: tuple[str, ...] | None = None
    breaking: bool = False
    insertions: int = 0
    deletions: int = 0

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    @property
    def changes(self) -> int:
        """Total number of changed lines, used as a relevance measure."""
        return self.insertions + self.deletions


@dataclass(frozen=True)
class FixReference:
    """Issues fixed within a release, with the commit that fixed them."""

    fixes: tuple[str, ...]
    commit: Commit

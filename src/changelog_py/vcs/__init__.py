"""Version control data exchanged with the changelog pipeline."""

from __future__ import annotations

from changelog_py.vcs.models import Commit, FixReference, MergeInfo
from changelog_py.vcs.remote import CompareUrlRemote, Remote

__all__ = [
    "Commit",
    "CompareUrlRemote",
    "FixReference",
    "MergeInfo",
    "Remote",
]

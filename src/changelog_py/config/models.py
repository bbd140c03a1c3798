"""Configuration models for changelog-py.

Options mirror the keys accepted in ``[tool.changelog-py]``. Both
snake_case and camelCase spellings are accepted so existing
auto-changelog style configuration can be reused as-is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from changelog_py.exceptions import InvalidPatternError

SortCommits = Literal["relevance", "date", "date-desc"]

DEFAULT_COMMIT_LIMIT = 3
DEFAULT_BACKFILL_LIMIT = 3


class ChangelogConfig(BaseModel):
    """Options controlling how releases are built from commits.

    Attributes:
        commit_limit: Commits shown per release, None to show all
        backfill_limit: Commits shown for releases without merges or fixes
        ignore_commit_pattern: Regex; matching commit subjects are dropped
        release_summary: Use the tagged commit's message body as summary
        sort_commits: Secondary commit order within a release
        tag_pattern: Regex; only releases whose tag matches are kept
        tag_prefix: Prefix added to tags when building compare links
        unreleased: Keep the section for commits after the latest tag
        include_branch: Extra branches whose releases are merged in
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    commit_limit: int | None = Field(default=DEFAULT_COMMIT_LIMIT, ge=0)
    backfill_limit: int | None = Field(default=DEFAULT_BACKFILL_LIMIT, ge=0)
    ignore_commit_pattern: str | None = None
    release_summary: bool = False
    sort_commits: SortCommits = "relevance"
    tag_pattern: str | None = None
    tag_prefix: str = ""
    unreleased: bool = False
    include_branch: list[str] = Field(default_factory=list)

    @field_validator("commit_limit", "backfill_limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: Any) -> Any:
        # `false` switches the limit off
        if value is False or (isinstance(value, str) and value.strip().lower() == "false"):
            return None
        return value

    @field_validator("ignore_commit_pattern", "tag_pattern")
    @classmethod
    def _check_pattern(cls, value: str | None) -> str | None:
        if value:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression: {e}") from e
        return value or None

    @field_validator("include_branch", mode="before")
    @classmethod
    def _split_branches(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [branch.strip() for branch in value.split(",") if branch.strip()]
        return value


@dataclass(frozen=True)
class CompiledPatterns:
    """Regular expressions from the configuration, compiled once per run."""

    ignore_commit: re.Pattern[str] | None = None
    tag: re.Pattern[str] | None = None

    @classmethod
    def from_config(cls, config: ChangelogConfig) -> CompiledPatterns:
        """Compile the configured patterns.

        Raises:
            InvalidPatternError: If a pattern does not compile
        """
        return cls(
            ignore_commit=_compile("ignore_commit_pattern", config.ignore_commit_pattern),
            tag=_compile("tag_pattern", config.tag_pattern),
        )


def _compile(option: str, pattern: str | None) -> re.Pattern[str] | None:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(option, pattern, str(e)) from e

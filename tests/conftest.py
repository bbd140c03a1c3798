"""Shared pytest fixtures."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest

from changelog_py.core.releases import Release, nice_date
from changelog_py.vcs.models import Commit
from changelog_py.vcs.remote import Remote

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_DATE = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for commits with unique hashes and decreasing dates."""
    counter = itertools.count()

    def _make(subject: str | None = "update code", **kwargs: Any) -> Commit:
        n = next(counter)
        kwargs.setdefault("hash", f"{n:040x}")
        kwargs.setdefault("date", BASE_DATE - timedelta(days=n))
        kwargs.setdefault("message", subject)
        return Commit(subject=subject, **kwargs)

    return _make


@pytest.fixture
def make_release() -> Callable[..., Release]:
    """Factory for bare releases, used by ordering tests."""

    def _make(tag: str | None, **kwargs: Any) -> Release:
        return Release(
            tag=tag,
            title=tag or "Unreleased",
            date=BASE_DATE,
            iso_date=BASE_DATE.strftime("%Y-%m-%d"),
            nice_date=nice_date(BASE_DATE),
            **kwargs,
        )

    return _make


@pytest.fixture
def remote() -> MagicMock:
    """Remote that builds predictable compare links."""
    mock = MagicMock(spec=Remote)
    mock.get_compare_link.side_effect = lambda a, b: f"https://example.com/compare/{a}...{b}"
    return mock


@pytest.fixture
def sample_history(make_commit: Callable[..., Commit]) -> list[Commit]:
    """Three releases of history, newest first."""
    return [
        make_commit("[Feature] add export", tag="v2.0.0", insertions=40, deletions=2),
        make_commit("[Bug] fix crash on empty input", insertions=5, deletions=1),
        make_commit("[Enhancement] faster parsing", insertions=80, deletions=30),
        make_commit("v1.1.0", tag="v1.1.0"),
        make_commit("[Deprecate] old flag", insertions=3),
        make_commit("initial import", tag="v1.0.0", insertions=500),
    ]

"""Tests for remote compare links."""

from __future__ import annotations

from changelog_py.vcs.remote import CompareUrlRemote, Remote


class TestCompareUrlRemote:
    """Tests for CompareUrlRemote."""

    def test_template(self):
        """Placeholders are replaced by the refs."""
        remote = CompareUrlRemote("https://git.example.com/r/compare/{from}..{to}")

        assert remote.get_compare_link("v1.0.0", "HEAD") == (
            "https://git.example.com/r/compare/v1.0.0..HEAD"
        )

    def test_github(self):
        """GitHub compare links use three dots."""
        remote = CompareUrlRemote.github("owner", "repo")

        assert remote.get_compare_link("v1.0.0", "v2.0.0") == (
            "https://github.com/owner/repo/compare/v1.0.0...v2.0.0"
        )

    def test_satisfies_protocol(self):
        """CompareUrlRemote is a Remote."""
        assert isinstance(CompareUrlRemote.github("o", "r"), Remote)

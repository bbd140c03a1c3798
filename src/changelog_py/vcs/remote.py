"""Remote repository links.

The pipeline only needs one capability from a remote: building a link
that compares two refs. Anything satisfying the Remote protocol works.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Remote(Protocol):
    """Capability object for generating links to the hosted repository."""

    def get_compare_link(self, from_ref: str, to_ref: str) -> str: ...


@dataclass(frozen=True)
class CompareUrlRemote:
    """Remote that fills a compare URL template.

    The template uses ``{from}`` and ``{to}`` placeholders, e.g.
    ``https://github.com/owner/repo/compare/{from}...{to}``.
    """

    compare_url: str

    @classmethod
    def github(cls, owner: str, repo: str, host: str = "https://github.com") -> CompareUrlRemote:
        return cls(f"{host.rstrip('/')}/{owner}/{repo}/compare/{{from}}...{{to}}")

    def get_compare_link(self, from_ref: str, to_ref: str) -> str:
        return self.compare_url.replace("{from}", from_ref).replace("{to}", to_ref)

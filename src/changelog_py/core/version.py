"""Semantic version handling for release tags.

Tags are compared with SemVer 2.0.0 precedence. Parsing is strict
(the only leniency is an optional leading ``v``) and never raises:
anything that is not a semantic version parses to None, and callers
fall back to plain string handling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

MAX_VERSION_LENGTH = 256
# Largest integer a version component may hold (2**53 - 1)
MAX_SAFE_INTEGER = 9007199254740991

_NUMERIC = r"0|[1-9]\d*"
_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][a-zA-Z0-9-]*)"
_BUILD_ID = r"[0-9A-Za-z-]+"

SEMVER_PATTERN = re.compile(
    rf"^v?(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?$",
    re.ASCII,
)

# v1 -> v1.0.0, v1.2 -> v1.2.0
_MAJOR_ONLY = re.compile(r"^v?\d+$", re.ASCII)
_MAJOR_MINOR = re.compile(r"^v?\d+\.\d+$", re.ASCII)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemVer:
    """A parsed semantic version.

    Equality and ordering ignore build metadata, as SemVer precedence does.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str | int, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str | None) -> SemVer | None:
        """Parse a version string, returning None if it is not valid."""
        if not text or len(text) > MAX_VERSION_LENGTH:
            return None
        match = SEMVER_PATTERN.fullmatch(text)
        if match is None:
            return None

        major, minor, patch = (int(match.group(name)) for name in ("major", "minor", "patch"))
        if max(major, minor, patch) > MAX_SAFE_INTEGER:
            return None

        prerelease = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=major,
            minor=minor,
            patch=patch,
            prerelease=tuple(
                int(part) if part.isdigit() else part for part in prerelease.split(".")
            )
            if prerelease
            else (),
            build=tuple(build.split(".")) if build else (),
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _precedence_key(self) -> tuple:
        # A release ranks above any of its pre-releases. Numeric identifiers
        # rank below alphanumeric ones.
        if not self.prerelease:
            pre_key: tuple = (1,)
        else:
            pre_key = (
                0,
                tuple((0, p, "") if isinstance(p, int) else (1, 0, p) for p in self.prerelease),
            )
        return (self.major, self.minor, self.patch, pre_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: SemVer) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += "-" + ".".join(str(p) for p in self.prerelease)
        if self.build:
            version += "+" + ".".join(self.build)
        return version


def parse_semver(text: str | None) -> SemVer | None:
    """Parse a semantic version string, or return None."""
    return SemVer.parse(text)


def is_valid_semver(text: str | None) -> bool:
    """Check whether text is a strict semantic version (``v`` prefix allowed)."""
    return SemVer.parse(text) is not None


def compare_semver(a: str, b: str) -> int:
    """Compare two valid semantic version strings.

    Returns:
        Negative if a < b, zero if equal, positive if a > b

    Raises:
        ValueError: If either string is not a valid semantic version
    """
    va, vb = SemVer.parse(a), SemVer.parse(b)
    if va is None or vb is None:
        raise ValueError(f"Cannot compare non-semver versions: {a!r}, {b!r}")
    if va == vb:
        return 0
    return -1 if va < vb else 1


def version_diff(a: str | None, b: str | None) -> str | None:
    """Name the most significant component that differs between two versions.

    Returns one of ``major``, ``minor``, ``patch`` (prefixed with ``pre`` when
    either side is a pre-release), ``prerelease`` when only the pre-release
    part differs, or None when the versions are equal or not both valid.
    """
    va, vb = SemVer.parse(a), SemVer.parse(b)
    if va is None or vb is None or va == vb:
        return None

    prefix = "pre" if va.is_prerelease or vb.is_prerelease else ""
    for component in ("major", "minor", "patch"):
        if getattr(va, component) != getattr(vb, component):
            return prefix + component
    return "prerelease"


def infer_semver(tag: str | None) -> str | None:
    """Expand partial version tags to full semantic versions.

    ``v1`` becomes ``v1.0.0`` and ``1.2`` becomes ``1.2.0``. Any other
    shape, including None, is returned unchanged.
    """
    if tag is None:
        return None
    if _MAJOR_ONLY.fullmatch(tag):
        return f"{tag}.0.0"
    if _MAJOR_MINOR.fullmatch(tag):
        return f"{tag}.0"
    return tag

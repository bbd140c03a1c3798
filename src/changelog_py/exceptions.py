"""Exception hierarchy for changelog-py.

All errors raised by the package derive from ChangelogPyError so callers
can catch everything with a single except clause.
"""

from __future__ import annotations


class ChangelogPyError(Exception):
    """Base class for all changelog-py errors."""


class ConfigError(ChangelogPyError):
    """Base class for configuration problems."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml could be located."""


class ConfigValidationError(ConfigError):
    """Configuration values are present but invalid."""


class InvalidPatternError(ConfigValidationError):
    """A configured regular expression does not compile.

    Attributes:
        option: Name of the configuration option holding the pattern
        pattern: The offending pattern text
    """

    def __init__(self, option: str, pattern: str, reason: str) -> None:
        self.option = option
        self.pattern = pattern
        super().__init__(f"Invalid regular expression for {option}: {pattern!r} ({reason})")

"""Crumb exception hierarchy.

Lenient operations (``Cookie.parse``, attribute handling, expiry rendering)
degrade instead of raising; only the strict entry points raise these.
"""

from dataclasses import dataclass


class CrumbError(Exception):
    """Base for all crumb-specific errors."""


class ConfigurationError(CrumbError):
    """Raised when a ``CookieConfig`` is invalid."""


def _excerpt(text: str, limit: int = 80) -> str:
    if len(text) <= limit:
        return repr(text)
    return repr(text[:limit]) + "..."


@dataclass(frozen=True, slots=True)
class CookieParseError(CrumbError):
    """A ``Set-Cookie`` string did not yield a Name/Value pair."""

    text: str
    detail: str = "no name/value pair found"

    def __str__(self) -> str:
        return f"{self.detail}: {_excerpt(self.text)}"


@dataclass(frozen=True, slots=True)
class JarEntryError(CrumbError):
    """A cookie-jar line could not be split into its columns."""

    line: str
    detail: str = "malformed cookie-jar entry"

    def __str__(self) -> str:
        return f"{self.detail}: {_excerpt(self.line)}"

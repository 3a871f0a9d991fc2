"""Exception hierarchy for repotree.

Fatal conditions are raised as subclasses of :class:`RepoTreeError`.
Anomalies met while walking a listing are not fatal and are reported
through :class:`UnhandledNodeTypeWarning` instead.
"""

from __future__ import annotations


class RepoTreeError(Exception):
    """Base exception for the whole package."""


class ConfigurationError(RepoTreeError):
    """A required construction-time setting is missing or malformed."""


class InvalidLocatorError(RepoTreeError):
    """The browser URL does not look like ``.../OWNER/REPO/{blob|tree}/BRANCH/PATH``."""


class InvalidContentTypeError(RepoTreeError):
    """A content node claims a type that is not expected at its position."""


class TransportError(RepoTreeError):
    """Network or HTTP failure reported by a content fetcher."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class UnhandledNodeTypeWarning(UserWarning):
    """A listing node or entry was skipped because its shape is not handled."""

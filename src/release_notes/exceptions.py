"""Exception hierarchy for release-notes.

All errors raised by the package derive from ReleaseNotesError so
callers can catch them in one place.
"""

from __future__ import annotations


class ReleaseNotesError(Exception):
    """Base class for all release-notes errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ReleaseNotesError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml could be located."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


# =============================================================================
# Git collaborators
# =============================================================================


class GitError(ReleaseNotesError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)


class TagListError(GitError):
    """Listing remote tags failed."""


class LogFetchError(GitError):
    """Reading the commit log failed."""


class RemoteUrlError(GitError):
    """The remote URL is missing or cannot be split into owner and repo."""

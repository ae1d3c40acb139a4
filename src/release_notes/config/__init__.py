"""Configuration management for release-notes."""

from __future__ import annotations

from release_notes.config.loader import load_config
from release_notes.config.models import (
    ChangelogConfig,
    GitHubConfig,
    ReleaseNotesConfig,
)

__all__ = [
    "ChangelogConfig",
    "GitHubConfig",
    "ReleaseNotesConfig",
    "load_config",
]

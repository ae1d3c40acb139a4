"""Core changelog engine for release-notes.

This module contains the building blocks:
- Release range resolution from remote tags
- Conventional commit log parsing
- Markdown link formatting
- Changelog section, footer and header assembly
"""

from __future__ import annotations

from release_notes.core.changelog import build_changelog, render_changelog
from release_notes.core.commits import (
    CommitHash,
    CommitRecord,
    ParseResult,
    log_format,
    parse_log,
)
from release_notes.core.links import LinkResolver, RepoIdentity, parse_remote_url
from release_notes.core.range import ReleaseRange, resolve_release_range

__all__ = [
    # Commits
    "CommitHash",
    "CommitRecord",
    # Links
    "LinkResolver",
    "ParseResult",
    # Range
    "ReleaseRange",
    "RepoIdentity",
    # Changelog
    "build_changelog",
    "log_format",
    "parse_log",
    "parse_remote_url",
    "render_changelog",
    "resolve_release_range",
]

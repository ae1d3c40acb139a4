"""Shared fixtures for release-notes tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from release_notes.config.models import ChangelogConfig, ReleaseNotesConfig
from release_notes.core.links import LinkResolver, RepoIdentity

LogEntry = tuple[str, str, str, str, str]


@pytest.fixture
def config() -> ReleaseNotesConfig:
    return ReleaseNotesConfig()


@pytest.fixture
def changelog_config() -> ChangelogConfig:
    return ChangelogConfig()


@pytest.fixture
def identity() -> RepoIdentity:
    return RepoIdentity(owner="acme", repo="widgets")


@pytest.fixture
def links(identity: RepoIdentity) -> LinkResolver:
    return LinkResolver(identity)


@pytest.fixture
def make_log(changelog_config: ChangelogConfig) -> Callable[..., str]:
    """Build raw log text the way ``git log --pretty=format:`` would.

    Each entry is ``(full, short, title, body, committer)``.
    """

    def _make(*entries: LogEntry) -> str:
        entry_sep = changelog_config.entry_delimiter
        field_sep = changelog_config.field_delimiter
        return "\n".join(entry_sep + field_sep.join(entry) for entry in entries)

    return _make


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """Project directory with a pyproject.toml carrying release-notes config."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.release-notes]
remote = "upstream"

[tool.release-notes.changelog]
excluded_usernames = ["dependabot", "renovate"]
include_compare_link = true

[tool.release-notes.github]
owner = "acme"
repo = "widgets"
"""
    )
    return tmp_path

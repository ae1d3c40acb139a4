"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from release_notes.config.loader import (
    extract_release_notes_config,
    find_pyproject_toml,
    load_config,
    load_pyproject_toml,
)
from release_notes.config.models import (
    ENTRY_DELIMITER,
    FIELD_DELIMITER,
    ChangelogConfig,
    GitHubConfig,
    ReleaseNotesConfig,
)
from release_notes.exceptions import ConfigNotFoundError, ConfigValidationError


class TestReleaseNotesConfig:
    """Tests for ReleaseNotesConfig model."""

    def test_default_config(self):
        """Default configuration has sensible values."""
        config = ReleaseNotesConfig()

        assert config.remote == "origin"
        assert isinstance(config.changelog, ChangelogConfig)
        assert isinstance(config.github, GitHubConfig)

    def test_nested_values(self):
        """Nested tables are validated into their models."""
        config = ReleaseNotesConfig.model_validate(
            {"changelog": {"thank_you_threshold": 3}, "github": {"owner": "acme"}}
        )

        assert config.changelog.thank_you_threshold == 3
        assert config.github.owner == "acme"
        assert config.github.repo is None


class TestChangelogConfig:
    """Tests for ChangelogConfig model."""

    def test_defaults(self):
        """Default classification matches the conventional commit setup."""
        config = ChangelogConfig()

        assert list(config.section_titles) == ["feat", "impr", "fix"]
        assert list(config.section_titles.values()) == ["Features", "Improvements", "Fixes"]
        assert config.internal_types == [
            "style",
            "docs",
            "refactor",
            "perf",
            "ci",
            "test",
            "build",
            "chore",
        ]
        assert config.internal_marker == "!nuf"
        assert config.committer_bot_marker == "github"
        assert config.excluded_usernames == ["dependabot"]
        assert config.thank_you_threshold == 1
        assert config.merge_duplicate_titles is False
        assert config.include_compare_link is False
        assert config.entry_delimiter == ENTRY_DELIMITER
        assert config.field_delimiter == FIELD_DELIMITER

    def test_allowed_types(self):
        """Vocabulary covers sections, internal types and revert."""
        allowed = ChangelogConfig().allowed_types

        assert {"feat", "impr", "fix", "docs", "chore", "revert"} <= allowed
        assert "wip" not in allowed

    def test_custom_internal_types_extend_vocabulary(self):
        config = ChangelogConfig(internal_types=["docs", "deps"])

        assert "deps" in config.allowed_types
        assert "chore" not in config.allowed_types

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError):
            ChangelogConfig(thank_you_threshold=-1)

    @pytest.mark.parametrize(
        ("entry", "field"),
        [
            ("", "@@FIELD@@"),
            ("@@ENTRY@@", ""),
            ("@@SAME@@", "@@SAME@@"),
            ("@@ENTRY@@", "@@ENTRY@@-FIELD"),
        ],
    )
    def test_invalid_delimiters(self, entry: str, field: str):
        """Delimiters must be non-empty and not contain each other."""
        with pytest.raises(ValidationError):
            ChangelogConfig(entry_delimiter=entry, field_delimiter=field)

    def test_custom_delimiters(self):
        config = ChangelogConfig(entry_delimiter="@@ENTRY@@", field_delimiter="@@FIELD@@")

        assert config.entry_delimiter == "@@ENTRY@@"


class TestGitHubConfig:
    """Tests for GitHubConfig model."""

    def test_defaults(self):
        config = GitHubConfig()

        assert config.owner is None
        assert config.repo is None
        assert config.base_url == "https://github.com"


class TestLoadPyprojectToml:
    """Tests for load_pyproject_toml()."""

    def test_load_valid_toml(self, temp_project_with_pyproject: Path):
        """Load a valid pyproject.toml."""
        data = load_pyproject_toml(temp_project_with_pyproject / "pyproject.toml")

        assert data["project"]["name"] == "test-project"

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Loading nonexistent file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_pyproject_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[project\nname = ")

        with pytest.raises(ConfigValidationError):
            load_pyproject_toml(path)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml()."""

    def test_find_in_current_dir(self, temp_project_with_pyproject: Path):
        found = find_pyproject_toml(temp_project_with_pyproject)

        assert found == (temp_project_with_pyproject / "pyproject.toml").resolve()

    def test_find_in_parent_dir(self, temp_project_with_pyproject: Path):
        """Find pyproject.toml in a parent directory."""
        subdir = temp_project_with_pyproject / "src" / "package"
        subdir.mkdir(parents=True)

        found = find_pyproject_toml(subdir)

        assert found.parent == temp_project_with_pyproject.resolve()


class TestExtractReleaseNotesConfig:
    """Tests for extract_release_notes_config()."""

    def test_extract_existing_config(self):
        pyproject = {"tool": {"release-notes": {"remote": "upstream"}}}

        assert extract_release_notes_config(pyproject) == {"remote": "upstream"}

    def test_extract_missing_config(self):
        """Extract returns empty dict when config missing."""
        assert extract_release_notes_config({"project": {"name": "test"}}) == {}


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_with_config(self, temp_project_with_pyproject: Path):
        """Load configuration from pyproject.toml."""
        config = load_config(temp_project_with_pyproject)

        assert config.remote == "upstream"
        assert config.changelog.excluded_usernames == ["dependabot", "renovate"]
        assert config.changelog.include_compare_link is True
        assert config.github.owner == "acme"
        assert config.github.repo == "widgets"

    def test_load_defaults_when_no_section(self, tmp_path: Path):
        """Load defaults when no [tool.release-notes] section."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "test"\n')

        config = load_config(tmp_path)

        assert config == ReleaseNotesConfig()

    def test_invalid_values_raise(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.release-notes.changelog]\nthank_you_threshold = "many"\n'
        )

        with pytest.raises(ConfigValidationError, match="tool.release-notes"):
            load_config(tmp_path)

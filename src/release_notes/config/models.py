"""Configuration models for release-notes.

Settings live under ``[tool.release-notes]`` in pyproject.toml. Every
field has a default, so an empty section (or no section at all) yields
a working configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

ENTRY_DELIMITER = "thisismyentrydelimiterthatwilldefinitelynotappearintheactualcommitmessage"
FIELD_DELIMITER = "thisismyfielddelimiterthatwilldefinitelynotappearintheactualcommitmessage"

USER_FACING_TYPES = ("feat", "impr", "fix")
INTERNAL_TYPES = (
    "style",
    "docs",
    "refactor",
    "perf",
    "ci",
    "test",
    "build",
    "chore",
)
# Recognized but never rendered.
UNRENDERED_TYPES = ("revert",)


class ChangelogConfig(BaseModel):
    """How commits are classified and rendered."""

    section_titles: dict[str, str] = Field(
        default_factory=lambda: {
            "feat": "Features",
            "impr": "Improvements",
            "fix": "Fixes",
        }
    )
    internal_types: list[str] = Field(default_factory=lambda: list(INTERNAL_TYPES))
    internal_marker: str = "!nuf"
    committer_bot_marker: str = "github"
    excluded_usernames: list[str] = Field(default_factory=lambda: ["dependabot"])
    thank_you_threshold: int = Field(default=1, ge=0)
    merge_duplicate_titles: bool = False
    include_compare_link: bool = False
    entry_delimiter: str = ENTRY_DELIMITER
    field_delimiter: str = FIELD_DELIMITER

    @model_validator(mode="after")
    def _check_delimiters(self) -> ChangelogConfig:
        entry, field = self.entry_delimiter, self.field_delimiter
        if not entry or not field:
            raise ValueError("delimiters must not be empty")
        if entry in field or field in entry:
            raise ValueError("entry_delimiter and field_delimiter must be distinct tokens")
        return self

    @property
    def allowed_types(self) -> frozenset[str]:
        """Every commit type that produces a record."""
        return frozenset(
            [*self.section_titles, *self.internal_types, *UNRENDERED_TYPES]
        )


class GitHubConfig(BaseModel):
    """Repository identity used for links."""

    owner: str | None = None
    repo: str | None = None
    base_url: str = "https://github.com"


class ReleaseNotesConfig(BaseModel):
    """Root configuration."""

    remote: str = "origin"
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

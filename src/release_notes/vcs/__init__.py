"""Version control collaborators."""

from __future__ import annotations

from release_notes.vcs.git import GitRepository

__all__ = ["GitRepository"]

"""Markdown links to pull requests, commits and tag comparisons."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from release_notes.exceptions import RemoteUrlError

if TYPE_CHECKING:
    from collections.abc import Callable

    from release_notes.core.commits import CommitHash
    from release_notes.core.range import ReleaseRange

_REMOTE_RE = re.compile(r"[:/](?P<owner>[^/:]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


@dataclass(frozen=True, slots=True)
class RepoIdentity:
    """Owner and repository name on the hosting service."""

    owner: str
    repo: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_remote_url(url: str) -> RepoIdentity:
    """Extract owner and repo from an SSH or HTTPS remote URL.

    Raises:
        RemoteUrlError: If the URL has no ``owner/repo`` tail
    """
    match = _REMOTE_RE.search(url.strip())
    if match is None:
        raise RemoteUrlError(f"Cannot determine owner/repo from remote URL: {url!r}")
    return RepoIdentity(owner=match.group("owner"), repo=match.group("repo"))


class LinkResolver:
    """Formats links for one repository.

    *identity* may be a callable; it is then called once, on the first
    link, so an empty changelog never needs the repository identity.
    """

    def __init__(
        self,
        identity: RepoIdentity | Callable[[], RepoIdentity],
        base_url: str = "https://github.com",
    ) -> None:
        self._identity = identity
        self.base_url = base_url.rstrip("/")

    @cached_property
    def identity(self) -> RepoIdentity:
        if isinstance(self._identity, RepoIdentity):
            return self._identity
        return self._identity()

    @cached_property
    def repo_url(self) -> str:
        return f"{self.base_url}/{self.identity.owner}/{self.identity.repo}"

    def pr_link(self, pr: str) -> str:
        number = pr.lstrip("#")
        return f"[#{number}]({self.repo_url}/pull/{number})"

    def commit_link(self, commit_hash: CommitHash) -> str:
        return f"[{commit_hash.short}]({self.repo_url}/commit/{commit_hash.full})"

    def compare_link(self, release_range: ReleaseRange, head: str = "HEAD") -> str | None:
        """Link comparing the previous tag with *head*, or None without a tag."""
        if release_range.previous_tag is None:
            return None
        revisions = f"{release_range.previous_tag}...{head}"
        return f"[{revisions}]({self.repo_url}/compare/{revisions})"

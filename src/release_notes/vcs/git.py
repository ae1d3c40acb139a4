"""Git collaborators.

Thin wrappers around the git command line. Each method is a single
blocking subprocess call; failures are raised, never retried.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from release_notes.exceptions import GitError, LogFetchError, RemoteUrlError, TagListError

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"


class GitRepository:
    """A local git repository with a named remote."""

    def __init__(self, path: Path | str | None = None, remote: str = "origin") -> None:
        self.path = Path(path) if path else Path.cwd()
        self.remote = remote

    def _run(self, args: list[str], error_cls: type[GitError], what: str) -> str:
        logger.debug("Running git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise error_cls(
                f"Failed to {what} (exit code {e.returncode})",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def fetch_remote_tags(self) -> list[str]:
        """Return the tag names on the remote, in the order git lists them."""
        output = self._run(
            ["ls-remote", "--tags", "--refs", self.remote],
            TagListError,
            f"list tags on remote '{self.remote}'",
        )
        tags = []
        for line in output.splitlines():
            _, _, ref = line.partition(TAG_REF_PREFIX)
            if ref.strip():
                tags.append(ref.strip())
        logger.debug("Found %d remote tags", len(tags))
        return tags

    def fetch_log(self, revision: str, pretty_format: str) -> str:
        """Return ``git log`` output for *revision* using *pretty_format*."""
        return self._run(
            ["log", revision, f"--pretty=format:{pretty_format}"],
            LogFetchError,
            f"read git log for {revision}",
        )

    def get_remote_url(self) -> str:
        """Return the fetch URL of the remote."""
        return self._run(
            ["remote", "get-url", self.remote],
            RemoteUrlError,
            f"get URL of remote '{self.remote}'",
        ).strip()

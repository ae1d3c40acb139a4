"""Release range resolution.

The range runs from the highest semver tag on the remote up to HEAD, or
covers the whole history when the remote has no tags.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEMVER_RE = re.compile(
    r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)


@dataclass(frozen=True, slots=True)
class ReleaseRange:
    """Portion of history summarized by one changelog."""

    previous_tag: str | None = None

    @property
    def is_from_root(self) -> bool:
        return self.previous_tag is None

    @property
    def expression(self) -> str:
        """Revision range understood by ``git log``."""
        if self.previous_tag is None:
            return "HEAD"
        return f"{self.previous_tag}..HEAD"


def tag_sort_key(tag: str) -> tuple:
    """Sort key ordering tags by semantic version.

    Non-semver tags sort below every semver tag. A pre-release sorts
    below its release (``1.0.0-rc.1 < 1.0.0``), and pre-release
    identifiers compare numerically where both are numeric.
    """
    match = _SEMVER_RE.match(tag)
    if not match:
        return (0, (), 0, (), tag)

    numbers = tuple(int(match.group(g) or 0) for g in ("major", "minor", "patch"))
    pre = match.group("pre")
    if pre is None:
        return (1, numbers, 1, (), tag)

    identifiers = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in pre.split(".")
    )
    return (1, numbers, 0, identifiers, tag)


def resolve_release_range(tags: list[str]) -> ReleaseRange:
    """Pick the highest tag in *tags* as the start of the range."""
    if not tags:
        return ReleaseRange()
    return ReleaseRange(previous_tag=max(tags, key=tag_sort_key))

"""Conventional commit parsing.

The raw log is one string holding many entries. Each entry starts with
the entry delimiter and carries five fields separated by the field
delimiter: full hash, short hash, subject, body and committer name.

Subjects follow the conventional commit format, optionally annotated
with contributor handles and pull request numbers::

    feat(ui): add button (@alice, @bob) (#10, #12)

Entries whose subject does not match, or whose type is not recognized,
are dropped and counted rather than raised.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from release_notes.config.models import ChangelogConfig

logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(
    r"^(?P<type>\w+)"
    r"(?:\((?P<scope>[^)]+)\))?"
    r":\s+(?P<message>.+?)"
    r"(?:\s*\((?P<usernames>@[^)]+)\))?"
    r"(?:\s+\((?P<prs>#[^)]+)\))?$"
)

ANNOTATION_SEPARATOR = ", "
FIELD_COUNT = 5


@dataclass(frozen=True, slots=True)
class CommitHash:
    """Short and full form of one commit hash."""

    short: str
    full: str


@dataclass(slots=True)
class CommitRecord:
    """One parsed log entry."""

    hashes: list[CommitHash]
    type: str
    message: str
    scope: str | None = None
    usernames: list[str] = field(default_factory=list)
    prs: list[str] = field(default_factory=list)
    body: str = ""

    @property
    def full_hash(self) -> str:
        return self.hashes[0].full

    @property
    def label(self) -> str:
        """``type(scope)``, or just ``type`` without a scope."""
        return f"{self.type}({self.scope})" if self.scope else self.type

    def is_internal(self, marker: str) -> bool:
        return marker in self.body

    def absorb(self, other: CommitRecord) -> None:
        """Append the hashes, usernames and PRs of *other* not carried yet."""
        for mine, theirs in (
            (self.hashes, other.hashes),
            (self.usernames, other.usernames),
            (self.prs, other.prs),
        ):
            mine.extend(item for item in theirs if item not in mine)


@dataclass(slots=True)
class ParseResult:
    """Output of :func:`parse_log`."""

    records: list[CommitRecord] = field(default_factory=list)
    committers: list[str] = field(default_factory=list)
    dropped: int = 0


def log_format(config: ChangelogConfig) -> str:
    """Return the ``git log --pretty=format:`` template matching :func:`parse_log`."""
    sep = config.field_delimiter
    return f"{config.entry_delimiter}%H{sep}%h{sep}%s{sep}%b{sep}%cn"


def _split_annotation(value: str | None) -> list[str]:
    if not value:
        return []
    return list(dict.fromkeys(value.split(ANNOTATION_SEPARATOR)))


def parse_title(title: str, allowed_types: frozenset[str]) -> re.Match[str] | None:
    """Match *title* against the conventional commit grammar.

    Returns None if the title does not match or its type is not allowed.
    """
    match = TITLE_PATTERN.match(title)
    if match is None or match.group("type") not in allowed_types:
        return None
    return match


def parse_entry(entry: str, config: ChangelogConfig) -> tuple[CommitRecord, str] | None:
    """Parse one log entry into a record and its committer name.

    Returns None for entries that should be dropped.
    """
    fields = [part.strip() for part in entry.split(config.field_delimiter)]
    if len(fields) < 3:
        return None
    fields += [""] * (FIELD_COUNT - len(fields))
    full, short, title, body, committer = fields[:FIELD_COUNT]

    match = parse_title(title, config.allowed_types)
    if match is None:
        return None

    record = CommitRecord(
        hashes=[CommitHash(short=short, full=full)],
        type=match.group("type"),
        scope=match.group("scope"),
        message=match.group("message"),
        usernames=_split_annotation(match.group("usernames")),
        prs=_split_annotation(match.group("prs")),
        body=body,
    )
    return record, committer


def parse_log(text: str, config: ChangelogConfig) -> ParseResult:
    """Split a raw log into records, keeping log order.

    Also collects the distinct committer names of accepted entries,
    skipping any that contain the bot marker.
    """
    result = ParseResult()
    bot_marker = config.committer_bot_marker.lower()

    for entry in text.split(config.entry_delimiter):
        entry = entry.strip()
        if not entry:
            continue

        parsed = parse_entry(entry, config)
        if parsed is None:
            result.dropped += 1
            logger.debug("Dropping log entry: %r", entry.split(config.field_delimiter)[:3])
            continue

        record, committer = parsed
        result.records.append(record)
        if (
            committer
            and committer not in result.committers
            and bot_marker not in committer.lower()
        ):
            result.committers.append(committer)

    if result.dropped:
        logger.info(
            "Dropped %d log entr%s without a recognized conventional commit title",
            result.dropped,
            "y" if result.dropped == 1 else "ies",
        )
    return result


def collapse_duplicates(records: list[CommitRecord], marker: str) -> list[CommitRecord]:
    """Merge records that share type, scope, message and internal marking.

    The first record of each group survives and absorbs the hashes,
    usernames and PRs of the later ones. Records with and without
    *marker* in their body never merge. Input records are not modified.
    """
    survivors: dict[tuple[str, str | None, str, bool], CommitRecord] = {}
    for record in records:
        key = (record.type, record.scope, record.message, record.is_internal(marker))
        survivor = survivors.get(key)
        if survivor is None:
            survivors[key] = CommitRecord(
                hashes=list(record.hashes),
                type=record.type,
                message=record.message,
                scope=record.scope,
                usernames=list(record.usernames),
                prs=list(record.prs),
                body=record.body,
            )
        else:
            survivor.absorb(record)
    return list(survivors.values())

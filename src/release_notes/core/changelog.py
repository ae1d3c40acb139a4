"""Changelog generation from conventional commits.

The changelog has up to four parts, in fixed order:

- a thank-you line when more than one person contributed
- one section per user-facing type (Features, Improvements, Fixes)
- a "Nerd stuff" footer listing internal changes, deduplicated by hash
- an optional link comparing the previous tag with HEAD

Rendering is a pure function of the raw log text; git is only touched
by :func:`build_changelog`.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from release_notes.core.commits import collapse_duplicates, log_format, parse_log
from release_notes.core.links import LinkResolver, RepoIdentity, parse_remote_url
from release_notes.core.range import ReleaseRange, resolve_release_range

if TYPE_CHECKING:
    from collections.abc import Callable

    from release_notes.config.models import ChangelogConfig, ReleaseNotesConfig
    from release_notes.core.commits import CommitRecord, ParseResult
    from release_notes.vcs.git import GitRepository

logger = logging.getLogger(__name__)

THANK_YOU_HEADER = "Thank you to all the contributors who made this release possible!"
FOOTER_HEADING = (
    "### Nerd stuff\n\n"
    "These changes will not be visible to users, but are included for "
    "completeness and to credit contributors.\n\n"
)


def format_record(
    record: CommitRecord,
    links: LinkResolver,
    *,
    merge_type_and_scope: bool = False,
) -> str:
    """Render one record as a markdown list line.

    Args:
        record: Parsed commit
        links: Link resolver for the repository
        merge_type_and_scope: Prefix with ``type(scope)`` instead of just the scope

    Returns:
        The line, including its trailing newline
    """
    if merge_type_and_scope:
        prefix = f"**{record.label}:** "
    else:
        prefix = f"**{record.scope}:** " if record.scope else ""

    usernames = f" ({', '.join(record.usernames)})" if record.usernames else ""
    prs = f" ({', '.join(links.pr_link(pr) for pr in record.prs)})" if record.prs else ""
    hashes = ", ".join(links.commit_link(h) for h in record.hashes)

    return f"- {prefix}{record.message}{usernames}{prs} ({hashes})\n"


def build_section(
    commit_type: str,
    records: list[CommitRecord],
    links: LinkResolver,
    config: ChangelogConfig,
) -> str:
    """Render the section for one user-facing type.

    Records whose body carries the internal marker are left to the footer.
    Returns an empty string when no record qualifies.
    """
    items = [
        r for r in records if r.type == commit_type and not r.is_internal(config.internal_marker)
    ]
    if not items:
        return ""

    lines = [f"### {config.section_titles[commit_type]}\n\n"]
    lines.extend(format_record(r, links) for r in items)
    return "".join(lines)


def footer_records(records: list[CommitRecord], config: ChangelogConfig) -> list[CommitRecord]:
    """Collect internal changes in footer order, first record per hash wins.

    Order: marked user-facing types (in section order), then each
    internal type in configured order.
    """
    marker = config.internal_marker
    candidates: list[CommitRecord] = []
    for commit_type in config.section_titles:
        candidates.extend(r for r in records if r.type == commit_type and r.is_internal(marker))
    for commit_type in config.internal_types:
        candidates.extend(r for r in records if r.type == commit_type)

    seen: set[str] = set()
    unique = []
    for record in candidates:
        if record.full_hash in seen:
            continue
        seen.add(record.full_hash)
        unique.append(record)
    return unique


def build_footer(records: list[CommitRecord], links: LinkResolver, config: ChangelogConfig) -> str:
    """Render the internal changes block, or an empty string if there are none."""
    items = footer_records(records, config)
    if not items:
        return ""
    return FOOTER_HEADING + "".join(
        format_record(r, links, merge_type_and_scope=True) for r in items
    )


def count_contributors(records: list[CommitRecord], config: ChangelogConfig) -> int:
    """Count distinct usernames across all records, ignoring excluded accounts."""
    excluded = {name.lstrip("@").lower() for name in config.excluded_usernames}
    names = {
        username.lstrip("@").lower()
        for record in records
        for username in record.usernames
    }
    return len(names - excluded)


def assemble_changelog(
    parsed: ParseResult,
    links: LinkResolver,
    config: ChangelogConfig,
    release_range: ReleaseRange | None = None,
) -> str:
    """Join header, sections and footer into the final changelog.

    Args:
        parsed: Parser output
        links: Link resolver for the repository
        config: Changelog configuration
        release_range: Range the log covers; only used for the compare link

    Returns:
        Markdown text, empty when no commit was recognized
    """
    records = parsed.records
    if config.merge_duplicate_titles:
        records = collapse_duplicates(records, config.internal_marker)

    sections = [build_section(t, records, links, config) for t in config.section_titles]
    body = "\n".join(s for s in sections if s)

    footer = build_footer(records, links, config)
    if footer:
        body += "\n" + footer

    # Records that render nowhere (e.g. revert) do not earn a header
    if not body:
        return ""

    final = ""
    threshold = config.thank_you_threshold
    if count_contributors(records, config) > threshold or len(parsed.committers) > threshold:
        final += THANK_YOU_HEADER + "\n\n"
    final += body

    if config.include_compare_link and release_range is not None:
        compare = links.compare_link(release_range)
        if compare:
            final += f"\n**Full changelog**: {compare}\n"

    return final


def render_changelog(
    log_text: str,
    identity: RepoIdentity | Callable[[], RepoIdentity],
    config: ReleaseNotesConfig,
    release_range: ReleaseRange | None = None,
) -> str:
    """Turn raw log text into a changelog without touching git.

    *identity* may be a callable, resolved only once a link is rendered.
    """
    parsed = parse_log(log_text, config.changelog)
    logger.info(
        "Parsed %d commits (%d dropped, %d committers)",
        len(parsed.records),
        parsed.dropped,
        len(parsed.committers),
    )
    links = LinkResolver(identity, base_url=config.github.base_url)
    return assemble_changelog(parsed, links, config.changelog, release_range)


def resolve_identity(repo: GitRepository, config: ReleaseNotesConfig) -> RepoIdentity:
    """Return the configured owner/repo, falling back to the remote URL."""
    if config.github.owner and config.github.repo:
        return RepoIdentity(owner=config.github.owner, repo=config.github.repo)
    return parse_remote_url(repo.get_remote_url())


def build_changelog(repo: GitRepository, config: ReleaseNotesConfig) -> str:
    """Generate the changelog for everything since the latest remote tag.

    Args:
        repo: Git repository
        config: Configuration

    Returns:
        Changelog content as string

    Raises:
        TagListError: If remote tags cannot be listed
        LogFetchError: If the git log cannot be read
        RemoteUrlError: If the repository identity cannot be determined
            and the changelog links to anything
    """
    release_range = resolve_release_range(repo.fetch_remote_tags())
    if release_range.is_from_root:
        logger.info("No remote tags found, summarizing the whole history")
    else:
        logger.info("Summarizing changes since %s", release_range.previous_tag)

    log_text = repo.fetch_log(release_range.expression, log_format(config.changelog))
    identity = partial(resolve_identity, repo, config)
    return render_changelog(log_text, identity, config, release_range)

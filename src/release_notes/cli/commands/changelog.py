"""Implementation of the 'changelog' command.

Prints the changelog for everything since the latest remote tag, or
writes it to a file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from release_notes.config import load_config
from release_notes.core.changelog import build_changelog
from release_notes.exceptions import ConfigError, GitError, ReleaseNotesError
from release_notes.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    path: Path | None,
    output: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to project directory
        output: Optional file to write the changelog to
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = path or Path.cwd()

    try:
        config = load_config(project_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    repo = GitRepository(project_path, remote=config.remote)

    try:
        with err_console.status("Reading commits since the last release..."):
            changelog = build_changelog(repo, config)
    except GitError as e:
        err_console.print(f"[red]Git error:[/] {e}")
        raise SystemExit(1) from e
    except ReleaseNotesError as e:
        err_console.print(f"[red]Error generating changelog:[/] {e}")
        raise SystemExit(1) from e

    if not changelog:
        err_console.print("[yellow]No conventional commits found since last release.[/]")
        return

    if output:
        output.write_text(changelog)
        console.print(f"  [green]✓[/] Wrote changelog to {output}")
        return

    # Raw output: no markup, no wrapping
    console.out(changelog, highlight=False, end="")

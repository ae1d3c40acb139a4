"""Command line entry point for release-notes."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from release_notes import __version__
from release_notes.cli.commands.changelog import run_changelog


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "path",
    required=False,
    type=click.Path(path_type=Path, exists=True, file_okay=False),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Write the changelog to this file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="release-notes")
def main(path: Path | None, output: Path | None, verbose: bool) -> None:
    """Generate a markdown changelog from conventional commits since the last tag."""
    console = Console()
    err_console = Console(stderr=True)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )

    run_changelog(path, output, console, err_console)


if __name__ == "__main__":
    main()

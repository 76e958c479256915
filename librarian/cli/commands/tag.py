"""Tag command - print the release tag for a library version."""

from __future__ import annotations

import typer

from librarian.cli._helpers import exit_with_error
from librarian.core.result import Err
from librarian.output.console import RichConsole
from librarian.services.commit import format_release_tag
from librarian.services.flags import validate_required_flag


def tag(
    library_id: str = typer.Option("", "--library-id"),
    version: str = typer.Option("", "--version"),
) -> None:
    """Print the release tag for a library version."""
    console = RichConsole()
    for name, value in (("library-id", library_id), ("version", version)):
        validated = validate_required_flag(name, value)
        if isinstance(validated, Err):
            exit_with_error(validated.error, console)
    typer.echo(format_release_tag(library_id, version))

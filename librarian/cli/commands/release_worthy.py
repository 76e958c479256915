"""Release-worthy command - decide whether a commit releases a library."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from librarian.cli._helpers import exit_with_error
from librarian.core.errors import CommandError
from librarian.core.result import Err
from librarian.output.console import RichConsole
from librarian.services.commitmessage import is_release_worthy, parse_commit_message
from librarian.services.flags import validate_required_flag


def release_worthy(
    library_id: str = typer.Option("", "--library-id", help="Library to decide for"),
    message_file: Path | None = typer.Option(
        None, "--message-file", help="Commit message file (stdin if omitted)"
    ),
    commit_hash: str = typer.Option("", "--commit", help="Commit hash of the message"),
) -> None:
    """Print whether a commit message warrants releasing a library."""
    console = RichConsole()
    validated = validate_required_flag("library-id", library_id)
    if isinstance(validated, Err):
        exit_with_error(validated.error, console)

    if message_file is None:
        text = sys.stdin.read()
    else:
        try:
            text = message_file.read_text(encoding="utf-8")
        except OSError as e:
            exit_with_error(
                CommandError(kind="io", message=f"unable to read {message_file}", hint=str(e)),
                console,
            )

    message = parse_commit_message(text, commit_hash=commit_hash)
    typer.echo("true" if is_release_worthy(message, library_id) else "false")

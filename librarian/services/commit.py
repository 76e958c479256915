"""Repository mutation and naming helpers for release steps."""

from __future__ import annotations

from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result
from librarian.git.repository import Repository
from librarian.output.console import ConsoleProtocol

__all__ = ["commit_all", "format_release_tag"]


def commit_all(
    repo: Repository,
    message: str,
    user_name: str,
    user_email: str,
    *,
    console: ConsoleProtocol,
) -> Result[bool, CommandError]:
    """Stage everything and commit it as one commit.

    No commit is made if there are no file modifications.

    Returns:
        Ok(True) if a commit was created, Ok(False) if the tree was unchanged.
    """
    staged = repo.add_all()
    if isinstance(staged, Err):
        e = staged.error
        return Err(
            CommandError(kind="git", message=f"git {e.command} failed in {repo.path}", hint=e.message)
        )
    if staged.value.is_clean:
        console.info("No modifications to commit.")
        return Ok(False)

    committed = repo.commit(message, user_name, user_email)
    if isinstance(committed, Err):
        e = committed.error
        return Err(CommandError(kind="git", message=f"git commit failed in {repo.path}", hint=e.message))
    return Ok(True)


def format_release_tag(library_id: str, version: str) -> str:
    return f"{library_id}-{version}"

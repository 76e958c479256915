"""Git operations on language repositories."""

from librarian.git.repository import (
    GitError,
    GitStatus,
    Repository,
    RepositoryOptions,
    StatusEntry,
    open_repository,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "RepositoryOptions",
    "StatusEntry",
    "open_repository",
]

"""Acquire the language repository for a command.

A URL is cloned into the work root (reusing an existing clone). A local
directory is opened in place and must be clean: generation diffs against
the repository's current state, so it cannot start from a modified tree.
"""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urlparse

from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result
from librarian.git.repository import GitError, Repository, RepositoryOptions, open_repository

__all__ = ["clone_or_open_language_repo", "is_url", "repo_dir_name"]

_URL_SCHEMES = {"http", "https", "ssh", "git", "file"}
_SCP_LIKE_RE = re.compile(r"^[\w.-]+@[\w.-]+:")


def is_url(repo: str) -> bool:
    if _SCP_LIKE_RE.match(repo):
        return True
    return urlparse(repo).scheme in _URL_SCHEMES


def repo_dir_name(url: str) -> str:
    """Last path segment of the URL, e.g. "google-cloud-go"."""
    return url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]


def _git_error(operation: str, path: Path):
    def wrap(error: GitError) -> CommandError:
        return CommandError(
            kind="git",
            message=f"unable to {operation} language repo at {path}",
            hint=f"git {error.command}: {error.message}",
        )

    return wrap


def clone_or_open_language_repo(
    work_root: Path,
    repo: str,
    ci: str,
) -> Result[Repository, CommandError]:
    if not repo:
        return Err(CommandError(kind="configuration", message="repo must be specified"))

    if is_url(repo):
        repo_path = work_root / repo_dir_name(repo)
        options = RepositoryOptions(dir=repo_path, maybe_clone=True, remote_url=repo, ci=ci)
        return open_repository(options).map_err(_git_error("clone", repo_path))

    abs_repo_root = Path(repo).expanduser().resolve()
    opened = open_repository(RepositoryOptions(dir=abs_repo_root, ci=ci))
    if isinstance(opened, Err):
        return opened.map_err(_git_error("open", abs_repo_root))
    language_repo = opened.value

    clean = language_repo.is_clean()
    if isinstance(clean, Err):
        return clean.map_err(_git_error("check status of", abs_repo_root))
    if not clean.value:
        return Err(
            CommandError(
                kind="precondition",
                message="language repo must be clean",
                hint=str(abs_repo_root),
            )
        )
    return Ok(language_repo)

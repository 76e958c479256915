"""Git repository abstraction.

Wraps the ``git`` CLI for the operations librarian needs on a language
repository: open or clone, status, stage everything, and commit. All
operations return Result types.

Usage:
    match open_repository(RepositoryOptions(dir=path)):
        case Ok(repo):
            clean = repo.is_clean()
        case Err(e):
            print(f"{e.command}: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from librarian.core.result import Err, Ok, Result
from librarian.platform.process import ProcessError
from librarian.platform.process import run as run_process

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "RepositoryOptions",
    "StatusEntry",
    "open_repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    @classmethod
    def from_process(cls, command: str, error: ProcessError) -> GitError:
        return cls(
            command=command,
            message=error.stderr.strip() or error.stdout.strip() or f"git {command} failed",
            returncode=error.returncode,
        )


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in git status.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed ``git status --porcelain=v1 -b`` output."""

    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if there are no staged, unstaged or untracked changes."""
        return len(self.entries) == 0


@dataclass(frozen=True, slots=True)
class RepositoryOptions:
    """How to obtain a repository handle.

    Attributes:
        dir: Local directory of the working copy.
        maybe_clone: Clone ``remote_url`` into ``dir`` when it does not exist.
        remote_url: Remote to clone from; required with ``maybe_clone``.
        ci: CI environment label, carried on the handle.
    """

    dir: Path
    maybe_clone: bool = False
    remote_url: str = ""
    ci: str = ""


class Repository:
    """A git working copy.

    Attributes:
        path: Absolute path to the repository root
        ci: CI environment label the repository was opened under
    """

    def __init__(self, path: Path, *, ci: str = "") -> None:
        self.path = path
        self.ci = ci

    def __repr__(self) -> str:
        return f"Repository({str(self.path)!r})"

    def exists(self) -> bool:
        """Check if this is a git working copy (.git dir, or file for worktrees)."""
        return (self.path / ".git").exists()

    def status(self) -> Result[GitStatus, GitError]:
        result = self._run(["status", "--porcelain=v1", "-b"])
        match result:
            case Err(e):
                return Err(GitError.from_process("status", e))
            case Ok(stdout):
                return Ok(self._parse_status(stdout))

    def is_clean(self) -> Result[bool, GitError]:
        """Check for staged, unstaged and untracked changes.

        A failing ``git status`` is reported as an
        error rather than treated as dirty.
        """
        return self.status().map(lambda status: status.is_clean)

    def add_all(self) -> Result[GitStatus, GitError]:
        """Stage every working tree change and return the resulting status."""
        result = self._run(["add", "-A"])
        if isinstance(result, Err):
            return Err(GitError.from_process("add -A", result.error))
        return self.status()

    def commit(self, message: str, user_name: str, user_email: str) -> Result[None, GitError]:
        """Commit the staged changes as the given author/committer."""
        result = self._run(
            [
                "-c",
                f"user.name={user_name}",
                "-c",
                f"user.email={user_email}",
                "commit",
                "-m",
                message,
            ]
        )
        if isinstance(result, Err):
            return Err(GitError.from_process("commit", result.error))
        return Ok(None)

    def head_commit(self) -> Result[str, GitError]:
        result = self._run(["rev-parse", "HEAD"])
        match result:
            case Err(e):
                return Err(GitError.from_process("rev-parse HEAD", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path)

    def _parse_status(self, output: str) -> GitStatus:
        entries: list[StatusEntry] = []
        for line in output.splitlines():
            # "## branch...upstream" header and blank lines carry no changes
            if line.startswith("##") or len(line) < 4:
                continue
            entries.append(StatusEntry(xy=line[:2], path=line[3:]))

        return GitStatus(entries=tuple(entries))


def _clone(options: RepositoryOptions) -> Result[None, GitError]:
    if not options.remote_url:
        return Err(GitError(command="clone", message="remote URL required to clone"))
    try:
        options.dir.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(GitError(command="clone", message=str(e)))
    result = run_process(
        ["git", "clone", options.remote_url, str(options.dir)],
        cwd=options.dir.parent,
    )
    if isinstance(result, Err):
        return Err(GitError.from_process("clone", result.error))
    return Ok(None)


def open_repository(options: RepositoryOptions) -> Result[Repository, GitError]:
    """Open a working copy, cloning it first when allowed.

    An existing clone at ``options.dir`` is reused as-is, so repeated runs
    against the same work root do not re-clone. Missing parents of
    ``options.dir`` are created before cloning.

    Returns:
        Ok(Repository) bound to ``options.dir``
        Err(GitError) if cloning fails or the directory is not a repository
    """
    repo = Repository(options.dir, ci=options.ci)
    if options.maybe_clone and not options.dir.exists():
        cloned = _clone(options)
        if isinstance(cloned, Err):
            return cloned

    if not options.dir.is_dir():
        return Err(GitError(command="open", message=f"directory does not exist: {options.dir}"))
    if not repo.exists():
        return Err(GitError(command="open", message=f"not a git repository: {options.dir}"))
    return Ok(repo)

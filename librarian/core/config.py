"""Immutable command configuration.

All flag values and the push credential are captured once, up front,
into a ``CommandConfig``. Validators and the command-state assembler
receive it explicitly; nothing reads flags or the environment later in
the run.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "CommandConfig",
    "DEFAULT_ENV_FILE_NAME",
    "GITHUB_TOKEN_ENV_VAR",
    "RELEASE_ID_ENV_VAR",
    "read_github_token",
]

GITHUB_TOKEN_ENV_VAR = "LIBRARIAN_GITHUB_TOKEN"
RELEASE_ID_ENV_VAR = "_RELEASE_ID"
DEFAULT_ENV_FILE_NAME = "env-vars.txt"


def read_github_token(environ: Mapping[str, str] | None = None) -> str:
    """Read the push credential. Missing and empty are the same thing."""
    env = os.environ if environ is None else environ
    return env.get(GITHUB_TOKEN_ENV_VAR, "")


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """Inputs for one librarian invocation.

    Attributes:
        language: Language of the repository, e.g. "go" or "python".
        repo: Language repository, as a URL or a local directory.
        image: Generator image override (used verbatim when set).
        default_repository: Registry prefix for the derived image.
        secrets_project: Project used to resolve container secrets.
        ci: Free-form CI environment label, recorded on the repo handle.
        uid: User id the container runs as ("" for the image default).
        gid: Group id the container runs as.
        work_root: Work directory override; a timestamped dir otherwise.
        push: Whether results are pushed (requires github_token).
        github_token: Push credential, read once from the environment.
        skip_integration_tests: Tracking bug, e.g. "b/12345", or "".
        env_file: Results file override; <work_root>/env-vars.txt otherwise.
        git_user_name: Author name for generated commits.
        git_user_email: Author email for generated commits.
        library_id: Library being operated on, when the command needs one.
        library_version: Version being released, when applicable.
    """

    language: str = ""
    repo: str = ""
    image: str = ""
    default_repository: str = ""
    secrets_project: str = ""
    ci: str = ""
    uid: str = ""
    gid: str = ""
    work_root: Path | None = None
    push: bool = False
    github_token: str = ""
    skip_integration_tests: str = ""
    env_file: Path | None = None
    git_user_name: str = ""
    git_user_email: str = ""
    library_id: str = ""
    library_version: str = ""

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **values: object,
    ) -> CommandConfig:
        """Build a config from flag values plus the environment credential."""
        return cls(github_token=read_github_token(environ), **values)  # type: ignore[arg-type]

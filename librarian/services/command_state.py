"""Command state assembly.

``create_command_state_for_language`` runs the fixed preparation
pipeline shared by every command that operates on a language repository:

1. create the work root (timestamped, or the override verbatim)
2. clone or open the language repository
3. load pipeline state and config from it
4. derive the generator image
5. build the container configuration

Each stage blocks, and the first failure is returned as-is. A
``CommandState`` only exists once every stage succeeded.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from librarian.container.docker import ContainerConfig
from librarian.core.config import DEFAULT_ENV_FILE_NAME, CommandConfig
from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result
from librarian.git.repository import Repository
from librarian.output.console import ConsoleProtocol
from librarian.platform.files import append_text
from librarian.services.image import derive_image
from librarian.services.language_repo import clone_or_open_language_repo
from librarian.state.loader import load_repo_state_and_config
from librarian.state.model import PipelineConfig, PipelineState

__all__ = [
    "CommandState",
    "append_result_environment_variable",
    "create_command_state_for_language",
    "create_work_root",
    "format_timestamp",
]

WORK_ROOT_PREFIX = "librarian-"


@dataclass(frozen=True, slots=True)
class CommandState:
    """Everything a command needs once preparation succeeded.

    Attributes:
        start_time: When the command began; the consistent timestamp for
            anything the command names or records.
        work_root: Base directory for all command artifacts.
        language_repo: The acquired language repository.
        pipeline_config: Pipeline configuration loaded from the repo.
        pipeline_state: Pipeline state loaded from the repo.
        container_config: Settings for running containerized commands.
    """

    start_time: datetime
    work_root: Path
    language_repo: Repository
    pipeline_config: PipelineConfig
    pipeline_state: PipelineState
    container_config: ContainerConfig


def format_timestamp(t: datetime) -> str:
    """Second-granularity UTC timestamp, e.g. 20250102T030405Z."""
    return t.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def create_work_root(
    t: datetime,
    work_root_override: Path | None,
    *,
    console: ConsoleProtocol,
    temp_root: Path | None = None,
) -> Result[Path, CommandError]:
    """Create the work root for this invocation.

    An override is used verbatim. Otherwise ``librarian-<timestamp>`` is
    created under the system temp directory; an existing directory with
    that name is left by an earlier run and is an error, not a race to
    retry.
    """
    if work_root_override is not None:
        console.info("Using specified working directory", dir=work_root_override)
        return Ok(work_root_override)

    base = temp_root if temp_root is not None else Path(tempfile.gettempdir())
    path = base / f"{WORK_ROOT_PREFIX}{format_timestamp(t)}"

    try:
        path.mkdir(mode=0o755)
    except FileExistsError:
        return Err(
            CommandError(
                kind="precondition",
                message=f"temporary working directory already exists: {path}",
            )
        )
    except OSError as e:
        return Err(
            CommandError(
                kind="io",
                message=f"unable to create temporary working directory '{path}'",
                hint=str(e),
            )
        )

    console.info("Temporary working directory", dir=path)
    return Ok(path)


def create_command_state_for_language(
    config: CommandConfig,
    *,
    console: ConsoleProtocol,
    now: datetime | None = None,
    temp_root: Path | None = None,
) -> Result[CommandState, CommandError]:
    """Prepare the command state for a command that needs a language repo.

    Commands that only sometimes use a language repository should build
    their state themselves.
    """
    start_time = now if now is not None else datetime.now(timezone.utc)

    work_root = create_work_root(
        start_time, config.work_root, console=console, temp_root=temp_root
    )
    if isinstance(work_root, Err):
        return work_root

    language_repo = clone_or_open_language_repo(work_root.value, config.repo, config.ci)
    if isinstance(language_repo, Err):
        return language_repo
    console.info("Language repo", dir=language_repo.value.path)

    loaded = load_repo_state_and_config(language_repo.value)
    if isinstance(loaded, Err):
        return loaded
    pipeline_state, pipeline_config = loaded.value

    image = derive_image(
        config.language, config.image, config.default_repository, pipeline_state
    )
    console.info("Generator image", image=image)

    container_config = ContainerConfig.new(
        work_root.value,
        image,
        config.secrets_project,
        config.uid,
        config.gid,
        pipeline_config,
    )
    if isinstance(container_config, Err):
        return container_config

    return Ok(
        CommandState(
            start_time=start_time,
            work_root=work_root.value,
            language_repo=language_repo.value,
            pipeline_config=pipeline_config,
            pipeline_state=pipeline_state,
            container_config=container_config.value,
        )
    )


def append_result_environment_variable(
    work_root: Path,
    name: str,
    value: str,
    env_file_override: Path | None = None,
) -> Result[None, CommandError]:
    """Record ``NAME=VALUE`` for later pipeline steps.

    The file is append-only; defaults to ``<work_root>/env-vars.txt``.
    """
    env_file = env_file_override
    if env_file is None:
        env_file = work_root / DEFAULT_ENV_FILE_NAME
    try:
        append_text(env_file, f"{name}={value}\n")
    except OSError as e:
        return Err(
            CommandError(kind="io", message=f"unable to append to {env_file}", hint=str(e))
        )
    return Ok(None)

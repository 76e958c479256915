"""Load pipeline state and config from a language repository.

There is no fallback: a missing or malformed file aborts the command.
"""

from __future__ import annotations

import json
from pathlib import Path

from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result
from librarian.git.repository import Repository
from librarian.state.model import (
    LibraryState,
    PipelineConfig,
    PipelineState,
    parse_pipeline_config,
    parse_pipeline_state,
)

__all__ = [
    "GENERATOR_INPUT_DIR",
    "PIPELINE_CONFIG_FILE",
    "PIPELINE_STATE_FILE",
    "find_library_by_id",
    "find_library_id_by_api_path",
    "load_repo_state_and_config",
]

GENERATOR_INPUT_DIR = "generator-input"
PIPELINE_STATE_FILE = "pipeline-state.json"
PIPELINE_CONFIG_FILE = "pipeline-config.json"


def _read_json(path: Path) -> Result[object, CommandError]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(CommandError(kind="state", message="file not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(CommandError(kind="state", message="unable to read file", hint=str(e)))

    try:
        data: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(CommandError(kind="state", message="invalid JSON", hint=str(e)))
    return Ok(data)


def _with_path(path: Path):
    def attach(error: CommandError) -> CommandError:
        return CommandError(kind=error.kind, message=f"{path}: {error.message}", hint=error.hint)

    return attach


def load_pipeline_state(repo: Repository) -> Result[PipelineState, CommandError]:
    path = repo.path / GENERATOR_INPUT_DIR / PIPELINE_STATE_FILE
    return _read_json(path).flat_map(parse_pipeline_state).map_err(_with_path(path))


def load_pipeline_config(repo: Repository) -> Result[PipelineConfig, CommandError]:
    path = repo.path / GENERATOR_INPUT_DIR / PIPELINE_CONFIG_FILE
    return _read_json(path).flat_map(parse_pipeline_config).map_err(_with_path(path))


def load_repo_state_and_config(
    repo: Repository,
) -> Result[tuple[PipelineState, PipelineConfig], CommandError]:
    """Read both pipeline files from the repository's working tree."""
    state = load_pipeline_state(repo)
    if isinstance(state, Err):
        return state
    config = load_pipeline_config(repo)
    if isinstance(config, Err):
        return config
    return Ok((state.value, config.value))


def find_library_by_id(state: PipelineState, library_id: str) -> LibraryState | None:
    for library in state.libraries:
        if library.id == library_id:
            return library
    return None


def find_library_id_by_api_path(state: PipelineState, api_path: str) -> str:
    """Find the library generated from ``api_path``.

    Returns the first matching library id, or "" when no library includes
    the path.
    """
    for library in state.libraries:
        if api_path in library.api_paths:
            return library.id
    return ""

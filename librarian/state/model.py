"""Pipeline state and configuration records.

These mirror the JSON files checked into each language repository under
``generator-input/``. Records are read-only once parsed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result
from librarian.core.structured import (
    as_str_dict,
    get_list,
    get_str,
    get_str_list,
    get_table,
    lookup,
)

__all__ = [
    "CommandEnvironment",
    "EnvironmentVariable",
    "LibraryState",
    "PipelineConfig",
    "PipelineState",
    "parse_pipeline_config",
    "parse_pipeline_state",
]


@dataclass(frozen=True, slots=True)
class LibraryState:
    """Generation and release state of one library."""

    id: str
    current_version: str = ""
    api_paths: tuple[str, ...] = ()
    source_paths: tuple[str, ...] = ()
    last_generated_commit: str = ""
    last_released_commit: str = ""
    generation_automation_level: str = ""
    release_automation_level: str = ""


@dataclass(frozen=True, slots=True)
class PipelineState:
    image_tag: str = ""
    libraries: tuple[LibraryState, ...] = ()
    common_library_source_paths: tuple[str, ...] = ()
    ignored_api_paths: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class EnvironmentVariable:
    """An environment variable passed to a container command.

    ``source`` names where the value comes from (e.g. a host environment
    variable); ``default_value`` is used when nothing else provides one.
    """

    name: str
    source: str = ""
    default_value: str = ""
    secret_name: str = ""


@dataclass(frozen=True, slots=True)
class CommandEnvironment:
    environment_variables: tuple[EnvironmentVariable, ...] = ()


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    commands: Mapping[str, CommandEnvironment] = field(default_factory=dict)

    def environment_for(self, command: str) -> tuple[EnvironmentVariable, ...]:
        env = self.commands.get(command)
        return env.environment_variables if env else ()


def _state_error(message: str) -> Err[CommandError]:
    return Err(CommandError(kind="state", message=message))


def _strs(table: Mapping[str, object], key: str, where: str) -> Result[tuple[str, ...], CommandError]:
    values = get_str_list(table, key)
    if values is None:
        return _state_error(f"{where}: '{key}' must be a list of strings")
    return Ok(tuple(values))


def _parse_library(raw: object, index: int) -> Result[LibraryState, CommandError]:
    table = as_str_dict(raw)
    if table is None:
        return _state_error(f"libraries[{index}] must be an object")
    library_id = get_str(table, "id")
    if library_id is None:
        return _state_error(f"libraries[{index}] has no id")

    where = f"library {library_id}"
    api_paths = _strs(table, "apiPaths", where)
    if isinstance(api_paths, Err):
        return api_paths
    source_paths = _strs(table, "sourcePaths", where)
    if isinstance(source_paths, Err):
        return source_paths

    return Ok(
        LibraryState(
            id=library_id,
            current_version=get_str(table, "currentVersion") or "",
            api_paths=api_paths.value,
            source_paths=source_paths.value,
            last_generated_commit=get_str(table, "lastGeneratedCommit") or "",
            last_released_commit=get_str(table, "lastReleasedCommit") or "",
            generation_automation_level=get_str(table, "generationAutomationLevel") or "",
            release_automation_level=get_str(table, "releaseAutomationLevel") or "",
        )
    )


def parse_pipeline_state(data: object) -> Result[PipelineState, CommandError]:
    """Build a PipelineState from decoded pipeline-state.json content."""
    table = as_str_dict(data)
    if table is None:
        return _state_error("pipeline state root must be an object")

    raw_libraries = get_list(table, "libraries")
    if raw_libraries is None and lookup(table, "libraries") is not None:
        return _state_error("'libraries' must be a list")

    libraries: list[LibraryState] = []
    for index, raw in enumerate(raw_libraries or []):
        parsed = _parse_library(raw, index)
        if isinstance(parsed, Err):
            return parsed
        libraries.append(parsed.value)

    common = _strs(table, "commonLibrarySourcePaths", "pipeline state")
    if isinstance(common, Err):
        return common
    ignored = _strs(table, "ignoredApiPaths", "pipeline state")
    if isinstance(ignored, Err):
        return ignored

    return Ok(
        PipelineState(
            image_tag=get_str(table, "imageTag") or "",
            libraries=tuple(libraries),
            common_library_source_paths=common.value,
            ignored_api_paths=ignored.value,
        )
    )


def _parse_env_var(raw: object, where: str) -> Result[EnvironmentVariable, CommandError]:
    table = as_str_dict(raw)
    if table is None:
        return _state_error(f"{where}: environment variable must be an object")
    name = get_str(table, "name")
    if name is None:
        return _state_error(f"{where}: environment variable has no name")
    return Ok(
        EnvironmentVariable(
            name=name,
            source=get_str(table, "source") or "",
            default_value=get_str(table, "defaultValue") or "",
            secret_name=get_str(table, "secretName") or "",
        )
    )


def parse_pipeline_config(data: object) -> Result[PipelineConfig, CommandError]:
    """Build a PipelineConfig from decoded pipeline-config.json content."""
    table = as_str_dict(data)
    if table is None:
        return _state_error("pipeline config root must be an object")

    raw_commands = get_table(table, "commands")
    if raw_commands is None and lookup(table, "commands") is not None:
        return _state_error("'commands' must be an object")
    commands: dict[str, CommandEnvironment] = {}
    for name, raw in (raw_commands or {}).items():
        command = as_str_dict(raw)
        if command is None:
            return _state_error(f"command {name} must be an object")
        env_vars: list[EnvironmentVariable] = []
        for item in get_list(command, "environmentVariables") or []:
            parsed = _parse_env_var(item, f"command {name}")
            if isinstance(parsed, Err):
                return parsed
            env_vars.append(parsed.value)
        commands[name] = CommandEnvironment(environment_variables=tuple(env_vars))

    return Ok(PipelineConfig(commands=commands))

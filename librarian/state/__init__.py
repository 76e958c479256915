"""Pipeline state read from language repositories."""

from librarian.state.loader import (
    find_library_by_id,
    find_library_id_by_api_path,
    load_repo_state_and_config,
)
from librarian.state.model import (
    CommandEnvironment,
    EnvironmentVariable,
    LibraryState,
    PipelineConfig,
    PipelineState,
)

__all__ = [
    "CommandEnvironment",
    "EnvironmentVariable",
    "LibraryState",
    "PipelineConfig",
    "PipelineState",
    "find_library_by_id",
    "find_library_id_by_api_path",
    "load_repo_state_and_config",
]

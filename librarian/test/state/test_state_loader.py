"""Tests for librarian.state.loader."""

from __future__ import annotations

import json
from pathlib import Path

from librarian.core.result import Err, Ok
from librarian.git.repository import Repository
from librarian.state.loader import (
    find_library_by_id,
    find_library_id_by_api_path,
    load_repo_state_and_config,
)
from librarian.state.model import LibraryState, PipelineState


def write_generator_input(
    root: Path,
    state: object | None = None,
    config: object | None = None,
) -> None:
    gen = root / "generator-input"
    gen.mkdir(parents=True, exist_ok=True)
    if state is not None:
        (gen / "pipeline-state.json").write_text(json.dumps(state), encoding="utf-8")
    if config is not None:
        (gen / "pipeline-config.json").write_text(json.dumps(config), encoding="utf-8")


class TestLoadRepoStateAndConfig:
    def test_loads_both(self, tmp_path: Path) -> None:
        write_generator_input(
            tmp_path,
            state={"imageTag": "v2", "libraries": [{"id": "lib-A"}]},
            config={"commands": {}},
        )

        result = load_repo_state_and_config(Repository(tmp_path))

        assert isinstance(result, Ok)
        state, config = result.value
        assert state.image_tag == "v2"
        assert state.libraries[0].id == "lib-A"
        assert config.commands == {}

    def test_missing_state_file(self, tmp_path: Path) -> None:
        write_generator_input(tmp_path, config={})

        result = load_repo_state_and_config(Repository(tmp_path))

        assert isinstance(result, Err)
        assert result.error.kind == "state"
        assert "pipeline-state.json: file not found" in result.error.message

    def test_missing_config_file(self, tmp_path: Path) -> None:
        write_generator_input(tmp_path, state={})

        result = load_repo_state_and_config(Repository(tmp_path))

        assert isinstance(result, Err)
        assert "pipeline-config.json" in result.error.message

    def test_invalid_json(self, tmp_path: Path) -> None:
        write_generator_input(tmp_path, config={})
        (tmp_path / "generator-input" / "pipeline-state.json").write_text("{", encoding="utf-8")

        result = load_repo_state_and_config(Repository(tmp_path))

        assert isinstance(result, Err)
        assert "invalid JSON" in result.error.message
        assert result.error.hint

    def test_malformed_state(self, tmp_path: Path) -> None:
        write_generator_input(tmp_path, state={"libraries": [{}]}, config={})

        result = load_repo_state_and_config(Repository(tmp_path))

        assert isinstance(result, Err)
        assert result.error.message.endswith("libraries[0] has no id")


class TestLookups:
    STATE = PipelineState(
        libraries=(
            LibraryState(id="lib-A", api_paths=("google/a/v1",)),
            LibraryState(id="lib-B", api_paths=("google/b/v1", "google/shared/v1")),
            LibraryState(id="lib-C", api_paths=("google/shared/v1",)),
        )
    )

    def test_find_library_by_id(self) -> None:
        library = find_library_by_id(self.STATE, "lib-B")
        assert library is not None
        assert library.id == "lib-B"
        assert find_library_by_id(self.STATE, "lib-Z") is None

    def test_find_library_by_id_is_exact(self) -> None:
        state = PipelineState(libraries=(LibraryState(id=" lib-A "),))
        assert find_library_by_id(state, "lib-A") is None
        assert find_library_by_id(state, " lib-A ") is state.libraries[0]

    def test_find_library_id_by_api_path(self) -> None:
        assert find_library_id_by_api_path(self.STATE, "google/a/v1") == "lib-A"
        assert find_library_id_by_api_path(self.STATE, "google/shared/v1") == "lib-B"
        assert find_library_id_by_api_path(self.STATE, "google/none/v1") == ""

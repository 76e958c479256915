"""Tests for language repository acquisition."""

from __future__ import annotations

from pathlib import Path

import pytest

from librarian.core.result import Err, Ok
from librarian.git import repository as repository_mod
from librarian.platform.process import ProcessError
from librarian.services.language_repo import clone_or_open_language_repo, is_url, repo_dir_name


def fake_git(monkeypatch: pytest.MonkeyPatch, *, status: str = "## main\n", clone_into: Path | None = None):
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], cwd: Path, env: object = None):
        del cwd, env
        calls.append(cmd)
        if cmd[:2] == ["git", "clone"]:
            if clone_into is None:
                return Err(ProcessError(tuple(cmd), 128, "", "fatal: repository not found"))
            (clone_into / ".git").mkdir(parents=True)
            return Ok("")
        if "status" in cmd:
            return Ok(status)
        raise AssertionError(f"unexpected command: {cmd}")

    monkeypatch.setattr(repository_mod, "run_process", fake_run)
    return calls


class TestIsUrl:
    @pytest.mark.parametrize(
        "repo",
        [
            "https://github.com/googleapis/google-cloud-go",
            "http://example.com/repo",
            "ssh://git@github.com/org/repo.git",
            "git@github.com:googleapis/google-cloud-go.git",
        ],
    )
    def test_urls(self, repo: str) -> None:
        assert is_url(repo) is True

    @pytest.mark.parametrize("repo", ["/src/google-cloud-go", "google-cloud-go", "./repo", "C:repo"])
    def test_paths(self, repo: str) -> None:
        assert is_url(repo) is False


class TestRepoDirName:
    def test_last_segment(self) -> None:
        assert repo_dir_name("https://github.com/googleapis/google-cloud-go") == "google-cloud-go"

    def test_trailing_slash(self) -> None:
        assert repo_dir_name("https://github.com/googleapis/google-cloud-go/") == "google-cloud-go"

    def test_scp_like(self) -> None:
        assert repo_dir_name("git@github.com:googleapis/repo.git") == "repo.git"


class TestCloneOrOpenLanguageRepo:
    def test_empty_repo(self, tmp_path: Path) -> None:
        result = clone_or_open_language_repo(tmp_path, "", "")

        assert isinstance(result, Err)
        assert result.error.message == "repo must be specified"

    def test_url_is_cloned_into_work_root(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        target = tmp_path / "google-cloud-go"
        calls = fake_git(monkeypatch, clone_into=target)

        result = clone_or_open_language_repo(
            tmp_path, "https://github.com/googleapis/google-cloud-go/", "kokoro"
        )

        assert isinstance(result, Ok)
        assert result.value.path == target
        assert result.value.ci == "kokoro"
        assert calls[0][:3] == ["git", "clone", "https://github.com/googleapis/google-cloud-go/"]

    def test_clone_failure(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake_git(monkeypatch)

        result = clone_or_open_language_repo(tmp_path, "https://github.com/org/missing", "")

        assert isinstance(result, Err)
        assert result.error.kind == "git"
        assert str(tmp_path / "missing") in result.error.message
        assert result.error.hint is not None
        assert "repository not found" in result.error.hint

    def test_clean_local_repo(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        repo_dir = tmp_path / "repo"
        (repo_dir / ".git").mkdir(parents=True)
        fake_git(monkeypatch, status="## main...origin/main\n")
        monkeypatch.chdir(tmp_path)

        result = clone_or_open_language_repo(tmp_path / "work", "repo", "")

        assert isinstance(result, Ok)
        assert result.value.path == repo_dir.resolve()
        assert result.value.path.is_absolute()

    def test_dirty_local_repo(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        repo_dir = tmp_path / "repo"
        (repo_dir / ".git").mkdir(parents=True)
        fake_git(monkeypatch, status="## main\n M generator-input/pipeline-state.json\n")

        result = clone_or_open_language_repo(tmp_path / "work", str(repo_dir), "")

        assert isinstance(result, Err)
        assert result.error.kind == "precondition"
        assert result.error.message == "language repo must be clean"
        assert result.error.hint == str(repo_dir.resolve())

    def test_staged_changes_are_dirty(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        fake_git(monkeypatch, status="## main\nA  new.go\n")

        result = clone_or_open_language_repo(tmp_path / "work", str(tmp_path), "")

        assert isinstance(result, Err)
        assert result.error.kind == "precondition"

    def test_local_path_not_a_repo(self, tmp_path: Path) -> None:
        result = clone_or_open_language_repo(tmp_path / "work", str(tmp_path), "")

        assert isinstance(result, Err)
        assert result.error.kind == "git"
        assert "not a git repository" in (result.error.hint or "")

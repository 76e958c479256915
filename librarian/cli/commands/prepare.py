"""Prepare command - validate flags and assemble the state for a language repo."""

from __future__ import annotations

from pathlib import Path

import typer

from librarian.cli._helpers import exit_with_error
from librarian.core.config import RELEASE_ID_ENV_VAR, CommandConfig
from librarian.core.result import Err
from librarian.output.console import RichConsole
from librarian.services.command_state import (
    append_result_environment_variable,
    create_command_state_for_language,
)
from librarian.services.flags import validate_command_flags


def prepare(
    language: str = typer.Option("", "--language", help="Language of the repository"),
    repo: str = typer.Option("", "--repo", help="Language repo URL or local directory"),
    image: str = typer.Option("", "--image", help="Generator image override"),
    default_repository: str = typer.Option(
        "", "--default-repository", help="Registry prefix for the derived image"
    ),
    secrets_project: str = typer.Option("", "--secrets-project"),
    ci: str = typer.Option("", "--ci", help="CI environment label"),
    uid: str = typer.Option("", "--uid", help="User id to run containers as"),
    gid: str = typer.Option("", "--gid", help="Group id to run containers as"),
    work_root: Path | None = typer.Option(None, "--work-root", help="Work directory override"),
    push: bool = typer.Option(False, "--push", help="Push results (needs LIBRARIAN_GITHUB_TOKEN)"),
    skip_integration_tests: str = typer.Option(
        "", "--skip-integration-tests", help="Tracking bug, e.g. b/12345"
    ),
    env_file: Path | None = typer.Option(None, "--env-file", help="Results file override"),
    release_id: str = typer.Option("", "--release-id", help="Record this release id"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors"),
) -> None:
    """Validate flags and prepare the work root, repo, state and image."""
    console = RichConsole(quiet=quiet)
    config = CommandConfig.from_env(
        language=language,
        repo=repo,
        image=image,
        default_repository=default_repository,
        secrets_project=secrets_project,
        ci=ci,
        uid=uid,
        gid=gid,
        work_root=work_root,
        push=push,
        skip_integration_tests=skip_integration_tests,
        env_file=env_file,
    )

    validated = validate_command_flags(config)
    if isinstance(validated, Err):
        exit_with_error(validated.error, console)

    result = create_command_state_for_language(config, console=console)
    if isinstance(result, Err):
        exit_with_error(result.error, console)
    state = result.value

    if release_id:
        recorded = append_result_environment_variable(
            state.work_root, RELEASE_ID_ENV_VAR, release_id, config.env_file
        )
        if isinstance(recorded, Err):
            exit_with_error(recorded.error, console)

    typer.echo(f"work_root={state.work_root}")
    typer.echo(f"repo={state.language_repo.path}")
    typer.echo(f"image={state.container_config.image}")
    typer.echo(f"libraries={len(state.pipeline_state.libraries)}")

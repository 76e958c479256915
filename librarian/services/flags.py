"""Command flag validation.

Validators are pure functions of their inputs and run before any
directory, repository or container side effect. The first failure aborts
the command.
"""

from __future__ import annotations

from collections.abc import Iterable

from librarian.core.config import GITHUB_TOKEN_ENV_VAR, CommandConfig
from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result

__all__ = [
    "validate_command_flags",
    "validate_push",
    "validate_required_flag",
    "validate_skip_integration_tests",
]


def validate_push(push: bool, github_token: str) -> Result[None, CommandError]:
    """Pushing requires a GitHub token; without push the token is irrelevant."""
    if push and not github_token:
        return Err(
            CommandError(
                kind="configuration",
                message="no GitHub token supplied for push",
                hint=f"set {GITHUB_TOKEN_ENV_VAR}",
            )
        )
    return Ok(None)


def validate_skip_integration_tests(value: str) -> Result[None, CommandError]:
    """Accept an empty value or a bug reference prefixed with ``b/``."""
    if value == "" or value.startswith("b/"):
        return Ok(None)
    return Err(
        CommandError(
            kind="configuration",
            message=(
                "skipping integration tests requires a bug to be specified, "
                "e.g. -skip-integration-tests=b/12345"
            ),
        )
    )


def validate_required_flag(name: str, value: str) -> Result[None, CommandError]:
    if not value.strip():
        return Err(CommandError(kind="configuration", message=f"required flag -{name} not specified"))
    return Ok(None)


def validate_command_flags(
    config: CommandConfig,
    required: Iterable[str] = ("language", "repo"),
) -> Result[None, CommandError]:
    """Run every validator against ``config`` and stop at the first failure.

    Args:
        config: Flag values for the invocation.
        required: Names of string fields on ``config`` that must be non-blank.
            Underscores are shown as dashes in error messages.
    """
    result = validate_push(config.push, config.github_token)
    if isinstance(result, Err):
        return result
    result = validate_skip_integration_tests(config.skip_integration_tests)
    if isinstance(result, Err):
        return result
    for field_name in required:
        value = getattr(config, field_name)
        result = validate_required_flag(field_name.replace("_", "-"), str(value or ""))
        if isinstance(result, Err):
            return result
    return Ok(None)

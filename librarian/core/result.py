"""Value-or-error results for the command pipeline.

Every fallible step (flag validation, repository acquisition, state
loading, container configuration) returns a ``Result`` instead of
raising, so the caller decides where a failure stops the run.

Usage:
    match clone_or_open_language_repo(work_root, repo, ci):
        case Ok(repo):
            console.info("Language repo ready", dir=repo.path)
        case Err(error):
            console.error(error.message)

Stages are threaded with ``flat_map``; the first ``Err`` short-circuits
every later stage:

    result = read_json(path).flat_map(parse_pipeline_state)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Run the next stage with the contained value.

        Args:
            f: Stage taking the value and returning a new Result.

        Returns:
            Whatever the stage returns.
        """
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error, e.g. to attach the failing path."""
        return Err(f(self.error))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Err[E]:
        """Skip the stage; the error propagates unchanged."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]

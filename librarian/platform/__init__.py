"""Process and filesystem primitives."""

from .files import append_text
from .process import ProcessError, run

__all__ = ["ProcessError", "append_text", "run"]

"""Core types shared by every librarian command."""

from .config import CommandConfig, read_github_token
from .errors import CommandError, ErrorCode, ErrorKind
from .result import Err, Ok, Result

__all__ = [
    "CommandConfig",
    "CommandError",
    "Err",
    "ErrorCode",
    "ErrorKind",
    "Ok",
    "Result",
    "read_github_token",
]

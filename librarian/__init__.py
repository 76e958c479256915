"""Release and generation automation for per-language client library repos."""

__version__ = "0.1.0"

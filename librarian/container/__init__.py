"""Generator container configuration."""

from librarian.container.docker import ContainerConfig, Mount

__all__ = ["ContainerConfig", "Mount"]

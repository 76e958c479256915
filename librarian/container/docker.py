"""Container execution configuration.

``ContainerConfig`` captures everything needed to run a generator image
for one invocation: the image, the work root it may mount, the user to
run as, and the per-command environment from the pipeline config. It
composes ``docker run`` argument lists; running them is left to the
caller.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from librarian.core.errors import CommandError
from librarian.core.result import Err, Ok, Result
from librarian.state.model import PipelineConfig

__all__ = ["ContainerConfig", "Mount"]


@dataclass(frozen=True, slots=True)
class Mount:
    host: Path
    container: str

    def as_arg(self) -> str:
        return f"{self.host}:{self.container}"


@dataclass(frozen=True, slots=True)
class ContainerConfig:
    """Settings for running containerized generator commands.

    Attributes:
        work_root: Work directory of the invocation.
        image: Fully-qualified generator image reference.
        secrets_project: Project used to look up secret-backed variables.
        uid: User id to run as, "" for the image default.
        gid: Group id to run as, "" for the image default.
        pipeline_config: Per-command environment configuration.
    """

    work_root: Path
    image: str
    secrets_project: str
    uid: str
    gid: str
    pipeline_config: PipelineConfig

    @classmethod
    def new(
        cls,
        work_root: Path,
        image: str,
        secrets_project: str,
        uid: str,
        gid: str,
        pipeline_config: PipelineConfig,
    ) -> Result[ContainerConfig, CommandError]:
        if not image:
            return Err(CommandError(kind="container", message="container image must be specified"))
        if bool(uid) != bool(gid):
            return Err(
                CommandError(
                    kind="container",
                    message="uid and gid must be specified together",
                    hint=f"uid={uid!r} gid={gid!r}",
                )
            )
        for label, value in (("uid", uid), ("gid", gid)):
            if value and not value.isdigit():
                return Err(
                    CommandError(kind="container", message=f"{label} must be numeric: {value}")
                )
        return Ok(
            cls(
                work_root=work_root,
                image=image,
                secrets_project=secrets_project,
                uid=uid,
                gid=gid,
                pipeline_config=pipeline_config,
            )
        )

    @property
    def user(self) -> str | None:
        if not self.uid:
            return None
        return f"{self.uid}:{self.gid}"

    def environment(
        self,
        command: str,
        environ: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Resolve the configured variables for ``command``.

        A variable takes its value from the host variable named by
        ``source`` when set, else its default. Variables that resolve to
        nothing are left out. Secret-backed values are resolved by the
        execution layer, not here.
        """
        env = os.environ if environ is None else environ
        resolved: dict[str, str] = {}
        for var in self.pipeline_config.environment_for(command):
            value = env.get(var.source, "") if var.source else ""
            value = value or var.default_value
            if value:
                resolved[var.name] = value
        return resolved

    def run_args(
        self,
        command: str,
        mounts: Sequence[Mount] = (),
        args: Sequence[str] = (),
        environ: Mapping[str, str] | None = None,
    ) -> list[str]:
        """Compose the ``docker run`` argv for a generator command."""
        argv = ["docker", "run", "--rm"]
        for mount in mounts:
            argv.extend(["-v", mount.as_arg()])
        if self.user:
            argv.extend(["--user", self.user])
        for name, value in self.environment(command, environ).items():
            argv.extend(["-e", f"{name}={value}"])
        argv.extend([self.image, command, *args])
        return argv

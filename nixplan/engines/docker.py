"""Docker-compatible container builder."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from nixplan.utils.errors import CommandError

from .base import ContainerBuilder

log = structlog.get_logger()


class DockerBuilder(ContainerBuilder):
    """Build images with ``docker build`` or a CLI-compatible tool."""

    def __init__(self, executable: str = "docker") -> None:
        """Configure the builder.

        Args:
            executable: Binary accepting ``build <context> -t <tag>``, e.g.
                ``docker`` or ``podman``.
        """
        self.executable = executable

    def build(self, context: Path, tag: str) -> None:
        """Run ``<executable> build <context> -t <tag>``.

        Raises:
            CommandError: If the executable is missing or exits non-zero.
        """
        cmd: list[str] = [self.executable, "build", str(context), "-t", tag]
        log.info("docker.build", executable=self.executable, tag=tag)
        try:
            subprocess.run(cmd, check=True)
        except FileNotFoundError as exc:
            raise CommandError(f"'{self.executable}' not found in PATH") from exc
        except subprocess.CalledProcessError as exc:
            log.error("docker.failed", tag=tag, returncode=exc.returncode)
            raise CommandError(
                f"{self.executable} build exited with status {exc.returncode}",
                exc.returncode,
            ) from exc

    def run_hint(self, tag: str) -> str:
        return f"{self.executable} run -it {tag}"

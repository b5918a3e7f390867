"""
Turn an application into a Docker build context and, optionally, an image.

:meth:`AppBuilder.build` performs, in order:

1. acquire a plan – load ``options.plan_path`` or run the planner;
2. pick a destination – ``options.out_dir`` or a temporary directory that is
   removed when the build finishes, whether it succeeds or fails;
3. mirror the application source into the destination;
4. write ``environment.nix`` and ``Dockerfile``;
5. build the image unless ``options.out_dir`` is set.

Artifacts already written to ``out_dir`` are left in place when a later
step fails.
"""

from __future__ import annotations

import tempfile
import uuid
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import structlog

from nixplan.app import App
from nixplan.config import BuildOptions
from nixplan.engines import ContainerBuilder, DockerBuilder
from nixplan.environment import Environment
from nixplan.generators import gen_dockerfile, gen_nix
from nixplan.models import BuildPlan
from nixplan.planner import AppPlanner
from nixplan.providers import Provider
from nixplan.utils.display import echo_hint, echo_section, echo_step, echo_success
from nixplan.utils.errors import (
    ArtifactIOError,
    CommandError,
    PlanIOError,
    ProviderError,
    stage,
)
from nixplan.utils.fs import copy_tree

log = structlog.get_logger()

NIX_FILENAME = "environment.nix"
DOCKERFILE_FILENAME = "Dockerfile"


@dataclass
class BuildResult:
    """Outcome of :meth:`AppBuilder.build`.

    Attributes:
        plan: The plan that was rendered.
        dest: Build context directory.  Already deleted when it was a
            temporary directory.
        image: Tag of the built image, or *None* when only artifacts were
            saved.
    """

    plan: BuildPlan
    dest: Path
    image: Optional[str] = None


def load_plan(path: str | Path) -> BuildPlan:
    """Read a persisted plan.

    Raises:
        PlanIOError: If the file cannot be read or is not a valid plan.
    """
    with stage("Reading build plan", PlanIOError):
        text = Path(path).read_text(encoding="utf-8")
    with stage("Deserializing build plan", PlanIOError):
        return BuildPlan.from_json(text)


class AppBuilder:
    """Sequence planning, artifact generation and the image build.

    Args:
        app: Application source tree.
        environment: Variables supplied by the caller.
        options: Planner overrides plus ``out_dir`` / ``plan_path``.
        name: Image tag; a random UUID is used when *None*.
        container_builder: Back-end invoked when no ``out_dir`` is set.
    """

    def __init__(
        self,
        app: App,
        environment: Environment,
        options: Optional[BuildOptions] = None,
        *,
        name: Optional[str] = None,
        container_builder: Optional[ContainerBuilder] = None,
    ) -> None:
        self.app = app
        self.environment = environment
        self.options = options or BuildOptions()
        self.name = name
        self.container_builder = container_builder or DockerBuilder()

    def plan(self, providers: Sequence[Provider]) -> BuildPlan:
        """Return a freshly derived plan for the application."""
        return AppPlanner(self.app, self.environment, self.options).plan(providers)

    def build(self, providers: Sequence[Provider]) -> BuildResult:
        """Acquire a plan and build it.

        Raises:
            NixplanError: Any stage failure, named after the stage.
        """
        echo_section("Building")

        if self.options.plan_path is not None:
            echo_step("Building from existing plan")
            plan = load_plan(self.options.plan_path)
        else:
            echo_step("Generating new build plan")
            with stage("Creating build plan", ProviderError):
                plan = self.plan(providers)

        return self.do_build(plan)

    def do_build(self, plan: BuildPlan) -> BuildResult:
        """Write the artifacts for *plan* and build the image if requested."""
        out_dir = self.options.out_dir

        with ExitStack() as stack:
            if out_dir is not None:
                dest = Path(out_dir).expanduser()
                with stage("Creating output directory", ArtifactIOError):
                    dest.mkdir(parents=True, exist_ok=True)
            else:
                with stage("Creating a temp directory", ArtifactIOError):
                    dest = Path(
                        stack.enter_context(tempfile.TemporaryDirectory(prefix="nixplan"))
                    )
            log.info("builder.dest", dest=str(dest), temporary=out_dir is None)

            echo_step("Copying source to build directory")
            with stage("Copying app source", CommandError):
                copy_tree(self.app.source, dest)

            echo_step("Writing build plan")
            with stage("Writing build plan", ArtifactIOError):
                self.write_build_plan(plan, dest)

            if out_dir is not None:
                echo_hint("Saved output to", str(dest))
                return BuildResult(plan=plan, dest=dest)

            echo_step("Building image")
            tag = self.name or str(uuid.uuid4())
            with stage("Building image", CommandError):
                self.container_builder.build(dest, tag)

            echo_success("Successfully built!")
            echo_hint("Run", self.container_builder.run_hint(tag))
            return BuildResult(plan=plan, dest=dest, image=tag)

    @staticmethod
    def write_build_plan(plan: BuildPlan, dest: str | Path) -> None:
        """Write ``environment.nix`` and ``Dockerfile`` into *dest*.

        Existing files are truncated.
        """
        dest = Path(dest)
        with stage("Writing Nix expression", ArtifactIOError):
            (dest / NIX_FILENAME).write_text(gen_nix(plan), encoding="utf-8")
        with stage("Writing Dockerfile", ArtifactIOError):
            (dest / DOCKERFILE_FILENAME).write_text(
                gen_dockerfile(plan), encoding="utf-8"
            )

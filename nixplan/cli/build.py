"""
Create a Docker build context from application source and build it.

Invoked as ``nixplan build PATH``.  Without ``--out`` the context lives in a
temporary directory and the image is built with ``--builder``; with ``--out``
the artifacts are saved and no image is built.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import click
import structlog

from nixplan.builder import AppBuilder
from nixplan.engines import DockerBuilder
from nixplan.providers import default_providers

from ._common import CONTEXT_SETTINGS, click_errors, planning_options, resolve_inputs

log = structlog.get_logger()


@click.command(
    name="build",
    context_settings=CONTEXT_SETTINGS,
    help="Create a Docker build-able directory from app source.",
)
@planning_options
@click.option(
    "-o",
    "--out",
    "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Save the build context here instead of building an image.",
)
@click.option(
    "--plan",
    "plan_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Build from a plan produced by 'nixplan plan'.",
)
@click.option("--name", help="Image tag (defaults to a random UUID).")
@click.option(
    "--builder",
    default="docker",
    help="Container builder executable invoked as '<builder> build'.",
)
def cli(
    path: Path,
    build_cmd: Optional[str],
    start_cmd: Optional[str],
    pkgs: Tuple[str, ...],
    env_pairs: Tuple[str, ...],
    pin: Optional[bool],
    config_path: Optional[Path],
    out_dir: Optional[Path],
    plan_path: Optional[Path],
    name: Optional[str],
    builder: str,
) -> None:
    """Entry-point for ``nixplan build``.

    Raises:
        click.ClickException: When any stage of the build fails.
    """
    with click_errors():
        app, environment, options = resolve_inputs(
            path=path,
            build_cmd=build_cmd,
            start_cmd=start_cmd,
            pkgs=pkgs,
            env_pairs=env_pairs,
            pin=pin,
            config_path=config_path,
            out_dir=out_dir,
            plan_path=plan_path,
        )
        log.info("build.start", source=str(app.source), out_dir=str(out_dir) if out_dir else None)
        AppBuilder(
            app,
            environment,
            options,
            name=name,
            container_builder=DockerBuilder(builder),
        ).build(default_providers())


__all__ = ["cli"]

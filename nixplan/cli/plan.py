"""Print the build plan for an application as JSON.

The output is accepted by ``nixplan build --plan``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import click

from nixplan.planner import AppPlanner
from nixplan.providers import default_providers

from ._common import CONTEXT_SETTINGS, click_errors, planning_options, resolve_inputs


@click.command(
    name="plan",
    context_settings=CONTEXT_SETTINGS,
    help="Print the build plan for app source as JSON.",
)
@planning_options
def cli(
    path: Path,
    build_cmd: Optional[str],
    start_cmd: Optional[str],
    pkgs: Tuple[str, ...],
    env_pairs: Tuple[str, ...],
    pin: Optional[bool],
    config_path: Optional[Path],
) -> None:
    """Entry-point for ``nixplan plan``."""
    with click_errors():
        app, environment, options = resolve_inputs(
            path=path,
            build_cmd=build_cmd,
            start_cmd=start_cmd,
            pkgs=pkgs,
            env_pairs=env_pairs,
            pin=pin,
            config_path=config_path,
        )
        plan = AppPlanner(app, environment, options).plan(default_providers())
    click.echo(plan.to_json())


__all__ = ["cli"]

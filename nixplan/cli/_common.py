"""Options and helpers shared by the ``build`` and ``plan`` commands."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple

import click

from nixplan.app import App
from nixplan.config import BuildOptions, load_project_config
from nixplan.environment import Environment
from nixplan.models import Pkg
from nixplan.utils.errors import NixplanError, format_error_chain

CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"], show_default=True, max_content_width=120
)


def planning_options(func: Callable) -> Callable:
    """Attach the options that influence plan derivation to *func*."""
    decorators = [
        click.argument("path", type=click.Path(path_type=Path)),
        click.option("-b", "--build-cmd", help="Specify the build command to use."),
        click.option("-s", "--start-cmd", help="Specify the start command to use."),
        click.option(
            "-p",
            "--pkgs",
            multiple=True,
            help="Extra Nix package to install (repeatable).",
        ),
        click.option(
            "-e",
            "--env",
            "env_pairs",
            multiple=True,
            metavar="KEY=VALUE",
            help="Environment variable for the build (repeatable).",
        ),
        click.option(
            "--pin/--no-pin",
            default=None,
            help="Pin the nixpkgs revision (defaults to the config file).",
        ),
        click.option(
            "--config",
            "config_path",
            type=click.Path(dir_okay=False, path_type=Path),
            help="YAML project configuration (defaults to <PATH>/nixplan.yaml).",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@contextmanager
def click_errors() -> Iterator[None]:
    """Convert *nixplan* errors into :class:`click.ClickException`."""
    try:
        yield
    except NixplanError as exc:
        raise click.ClickException(format_error_chain(exc)) from exc


def resolve_inputs(
    *,
    path: Path,
    build_cmd: Optional[str],
    start_cmd: Optional[str],
    pkgs: Tuple[str, ...],
    env_pairs: Tuple[str, ...],
    pin: Optional[bool],
    config_path: Optional[Path],
    out_dir: Optional[Path] = None,
    plan_path: Optional[Path] = None,
) -> tuple[App, Environment, BuildOptions]:
    """Validate CLI values and merge them over ``nixplan.yaml``.

    Command-line flags win over YAML values.  YAML packages are placed
    before ``--pkgs`` values and ``--env`` overrides YAML ``env``.

    Raises:
        NixplanError: If *path* is not a directory or the config is invalid.
        click.BadParameter: If an ``--env`` value is not ``KEY=VALUE``.
    """
    app = App(path)
    project = load_project_config(config_path=config_path, app_root=app.source)

    try:
        cli_env = Environment.from_pairs(env_pairs)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--env") from exc
    environment = Environment(project.env).merge(cli_env.variables)

    options = BuildOptions(
        custom_build_cmd=build_cmd if build_cmd is not None else project.build_cmd,
        custom_start_cmd=start_cmd if start_cmd is not None else project.start_cmd,
        custom_pkgs=[*project.pkgs, *(Pkg.new(name) for name in pkgs)],
        pin_pkgs=project.pin_pkgs if pin is None else pin,
        out_dir=out_dir,
        plan_path=plan_path,
    )
    return app, Environment(environment), options

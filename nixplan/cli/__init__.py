"""Expose the project-wide Click group for the ``nixplan`` script.

The module:

* declares a single Click *group* called :pyfunc:`main`;
* wires global flags (verbosity, debug, plain-text log mirror);
* sets up logging via :pyfunc:`nixplan.utils.logging.setup_logging`;
* registers the ``build`` and ``plan`` sub-commands lazily.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Dict

import click

from nixplan import __version__
from nixplan.utils.logging import setup_logging


class LazyGroup(click.Group):
    """Click group that imports sub-commands lazily."""

    def __init__(self, *args, **kwargs):
        self._lazy: dict[str, str] = {}
        super().__init__(*args, **kwargs)

    def set_lazy_command(self, name: str, target: str) -> None:
        """Register *name* to be imported from ``module:attr`` on first use."""
        self._lazy[name] = target

    def list_commands(self, ctx):
        return sorted({*super().list_commands(ctx), *self._lazy})

    def get_command(self, ctx, cmd_name):  # noqa: D401 - Click signature
        """Resolve *cmd_name* from the eager map or import table."""
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        target = self._lazy.get(cmd_name)
        if not target:
            return None
        module_name, attr = target.split(":", 1)
        module = importlib.import_module(module_name)
        cmd = getattr(module, attr)
        self.add_command(cmd, name=cmd_name)
        return cmd


_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    show_default=True,
    max_content_width=120,
)


@click.group(
    cls=LazyGroup,
    context_settings=_CTX,
    help="nixplan – package application sources as Nix-based container images.",
)
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG-level console output.")
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console output into this plain-text file.",
)
def main(
    verbose: bool,
    debug: bool,
    save_logfile: Path | None,
) -> None:
    """Root command executed by *nixplan*.

    Args:
        verbose: Emit INFO-level messages.
        debug: Emit DEBUG-level messages.
        save_logfile: Optional path for a plain-text log mirror.
    """
    setup_logging(verbose=verbose, debug=debug, extra_text_log=save_logfile)


main.set_lazy_command("build", "nixplan.cli.build:cli")
main.set_lazy_command("plan", "nixplan.cli.plan:cli")
__all__: list[str] = ["main"]

"""
nixplan package initialisation.

Exposes the version string, resolved from the installed distribution
metadata, and the objects most callers need::

    from nixplan import App, AppPlanner, Environment, default_providers

    plan = AppPlanner(App("."), Environment()).plan(default_providers())
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("nixplan")
except PackageNotFoundError:
    # Source tree without an installed wheel.
    __version__ = "0.0.0"

from .app import App  # noqa: E402
from .environment import Environment  # noqa: E402
from .models import BuildPlan, Pkg  # noqa: E402
from .planner import AppPlanner  # noqa: E402
from .providers import default_providers  # noqa: E402

__all__: list[str] = [
    "App",
    "AppPlanner",
    "BuildPlan",
    "Environment",
    "Pkg",
    "default_providers",
    "__version__",
]

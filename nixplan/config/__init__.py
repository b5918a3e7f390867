"""
Configuration package façade.

* :class:`BuildOptions` – options consumed by the planner and builder.
* :class:`ProjectConfig` – validated ``nixplan.yaml`` document.
* :func:`load_project_config` – locate, parse and validate ``nixplan.yaml``.
"""

from .loader import CONFIG_FILENAME, load_project_config  # noqa: F401
from .schema import BuildOptions, ProjectConfig  # noqa: F401

__all__: list[str] = [
    "BuildOptions",
    "ProjectConfig",
    "load_project_config",
    "CONFIG_FILENAME",
]

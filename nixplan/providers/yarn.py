"""Provider for Node.js applications locked with yarn."""

from __future__ import annotations

from typing import List, Optional

from nixplan.app import App
from nixplan.environment import Environment
from nixplan.models import Pkg

from .base import Provider
from .node import PACKAGE_JSON, get_script, node_pkg, read_package_json, start_command

YARN_LOCK = "yarn.lock"


class YarnProvider(Provider):
    """Claim trees with both ``package.json`` and ``yarn.lock``.

    Must be registered before :class:`~nixplan.providers.npm.NpmProvider`,
    which claims every ``package.json``.
    """

    def name(self) -> str:
        return "yarn"

    def detect(self, app: App, env: Environment) -> bool:
        return app.includes_file(PACKAGE_JSON) and app.includes_file(YARN_LOCK)

    def pkgs(self, app: App, env: Environment) -> List[Pkg]:
        node = node_pkg(read_package_json(app))
        # yarn must run on the same Node release the app was pinned to.
        yarn = Pkg.new("yarn").with_override(f"nodejs = {node.name}")
        return [node, yarn]

    def install_cmd(self, app: App, env: Environment) -> Optional[str]:
        return "yarn install --frozen-lockfile"

    def suggested_build_cmd(self, app: App, env: Environment) -> Optional[str]:
        if get_script(read_package_json(app), "build"):
            return "yarn run build"
        return None

    def suggested_start_command(self, app: App, env: Environment) -> Optional[str]:
        return start_command(app, read_package_json(app), "yarn")

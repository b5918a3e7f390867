"""Provider for Node.js applications installed with npm."""

from __future__ import annotations

from typing import List, Optional

from nixplan.app import App
from nixplan.environment import Environment, EnvironmentVariables
from nixplan.models import Pkg

from .base import Provider
from .node import PACKAGE_JSON, get_script, node_pkg, read_package_json, start_command


class NpmProvider(Provider):
    """Claim any tree with a ``package.json``."""

    def name(self) -> str:
        return "npm"

    def detect(self, app: App, env: Environment) -> bool:
        return app.includes_file(PACKAGE_JSON)

    def pkgs(self, app: App, env: Environment) -> List[Pkg]:
        return [node_pkg(read_package_json(app))]

    def install_cmd(self, app: App, env: Environment) -> Optional[str]:
        return "npm install"

    def suggested_build_cmd(self, app: App, env: Environment) -> Optional[str]:
        if get_script(read_package_json(app), "build"):
            return "npm run build"
        return None

    def suggested_start_command(self, app: App, env: Environment) -> Optional[str]:
        return start_command(app, read_package_json(app), "npm")

    def get_environment_variables(
        self, app: App, env: Environment
    ) -> EnvironmentVariables:
        # npm prints interactive notices during non-interactive image builds.
        return {
            "NPM_CONFIG_UPDATE_NOTIFIER": "false",
            "NPM_CONFIG_FUND": "false",
        }

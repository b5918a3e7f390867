"""Provider for Python applications."""

from __future__ import annotations

from typing import List, Optional

from nixplan.app import App
from nixplan.environment import Environment, EnvironmentVariables
from nixplan.models import Pkg

from .base import Provider

REQUIREMENTS = "requirements.txt"
PYPROJECT = "pyproject.toml"
ENTRYPOINTS = ("main.py", "app.py")

VENV = "/opt/venv"


class PythonProvider(Provider):
    """Claim trees with a requirements file, a ``pyproject.toml`` or ``main.py``."""

    def name(self) -> str:
        return "python"

    def detect(self, app: App, env: Environment) -> bool:
        return any(
            app.includes_file(f) for f in (REQUIREMENTS, PYPROJECT, "main.py")
        )

    def pkgs(self, app: App, env: Environment) -> List[Pkg]:
        return [Pkg.new("python3")]

    def install_cmd(self, app: App, env: Environment) -> Optional[str]:
        create = f"python -m venv {VENV}"
        if app.includes_file(REQUIREMENTS):
            return f"{create} && {VENV}/bin/pip install -r {REQUIREMENTS}"
        if app.includes_file(PYPROJECT):
            return f"{create} && {VENV}/bin/pip install ."
        return create

    def suggested_start_command(self, app: App, env: Environment) -> Optional[str]:
        for entry in ENTRYPOINTS:
            if app.includes_file(entry):
                return f"{VENV}/bin/python {entry}"
        return None

    def get_environment_variables(
        self, app: App, env: Environment
    ) -> EnvironmentVariables:
        return {
            "PYTHONUNBUFFERED": "1",
            "PIP_NO_INPUT": "1",
            "PIP_DISABLE_PIP_VERSION_CHECK": "1",
        }

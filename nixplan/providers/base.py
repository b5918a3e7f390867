"""Base class for ecosystem providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from nixplan.app import App
from nixplan.environment import Environment, EnvironmentVariables
from nixplan.models import Pkg


class Provider(ABC):
    """Abstract ecosystem detector.

    A provider claims an application tree through :meth:`detect` and then
    supplies the defaults the planner uses for that ecosystem.  Every method
    is a pure function of the :class:`App` and :class:`Environment`; the
    optional hooks return "nothing to contribute" unless overridden.
    """

    @abstractmethod
    def name(self) -> str:
        """Return a stable identifier such as ``"npm"``."""
        raise NotImplementedError

    @abstractmethod
    def detect(self, app: App, env: Environment) -> bool:
        """Return *True* when this provider handles *app*."""
        raise NotImplementedError

    def pkgs(self, app: App, env: Environment) -> List[Pkg]:
        """Return the Nix packages the application needs, in order."""
        return []

    def install_cmd(self, app: App, env: Environment) -> Optional[str]:
        return None

    def suggested_build_cmd(self, app: App, env: Environment) -> Optional[str]:
        return None

    def suggested_start_command(self, app: App, env: Environment) -> Optional[str]:
        return None

    def get_environment_variables(
        self, app: App, env: Environment
    ) -> EnvironmentVariables:
        """Return variables the ecosystem requires inside the image."""
        return {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name()!r}>"

"""
Derive a :class:`~nixplan.models.BuildPlan` for an application.

The planner binds the first provider that claims the tree and combines its
suggestions with the caller's options and the Procfile:

* packages – ``custom_pkgs`` followed by the provider's packages;
* build command – custom command, else the provider's suggestion;
* start command – custom command, else the Procfile ``web`` entry, else the
  provider's suggestion;
* variables – the environment merged with the provider's variables, the
  provider winning on collisions.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from nixplan.app import App
from nixplan.config import BuildOptions
from nixplan.environment import Environment, EnvironmentVariables
from nixplan.models import PLAN_VERSION, BuildPlan, Pkg
from nixplan.procfile import parse_procfile
from nixplan.providers import Provider
from nixplan.utils.errors import ProviderError, stage

log = structlog.get_logger()

# https://status.nixos.org/
NIXPKGS_ARCHIVE = "30d3d79b7d3607d56546dd2a6b49e156ba0ec634"


class AppPlanner:
    """Plan how to build *app*.

    Args:
        app: Application source tree.
        environment: Variables supplied by the caller.
        options: Overrides applied on top of provider suggestions.

    Attributes:
        provider: Provider bound by the last :meth:`plan` call, or *None*.
    """

    def __init__(
        self,
        app: App,
        environment: Environment,
        options: Optional[BuildOptions] = None,
    ) -> None:
        self.app = app
        self.environment = environment
        self.options = options or BuildOptions()
        self.provider: Optional[Provider] = None

    def plan(self, providers: Sequence[Provider]) -> BuildPlan:
        """Return the build plan for the application.

        Args:
            providers: Candidates in detection order.

        Raises:
            ProviderError: When a provider call or the Procfile read fails.
                The message names the stage; the cause is chained.
        """
        with stage("Detecting provider", ProviderError):
            self.detect(providers)
        with stage("Getting packages", ProviderError):
            pkgs = self.get_pkgs()
        with stage("Generating install command", ProviderError):
            install_cmd = self.get_install_cmd()
        with stage("Generating build command", ProviderError):
            build_cmd = self.get_build_cmd()
        with stage("Generating start command", ProviderError):
            start_cmd = self.get_start_cmd()
        with stage("Getting plan variables", ProviderError):
            variables = self.get_variables()

        plan = BuildPlan(
            version=PLAN_VERSION,
            nixpkgs_archive=NIXPKGS_ARCHIVE if self.options.pin_pkgs else None,
            pkgs=pkgs,
            install_cmd=install_cmd,
            start_cmd=start_cmd,
            build_cmd=build_cmd,
            variables=variables,
        )
        log.debug("planner.plan", plan=plan.model_dump(exclude_none=True))
        return plan

    # ------------------------------------------------------------------ #
    # stages
    # ------------------------------------------------------------------ #
    def detect(self, providers: Sequence[Provider]) -> Optional[Provider]:
        """Bind and return the first provider whose ``detect`` is true."""
        self.provider = None
        for provider in providers:
            if provider.detect(self.app, self.environment):
                self.provider = provider
                break
        log.info(
            "planner.detected",
            provider=self.provider.name() if self.provider else None,
        )
        return self.provider

    def get_pkgs(self) -> List[Pkg]:
        pkgs = list(self.options.custom_pkgs)
        if self.provider is not None:
            pkgs.extend(self.provider.pkgs(self.app, self.environment))
        return pkgs

    def get_install_cmd(self) -> Optional[str]:
        if self.provider is None:
            return None
        return self.provider.install_cmd(self.app, self.environment)

    def get_build_cmd(self) -> Optional[str]:
        if self.options.custom_build_cmd is not None:
            return self.options.custom_build_cmd
        if self.provider is None:
            return None
        return self.provider.suggested_build_cmd(self.app, self.environment)

    def get_start_cmd(self) -> Optional[str]:
        if self.options.custom_start_cmd is not None:
            return self.options.custom_start_cmd
        procfile_cmd = parse_procfile(self.app)
        if procfile_cmd is not None:
            return procfile_cmd
        if self.provider is None:
            return None
        return self.provider.suggested_start_command(self.app, self.environment)

    def get_variables(self) -> EnvironmentVariables:
        if self.provider is None:
            return self.environment.clone_variables()
        provider_variables = self.provider.get_environment_variables(
            self.app, self.environment
        )
        return self.environment.merge(provider_variables)

"""
Pydantic models for planner options and the optional ``nixplan.yaml``.

:class:`BuildOptions` is what the planner and builder consume.
:class:`ProjectConfig` mirrors the YAML file an application may ship to
declare defaults; the CLI merges it with command-line flags.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nixplan.models import Pkg


class BuildOptions(BaseModel):
    """Caller-supplied settings for planning and building.

    Attributes:
        custom_build_cmd: Replaces the provider's suggested build command.
        custom_start_cmd: Wins over the Procfile and the provider.
        custom_pkgs: Packages placed before the provider's packages.
        pin_pkgs: Record the pinned ``nixpkgs`` commit in the plan.
        out_dir: Write artifacts here and skip the container build.
        plan_path: Load this persisted plan instead of planning.
    """

    model_config = ConfigDict(frozen=True)

    custom_build_cmd: Optional[str] = None
    custom_start_cmd: Optional[str] = None
    custom_pkgs: List[Pkg] = Field(default_factory=list)
    pin_pkgs: bool = False
    out_dir: Optional[Path] = None
    plan_path: Optional[Path] = None


class ProjectConfig(BaseModel):
    """Top-level ``nixplan.yaml`` structure.

    Attributes:
        build_cmd: Default for ``--build-cmd``.
        start_cmd: Default for ``--start-cmd``.
        pkgs: Extra packages; plain names or ``{name, override}`` mappings.
        pin_pkgs: Default for ``--pin``.
        env: Variables added to the build environment.
    """

    model_config = ConfigDict(extra="forbid")

    build_cmd: Optional[str] = None
    start_cmd: Optional[str] = None
    pkgs: List[Pkg] = Field(default_factory=list)
    pin_pkgs: bool = False
    env: Dict[str, str] = Field(default_factory=dict)

    @field_validator("pkgs", mode="before")
    @classmethod
    def _names_to_pkgs(cls, value):
        """Accept bare strings alongside full package mappings."""
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [
            {"name": item} if isinstance(item, str) else item
            for item in value
        ]

    @field_validator("env", mode="before")
    @classmethod
    def _stringify_env(cls, value: Union[dict, None]):
        """YAML turns ``1`` and ``true`` into scalars; variables are strings."""
        if value is None:
            return {}
        if isinstance(value, dict):
            if any(k is None or str(k) == "" for k in value):
                raise ValueError("Environment variable names must not be empty")
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value

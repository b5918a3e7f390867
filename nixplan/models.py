"""
Typed, immutable value objects shared by the planner, renderers and CLI.

* :class:`Pkg` – a reference into the Nix package catalog, optionally with an
  ``override`` expression.
* :class:`BuildPlan` – the normalized plan produced by
  :class:`~nixplan.planner.AppPlanner` and persisted as JSON.

Both inherit from :class:`pydantic.BaseModel` with ``frozen=True`` so equality
is structural and the objects cannot be mutated once created.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

__all__ = ["Pkg", "BuildPlan", "PLAN_VERSION"]

PLAN_VERSION = "0.0.1"


class Pkg(BaseModel, frozen=True):
    """One package in the Nix catalog.

    Attributes
    ----------
    name
        Attribute name inside ``nixpkgs`` (e.g. ``nodejs-16_x``).
    override
        Optional override expression emitted verbatim inside
        ``name.override { … }``.
    """

    name: str = Field(..., min_length=1)
    override: Optional[str] = None

    @classmethod
    def new(cls, name: str) -> "Pkg":
        """Return a bare package reference."""
        return cls(name=name)

    def with_override(self, override: str) -> "Pkg":
        """Return a copy of this package carrying *override*."""
        return self.model_copy(update={"override": override})

    def to_nix_string(self) -> str:
        """Render the package as it appears in a Nix ``paths`` list."""
        if self.override:
            return f"({self.name}.override {{ {self.override} }})"
        return self.name


class BuildPlan(BaseModel, frozen=True):
    """Everything needed to build an image for an application.

    Attributes
    ----------
    version
        Schema version of the plan document.
    nixpkgs_archive
        Commit of ``NixOS/nixpkgs`` to pin, or *None* for the ambient channel.
    pkgs
        Packages installed into the build environment, in render order.
    install_cmd, start_cmd, build_cmd
        Single shell commands; *None* when not applicable.
    variables
        Environment variables baked into the image.
    """

    version: str = PLAN_VERSION
    nixpkgs_archive: Optional[str] = None
    pkgs: List[Pkg] = Field(default_factory=list)
    install_cmd: Optional[str] = None
    start_cmd: Optional[str] = None
    build_cmd: Optional[str] = None
    variables: Dict[str, str] = Field(default_factory=dict)

    # --------------------------------------------------------------------- #
    # (de)serialization
    # --------------------------------------------------------------------- #
    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize the plan, omitting fields that are *None*."""
        return self.model_dump_json(exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "BuildPlan":
        """Parse a plan produced by :meth:`to_json`.

        Raises:
            pydantic.ValidationError: If *text* is not a valid plan document.
        """
        return cls.model_validate_json(text)

    @classmethod
    def load(cls, path: str | Path) -> "BuildPlan":
        """Read and parse the plan stored at *path*."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

"""Render a build plan as a Nix environment expression."""

from __future__ import annotations

from nixplan.models import BuildPlan

NIXPKGS_TARBALL = "https://github.com/NixOS/nixpkgs/archive/{archive}.tar.gz"

_TEMPLATE = """\
{{ }}:
let
    pkgs = {pkg_import} {{ }};
in with pkgs;
buildEnv {{
    name = "env";
    paths = [
        {pkgs}
    ];
}}
"""


def pkg_import(plan: BuildPlan) -> str:
    """Return the expression importing ``nixpkgs``, pinned when requested."""
    if plan.nixpkgs_archive:
        url = NIXPKGS_TARBALL.format(archive=plan.nixpkgs_archive)
        return f'import (fetchTarball "{url}")'
    return "import <nixpkgs>"


def gen_nix(plan: BuildPlan) -> str:
    """Return the contents of ``environment.nix`` for *plan*."""
    pkgs = " ".join(p.to_nix_string() for p in plan.pkgs)
    return _TEMPLATE.format(pkg_import=pkg_import(plan), pkgs=pkgs)

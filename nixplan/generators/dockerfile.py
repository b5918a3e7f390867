"""Render a build plan as a Dockerfile on top of the ``nixos/nix`` image."""

from __future__ import annotations

from typing import Optional

from nixplan.models import BuildPlan

BASE_IMAGE = "nixos/nix"

_TEMPLATE = """\
FROM {base_image}

RUN nix-channel --update

RUN mkdir /app
COPY environment.nix /app
WORKDIR /app

# Load Nix environment
RUN nix-env -if environment.nix

# Load environment variables
{env_lines}

COPY . /app

# Install
{install_cmd}

# Build
{build_cmd}

# Start
{start_cmd}
"""


def _instruction(keyword: str, cmd: Optional[str]) -> str:
    return f"{keyword} {cmd}" if cmd else ""


def env_lines(plan: BuildPlan) -> str:
    """Return one ``ENV`` line per variable, sorted by name.

    Values are wrapped in single quotes without escaping.
    """
    return "\n".join(
        f"ENV {key}='{value}'" for key, value in sorted(plan.variables.items())
    )


def gen_dockerfile(plan: BuildPlan) -> str:
    """Return the Dockerfile contents for *plan*."""
    return _TEMPLATE.format(
        base_image=BASE_IMAGE,
        env_lines=env_lines(plan),
        install_cmd=_instruction("RUN", plan.install_cmd),
        build_cmd=_instruction("RUN", plan.build_cmd),
        start_cmd=_instruction("CMD", plan.start_cmd),
    )

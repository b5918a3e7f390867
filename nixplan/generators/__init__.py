"""Artifact generators turning a build plan into files."""

from .dockerfile import gen_dockerfile
from .nix import gen_nix

__all__ = ["gen_dockerfile", "gen_nix"]

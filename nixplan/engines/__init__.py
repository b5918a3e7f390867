"""Container builders."""

from .base import ContainerBuilder
from .docker import DockerBuilder

__all__ = ["ContainerBuilder", "DockerBuilder"]

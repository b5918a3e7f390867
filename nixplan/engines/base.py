"""Back-ends that turn a build context into a container image."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class ContainerBuilder(ABC):
    """Abstract container builder.

    Concrete implementations drive an external tool (Docker, Podman, …)
    that reads the ``Dockerfile`` inside a build context.  The interface is
    intentionally small so that new builders can be added without touching
    call sites.
    """

    @abstractmethod
    def build(self, context: Path, tag: str) -> None:
        """Build the image described by *context* and tag it *tag*.

        Args:
            context: Directory holding the ``Dockerfile`` and sources.
            tag: Image name passed to ``-t``.

        Raises:
            nixplan.utils.errors.CommandError: If the build fails.
        """
        raise NotImplementedError

    @abstractmethod
    def run_hint(self, tag: str) -> str:
        """Return the command a user runs to start the built image."""
        raise NotImplementedError

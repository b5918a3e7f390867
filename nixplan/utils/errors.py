"""Exceptions raised while planning and packaging an application.

Every failure aborts the current command.  Call sites wrap each stage with
:func:`stage` so the error that reaches the CLI names the step that failed
while the original exception stays reachable through ``__cause__``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Type

__all__ = [
    "NixplanError",
    "InvalidSourceError",
    "ConfigError",
    "ProviderError",
    "PlanIOError",
    "ArtifactIOError",
    "CommandError",
    "stage",
    "format_error_chain",
]


class NixplanError(RuntimeError):
    """Base class for every error surfaced by *nixplan*."""

    pass


class InvalidSourceError(NixplanError):
    """Raised when the application source path is missing or not a directory."""


class ConfigError(NixplanError):
    """Raised when a YAML project configuration cannot be loaded or validated."""


class ProviderError(NixplanError):
    """Raised when a provider operation fails during planning."""


class PlanIOError(NixplanError):
    """Raised when a persisted build plan cannot be read or deserialized."""


class ArtifactIOError(NixplanError):
    """Raised when ``environment.nix``, the Dockerfile or a directory cannot be written."""


class CommandError(NixplanError):
    """Raised when an external command fails to spawn or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


@contextmanager
def stage(message: str, error_cls: Type[NixplanError] = NixplanError) -> Iterator[None]:
    """Re-raise any exception from the block as *error_cls* named *message*.

    Args:
        message: Human readable stage name, e.g. ``"Getting packages"``.
        error_cls: Error kind raised when the block fails.

    Raises:
        NixplanError: Subclass given by *error_cls*, chained to the original
            exception via ``raise ... from``.
    """
    try:
        yield
    except Exception as exc:
        raise error_cls(message) from exc


def format_error_chain(exc: BaseException) -> str:
    """Return the message chain of *exc*, most specific cause first.

    The outermost error names the top-level stage, so reversing the
    ``__cause__`` chain puts the root cause on the first line and the stage
    that was running on the last.
    """
    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        messages.append(text)
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    messages.reverse()
    head, *rest = messages
    return "\n".join([head, *(f"  while: {m}" for m in rest)])

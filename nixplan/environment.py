"""Variables supplied by the caller for the build environment."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

__all__ = ["Environment", "EnvironmentVariables"]

EnvironmentVariables = Dict[str, str]


class Environment:
    """Immutable mapping of variable name to value.

    Args:
        variables: Initial variables; copied on construction.

    Raises:
        ValueError: If a variable name is empty.
    """

    def __init__(self, variables: Optional[Mapping[str, str]] = None) -> None:
        data = dict(variables or {})
        if any(not key for key in data):
            raise ValueError("Environment variable names must not be empty")
        self._variables = MappingProxyType(data)

    @classmethod
    def from_pairs(cls, pairs: Iterable[str]) -> "Environment":
        """Build an environment from ``KEY=VALUE`` strings.

        Values may themselves contain ``=``; only the first one separates the
        name.

        Raises:
            ValueError: If a pair has no ``=`` or an empty name.
        """
        data: EnvironmentVariables = {}
        for pair in pairs:
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise ValueError(
                    f"Invalid environment variable {pair!r}; expected KEY=VALUE"
                )
            data[key] = value
        return cls(data)

    @property
    def variables(self) -> Mapping[str, str]:
        """Read-only view of the variables."""
        return self._variables

    def get_variable(self, name: str) -> Optional[str]:
        return self._variables.get(name)

    def clone_variables(self) -> EnvironmentVariables:
        """Return an independent copy of the variables."""
        return dict(self._variables)

    def merge(self, other: Mapping[str, str]) -> EnvironmentVariables:
        """Return the variables updated with *other*; *other* wins on collision."""
        merged = self.clone_variables()
        merged.update(other)
        return merged

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"Environment({dict(self._variables)!r})"

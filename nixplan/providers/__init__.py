"""Ecosystem providers.

Detection visits providers in the order returned by
:func:`default_providers` and stops at the first match, so more specific
providers come first.
"""

from typing import List

from .base import Provider
from .npm import NpmProvider
from .python import PythonProvider
from .yarn import YarnProvider


def default_providers() -> List[Provider]:
    """Return the built-in providers in detection order."""
    return [YarnProvider(), NpmProvider(), PythonProvider()]


__all__ = [
    "Provider",
    "NpmProvider",
    "PythonProvider",
    "YarnProvider",
    "default_providers",
]

"""Read-only access to the application source tree."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from nixplan.utils.errors import InvalidSourceError

__all__ = ["App"]


class App:
    """Handle bound to the canonical path of an application directory.

    Args:
        source: Path to the application; resolved to an absolute path.

    Raises:
        InvalidSourceError: If *source* does not exist or is not a directory.
    """

    __slots__ = ("_source",)

    def __init__(self, source: str | Path) -> None:
        path = Path(source).expanduser()
        if not path.exists():
            raise InvalidSourceError(f"App source {path} does not exist")
        path = path.resolve()
        if not path.is_dir():
            raise InvalidSourceError(f"App source {path} is not a directory")
        self._source = path

    @property
    def source(self) -> Path:
        """Absolute path of the application directory."""
        return self._source

    def includes_file(self, name: str) -> bool:
        """Return *True* when *name* exists relative to the source root."""
        return (self._source / name).is_file()

    def read_file(self, name: str) -> str:
        """Return the UTF-8 contents of *name*."""
        return (self._source / name).read_text(encoding="utf-8")

    def read_json(self, name: str) -> Any:
        """Parse *name* as JSON.

        Raises:
            json.JSONDecodeError: If the file is not valid JSON.
        """
        return json.loads(self.read_file(name))

    def __repr__(self) -> str:
        return f"App({str(self._source)!r})"

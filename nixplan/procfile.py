"""Extract the ``web`` process from a Heroku-style ``Procfile``."""

from __future__ import annotations

from typing import Optional

from nixplan.app import App

__all__ = ["parse_procfile", "PROCFILE", "WEB_PREFIX"]

PROCFILE = "Procfile"
WEB_PREFIX = "web: "


def parse_procfile(app: App) -> Optional[str]:
    """Return the ``web:`` command from the first line of the Procfile.

    Other process types, and ``web`` entries after the first line, are
    ignored.

    Args:
        app: Application whose root may contain a ``Procfile``.

    Returns:
        The trimmed command, or *None* when the file is absent or its first
        line is not a ``web:`` entry.
    """
    if not app.includes_file(PROCFILE):
        return None

    lines = app.read_file(PROCFILE).splitlines()
    first = lines[0] if lines else ""
    if first.startswith(WEB_PREFIX):
        return first[len(WEB_PREFIX):].strip()
    return None

"""Filesystem helpers delegating to external utilities."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from .errors import CommandError

log = structlog.get_logger()


def copy_tree(source: Path, dest: Path) -> None:
    """Mirror the contents of *source* into *dest* preserving attributes.

    Runs ``cp -a <source>/. <dest>`` so hidden files are included and *dest*
    itself is not nested under a new directory.

    Args:
        source: Application source directory.
        dest: Existing destination directory.

    Raises:
        CommandError: If ``cp`` cannot be spawned or exits non-zero.
    """
    cmd = ["cp", "-a", f"{source}/.", str(dest)]
    log.debug("fs.copy", cmd=cmd)
    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError as exc:
        raise CommandError("'cp' not found in PATH") from exc
    except subprocess.CalledProcessError as exc:
        log.error("fs.copy_failed", returncode=exc.returncode)
        raise CommandError(
            f"Copy exited with status {exc.returncode}", exc.returncode
        ) from exc

"""
YAML project configuration loader.

Search precedence (first match wins)
1. An explicit path argument (``--config`` on the CLI).
2. ``<app>/nixplan.yaml`` – defaults shipped with the application.
3. An empty :class:`ProjectConfig`.

All resolution logic is concentrated here so the rest of *nixplan* treats
configuration as an already-validated object.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
import yaml

from nixplan.utils.errors import ConfigError

from .schema import ProjectConfig

log = structlog.get_logger()

CONFIG_FILENAME = "nixplan.yaml"


def _first_existing(*candidates: Optional[Path]) -> Optional[Path]:
    """Return the first path in *candidates* that exists on disk."""
    for p in candidates:
        if p is not None and p.exists():
            return p
    return None


def _load_yaml(path: Path) -> dict:
    """Read a YAML file; an empty document yields an empty dict."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("top-level YAML value must be a mapping")
    return data


def load_project_config(
    *,
    config_path: Optional[str | Path] = None,
    app_root: Optional[str | Path] = None,
) -> ProjectConfig:
    """Return the validated project configuration.

    Args:
        config_path: Explicit YAML path.  Must exist when given.
        app_root: Application directory searched for ``nixplan.yaml``.

    Returns:
        A :class:`ProjectConfig`, empty when no file was found.

    Raises:
        ConfigError: When the explicit file is missing, the YAML cannot be
            parsed, or the document fails validation.
    """
    explicit = Path(config_path).expanduser().resolve() if config_path else None
    if explicit is not None and not explicit.is_file():
        raise ConfigError(f"Config file {explicit} does not exist")

    local = Path(app_root) / CONFIG_FILENAME if app_root else None
    resolved = _first_existing(explicit, local)
    if resolved is None:
        return ProjectConfig()

    log.info("config.load", path=str(resolved))
    try:
        return ProjectConfig(**_load_yaml(resolved))
    except Exception as exc:  # yaml.YAMLError or pydantic.ValidationError
        raise ConfigError(f"Invalid configuration in {resolved} – {exc}") from exc

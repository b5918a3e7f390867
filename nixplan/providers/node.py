"""Helpers shared by the Node.js providers (npm and yarn)."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

import structlog

from nixplan.app import App
from nixplan.models import Pkg

log = structlog.get_logger()

PACKAGE_JSON = "package.json"

DEFAULT_NODE_MAJOR = 16
SUPPORTED_NODE_MAJORS = (14, 16, 18)

_MAJOR_RE = re.compile(r"(\d+)")


def read_package_json(app: App) -> Dict[str, Any]:
    """Return the parsed ``package.json``.

    Raises:
        ValueError: If the document is not a JSON object.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    data = app.read_json(PACKAGE_JSON)
    if not isinstance(data, dict):
        raise ValueError(f"{PACKAGE_JSON} must contain a JSON object")
    return data


def get_script(package_json: Dict[str, Any], name: str) -> Optional[str]:
    scripts = package_json.get("scripts") or {}
    if not isinstance(scripts, dict):
        return None
    return scripts.get(name)


def node_pkg(package_json: Dict[str, Any]) -> Pkg:
    """Select the ``nodejs-<major>_x`` package requested by ``engines.node``.

    The first number in the range expression is taken as the major version.
    Unknown or unsupported majors fall back to the default release.
    """
    engines = package_json.get("engines") or {}
    requested = engines.get("node") if isinstance(engines, dict) else None
    major = DEFAULT_NODE_MAJOR
    if isinstance(requested, str):
        match = _MAJOR_RE.search(requested)
        if match and int(match.group(1)) in SUPPORTED_NODE_MAJORS:
            major = int(match.group(1))
        else:
            log.warning("node.unsupported_version", requested=requested, using=major)
    return Pkg.new(f"nodejs-{major}_x")


def start_command(app: App, package_json: Dict[str, Any], runner: str) -> Optional[str]:
    """Return the start command for a Node application.

    Preference: the ``start`` script, then ``node <main>``, then
    ``node index.js`` when that file exists.
    """
    if get_script(package_json, "start"):
        return f"{runner} run start"
    main = package_json.get("main")
    if isinstance(main, str) and main:
        return f"node {main}"
    if app.includes_file("index.js"):
        return "node index.js"
    return None

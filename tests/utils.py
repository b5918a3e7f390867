"""Test helpers for nixplan modules."""

import json
from pathlib import Path


def write_tree(root: Path, files: dict) -> Path:
    """Create *files* under *root*.

    Args:
        root: Directory to populate; created when missing.
        files: Mapping of relative path to contents.  ``dict`` values are
            dumped as JSON.

    Returns:
        *root* for chaining.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
    return root

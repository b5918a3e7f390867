"""Pytest configuration for nixplan tests."""

from pathlib import Path
from typing import Callable

import pytest

from nixplan.app import App
from tests.utils import write_tree


@pytest.fixture
def make_app(tmp_path: Path) -> Callable[..., App]:
    """Return a factory building an :class:`App` over a fresh tree."""

    def _make(files: dict | None = None, name: str = "app") -> App:
        return App(write_tree(tmp_path / name, files or {}))

    return _make

import subprocess
from pathlib import Path

import pytest

from nixplan.engines.docker import DockerBuilder
from nixplan.utils.errors import CommandError
from nixplan.utils.fs import copy_tree


def test_docker_builder_builds_command(monkeypatch):
    """Verify the builder passes context and tag through."""
    called = {}

    def fake_run(cmd, check):
        called["cmd"] = cmd
        called["check"] = check

        class Dummy:
            returncode = 0

        return Dummy()

    monkeypatch.setattr(subprocess, "run", fake_run)

    DockerBuilder().build(Path("/ctx"), "app")

    assert called["cmd"] == ["docker", "build", "/ctx", "-t", "app"]
    assert called["check"] is True


def test_docker_builder_missing_executable(monkeypatch):
    def fake_run(cmd, check):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(CommandError, match="'nerdctl' not found"):
        DockerBuilder("nerdctl").build(Path("/ctx"), "app")


def test_run_hint():
    assert DockerBuilder("podman").run_hint("app") == "podman run -it app"


def test_copy_tree_with_real_cp(tmp_path: Path):
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / ".hidden").write_text("h")
    (src / "nested" / "file.txt").write_text("f")
    dest = tmp_path / "dest"
    dest.mkdir()

    copy_tree(src, dest)

    assert (dest / ".hidden").read_text() == "h"
    assert (dest / "nested" / "file.txt").read_text() == "f"
    assert not (dest / "src").exists()


def test_copy_tree_failure(monkeypatch, tmp_path: Path):
    def fake_run(cmd, check):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(CommandError) as excinfo:
        copy_tree(tmp_path, tmp_path / "dest")

    assert excinfo.value.returncode == 1

import shutil
import subprocess
from pathlib import Path

import pytest

from nixplan.builder import AppBuilder, load_plan
from nixplan.config import BuildOptions
from nixplan.engines import DockerBuilder
from nixplan.environment import Environment
from nixplan.models import BuildPlan, Pkg
from nixplan.providers import default_providers
from nixplan.utils.errors import CommandError, PlanIOError, ProviderError


def fake_run_factory(calls: list, *, fail: str | None = None, seen: dict | None = None):
    """Create a fake ``subprocess.run`` that records commands.

    ``cp`` is emulated with :func:`shutil.copytree`; builder invocations
    snapshot the build context into *seen* before it is cleaned up.
    """

    def _fake_run(cmd, check=False):
        calls.append(list(cmd))
        if fail and cmd[0] == fail:
            raise subprocess.CalledProcessError(1, cmd)
        if cmd[0] == "cp":
            source = cmd[2][: -len("/.")]
            shutil.copytree(source, cmd[3], dirs_exist_ok=True)
        elif cmd[1] == "build" and seen is not None:
            context = Path(cmd[2])
            seen["context"] = context
            seen["files"] = sorted(p.name for p in context.iterdir())
            seen["dockerfile"] = (context / "Dockerfile").read_text()

        class Dummy:
            returncode = 0

        return Dummy()

    return _fake_run


@pytest.fixture
def node_app(make_app):
    return make_app(
        {
            "package.json": {"scripts": {"start": "node server.js"}},
            "server.js": "console.log('hi')",
            ".env.example": "A=1",
        }
    )


def test_out_dir_writes_artifacts_without_building(node_app, tmp_path, monkeypatch):
    calls: list = []
    monkeypatch.setattr(subprocess, "run", fake_run_factory(calls))
    out = tmp_path / "out" / "nested"

    result = AppBuilder(
        node_app, Environment(), BuildOptions(out_dir=out)
    ).build(default_providers())

    assert result.dest == out
    assert result.image is None
    assert [c[0] for c in calls] == ["cp"]
    assert calls[0] == ["cp", "-a", f"{node_app.source}/.", str(out)]
    assert (out / "server.js").exists()
    assert (out / ".env.example").exists()
    assert "nodejs-16_x" in (out / "environment.nix").read_text()
    assert "CMD npm run start" in (out / "Dockerfile").read_text()


def test_artifacts_are_truncated(node_app, tmp_path, monkeypatch):
    monkeypatch.setattr(subprocess, "run", fake_run_factory([]))
    out = tmp_path / "out"
    out.mkdir()
    (out / "Dockerfile").write_text("stale\n" * 500)

    AppBuilder(node_app, Environment(), BuildOptions(out_dir=out)).build([])

    assert "stale" not in (out / "Dockerfile").read_text()


def test_image_build_uses_temp_dir_and_cleans_up(node_app, monkeypatch):
    calls: list = []
    seen: dict = {}
    monkeypatch.setattr(subprocess, "run", fake_run_factory(calls, seen=seen))

    result = AppBuilder(
        node_app, Environment(), BuildOptions(), name="demo"
    ).build(default_providers())

    assert result.image == "demo"
    assert [c[0] for c in calls] == ["cp", "docker"]
    assert calls[1] == ["docker", "build", str(seen["context"]), "-t", "demo"]
    assert {"Dockerfile", "environment.nix", "server.js"} <= set(seen["files"])
    assert "CMD npm run start" in seen["dockerfile"]
    assert seen["context"].name.startswith("nixplan")
    assert not seen["context"].exists()


def test_image_name_defaults_to_uuid(node_app, monkeypatch):
    calls: list = []
    monkeypatch.setattr(subprocess, "run", fake_run_factory(calls))

    result = AppBuilder(node_app, Environment()).build(default_providers())

    assert len(result.image) == 36
    assert calls[-1][-1] == result.image


def test_custom_builder_executable(node_app, monkeypatch):
    calls: list = []
    monkeypatch.setattr(subprocess, "run", fake_run_factory(calls))

    AppBuilder(
        node_app, Environment(), name="x", container_builder=DockerBuilder("podman")
    ).build([])

    assert calls[-1][:2] == ["podman", "build"]


def test_temp_dir_removed_when_build_fails(node_app, monkeypatch):
    calls: list = []
    seen: dict = {}

    def failing_build(cmd, check=False):
        if cmd[0] == "docker":
            seen["context"] = Path(cmd[2])
            raise subprocess.CalledProcessError(2, cmd)
        return fake_run_factory(calls)(cmd, check)

    monkeypatch.setattr(subprocess, "run", failing_build)

    with pytest.raises(CommandError, match="Building image") as excinfo:
        AppBuilder(node_app, Environment(), name="x").build([])

    assert excinfo.value.__cause__.returncode == 2
    assert not seen["context"].exists()


def test_copy_failure_aborts_before_writing(node_app, tmp_path, monkeypatch):
    calls: list = []
    monkeypatch.setattr(subprocess, "run", fake_run_factory(calls, fail="cp"))
    out = tmp_path / "out"

    with pytest.raises(CommandError, match="Copying app source"):
        AppBuilder(node_app, Environment(), BuildOptions(out_dir=out)).build([])

    assert not (out / "Dockerfile").exists()


def test_build_from_existing_plan(node_app, tmp_path, monkeypatch):
    monkeypatch.setattr(subprocess, "run", fake_run_factory([]))
    plan = BuildPlan(pkgs=[Pkg.new("go")], start_cmd="./server")
    plan_path = tmp_path / "plan.json"
    plan_path.write_text(plan.to_json())
    out = tmp_path / "out"

    result = AppBuilder(
        node_app,
        Environment(),
        BuildOptions(out_dir=out, plan_path=plan_path),
    ).build(default_providers())

    assert result.plan == plan
    assert "CMD ./server" in (out / "Dockerfile").read_text()
    assert "nodejs" not in (out / "environment.nix").read_text()


def test_missing_plan_file(tmp_path):
    with pytest.raises(PlanIOError, match="Reading build plan"):
        load_plan(tmp_path / "missing.json")


def test_invalid_plan_file(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text("not json")
    with pytest.raises(PlanIOError, match="Deserializing build plan"):
        load_plan(path)


def test_planning_failure_names_stage(make_app, monkeypatch):
    monkeypatch.setattr(subprocess, "run", fake_run_factory([]))
    app = make_app({"package.json": "{broken"})

    with pytest.raises(ProviderError, match="Creating build plan") as excinfo:
        AppBuilder(app, Environment()).build(default_providers())

    assert "Getting packages" in str(excinfo.value.__cause__)


def test_write_build_plan(tmp_path):
    AppBuilder.write_build_plan(BuildPlan(start_cmd="run"), tmp_path)

    assert (tmp_path / "environment.nix").read_text().startswith("{ }:")
    assert (tmp_path / "Dockerfile").read_text().startswith("FROM nixos/nix")

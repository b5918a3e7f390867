import json
import subprocess
from pathlib import Path

from click.testing import CliRunner

from nixplan.cli import main as cli_main
from nixplan.planner import NIXPKGS_ARCHIVE

from tests.utils import write_tree


def _node_app(root: Path) -> Path:
    return write_tree(
        root,
        {
            "package.json": {"scripts": {"start": "node server.js", "build": "tsc"}},
            "Procfile": "web: node dist/server.js\n",
        },
    )


def _record_runs(monkeypatch) -> list:
    calls: list = []

    def fake_run(cmd, check=False):
        calls.append(list(cmd))

        class Dummy:
            returncode = 0

        return Dummy()

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_plan_prints_json(tmp_path: Path):
    app = _node_app(tmp_path / "app")

    result = CliRunner().invoke(cli_main, ["plan", str(app), "-e", "FOO=bar"])

    assert result.exit_code == 0, result.output
    plan = json.loads(result.stdout)
    assert plan["start_cmd"] == "node dist/server.js"
    assert plan["build_cmd"] == "npm run build"
    assert plan["variables"]["FOO"] == "bar"
    assert "nixpkgs_archive" not in plan


def test_plan_overrides_and_pin(tmp_path: Path):
    app = _node_app(tmp_path / "app")

    result = CliRunner().invoke(
        cli_main,
        ["plan", str(app), "-b", "make", "-s", "./run", "-p", "git", "--pin"],
    )

    assert result.exit_code == 0, result.output
    plan = json.loads(result.stdout)
    assert plan["build_cmd"] == "make"
    assert plan["start_cmd"] == "./run"
    assert plan["pkgs"][0] == {"name": "git"}
    assert plan["nixpkgs_archive"] == NIXPKGS_ARCHIVE


def test_build_with_out_dir(tmp_path: Path, monkeypatch):
    calls = _record_runs(monkeypatch)
    app = _node_app(tmp_path / "app")
    out = tmp_path / "out"

    result = CliRunner().invoke(
        cli_main, ["build", str(app), "--out", str(out), "--start-cmd", "./run"]
    )

    assert result.exit_code == 0, result.output
    assert [c[0] for c in calls] == ["cp"]
    assert "Saved output to" in result.stdout
    assert "CMD ./run" in (out / "Dockerfile").read_text()
    assert (out / "environment.nix").exists()


def test_build_image(tmp_path: Path, monkeypatch):
    calls = _record_runs(monkeypatch)
    app = _node_app(tmp_path / "app")

    result = CliRunner().invoke(cli_main, ["build", str(app), "--name", "myapp"])

    assert result.exit_code == 0, result.output
    assert calls[-1][:2] == ["docker", "build"]
    assert calls[-1][-2:] == ["-t", "myapp"]
    assert "docker run -it myapp" in result.stdout


def test_build_from_plan_file(tmp_path: Path, monkeypatch):
    _record_runs(monkeypatch)
    app = _node_app(tmp_path / "app")
    plan_file = tmp_path / "plan.json"
    runner = CliRunner()

    exported = runner.invoke(cli_main, ["plan", str(app), "-s", "./exported"])
    plan_file.write_text(exported.stdout)
    result = runner.invoke(
        cli_main,
        ["build", str(app), "--plan", str(plan_file), "-o", str(tmp_path / "out")],
    )

    assert result.exit_code == 0, result.output
    assert "CMD ./exported" in (tmp_path / "out" / "Dockerfile").read_text()


def test_missing_source_fails(tmp_path: Path):
    result = CliRunner().invoke(cli_main, ["build", str(tmp_path / "nope")])

    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_source_must_be_directory(tmp_path: Path):
    target = tmp_path / "file"
    target.write_text("x")

    result = CliRunner().invoke(cli_main, ["plan", str(target)])

    assert result.exit_code != 0
    assert "not a directory" in result.output


def test_failed_build_reports_chain(tmp_path: Path, monkeypatch):
    def fake_run(cmd, check=False):
        if cmd[0] == "docker":
            raise subprocess.CalledProcessError(3, cmd)

    monkeypatch.setattr(subprocess, "run", fake_run)
    app = _node_app(tmp_path / "app")

    result = CliRunner().invoke(cli_main, ["build", str(app)])

    assert result.exit_code == 1
    lines = result.output.strip().splitlines()
    assert "Building image" in lines[-1]
    assert any("docker build exited with status 3" in line for line in lines)


def test_malformed_env_pair(tmp_path: Path):
    app = _node_app(tmp_path / "app")

    result = CliRunner().invoke(cli_main, ["plan", str(app), "-e", "NOVALUE"])

    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_project_config_is_merged(tmp_path: Path):
    app = _node_app(tmp_path / "app")
    (app / "nixplan.yaml").write_text(
        "start_cmd: ./from-yaml\n"
        "build_cmd: make\n"
        "pkgs:\n"
        "  - git\n"
        "  - {name: yarn, override: 'nodejs = nodejs-18_x'}\n"
        "env:\n"
        "  PORT: 8080\n"
        "  MODE: yaml\n"
    )

    result = CliRunner().invoke(
        cli_main, ["plan", str(app), "-b", "make all", "-p", "curl", "-e", "MODE=cli"]
    )

    assert result.exit_code == 0, result.output
    plan = json.loads(result.stdout)
    assert plan["start_cmd"] == "./from-yaml"
    assert plan["build_cmd"] == "make all"
    assert [p["name"] for p in plan["pkgs"]][:3] == ["git", "yarn", "curl"]
    assert plan["pkgs"][1]["override"] == "nodejs = nodejs-18_x"
    assert plan["variables"]["PORT"] == "8080"
    assert plan["variables"]["MODE"] == "cli"


def test_help_lists_commands():
    result = CliRunner().invoke(cli_main, ["--help"])

    assert result.exit_code == 0
    assert "build" in result.output
    assert "plan" in result.output


def test_empty_env_key_in_config(tmp_path: Path):
    app = _node_app(tmp_path / "app")
    (app / "nixplan.yaml").write_text('env: {"": x}\n')

    result = CliRunner().invoke(cli_main, ["plan", str(app)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "Environment variable names must not be empty" in result.output


def test_no_pin_overrides_config(tmp_path: Path):
    app = _node_app(tmp_path / "app")
    (app / "nixplan.yaml").write_text("pin_pkgs: true\n")

    pinned = CliRunner().invoke(cli_main, ["plan", str(app)])
    unpinned = CliRunner().invoke(cli_main, ["plan", str(app), "--no-pin"])

    assert pinned.exit_code == 0, pinned.output
    assert json.loads(pinned.stdout)["nixpkgs_archive"] == NIXPKGS_ARCHIVE
    assert unpinned.exit_code == 0, unpinned.output
    assert "nixpkgs_archive" not in json.loads(unpinned.stdout)

import logging
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from renpyhelper.errors import RembgNotInstalledError, RembgProcessError
from renpyhelper.rembg import RembgRunner, output_path_for
from renpyhelper.settings import SettingsManager


def _completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


@pytest.fixture
def runner(workdir: Path) -> RembgRunner:
    manager = SettingsManager()
    manager.update_rembg_settings({"flags": ["-a", "-m", "u2net"], "outputDirectory": "./clean"})
    return RembgRunner(manager)


def test_output_path_for() -> None:
    assert output_path_for(Path("sprites/eileen.png"), Path("out")) == Path("out/eileen_clean.png")


def test_executable_from_environment(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RENPY_HELPER_REMBG", "/opt/rembg/bin/rembg")
    assert RembgRunner(SettingsManager()).executable == "/opt/rembg/bin/rembg"
    assert RembgRunner(SettingsManager(), executable="my-rembg").executable == "my-rembg"


def test_default_executable(runner: RembgRunner) -> None:
    assert runner.executable == "rembg"


def test_build_command_uses_configured_flags(runner: RembgRunner) -> None:
    cmd = runner.build_command(Path("in.png"), Path("clean/in_clean.png"))
    assert cmd == ["rembg", "-a", "-m", "u2net", "in.png", "clean/in_clean.png"]


def test_is_installed(runner: RembgRunner) -> None:
    with patch("renpyhelper.rembg.subprocess.run", return_value=_completed()) as run:
        assert runner.is_installed() is True
    assert run.call_args.args[0] == ["rembg", "--help"]

    with patch("renpyhelper.rembg.subprocess.run", return_value=_completed(127)):
        assert runner.is_installed() is False

    with patch("renpyhelper.rembg.subprocess.run", side_effect=FileNotFoundError("rembg")):
        assert runner.is_installed() is False


def test_remove_background(runner: RembgRunner, workdir: Path) -> None:
    with patch("renpyhelper.rembg.subprocess.run", return_value=_completed()) as run:
        output = runner.remove_background(Path("eileen.png"))

    assert output == Path("clean/eileen_clean.png")
    assert (workdir / "clean").is_dir()
    assert run.call_args.args[0] == ["rembg", "-a", "-m", "u2net", "eileen.png", str(output)]


def test_remove_background_failure(runner: RembgRunner) -> None:
    with (
        patch("renpyhelper.rembg.subprocess.run", return_value=_completed(1, "bad model")),
        pytest.raises(RembgProcessError) as excinfo,
    ):
        runner.remove_background(Path("eileen.png"))
    assert excinfo.value.returncode == 1
    assert "bad model" in str(excinfo.value)


def test_remove_background_missing_executable(runner: RembgRunner) -> None:
    with (
        patch("renpyhelper.rembg.subprocess.run", side_effect=FileNotFoundError("rembg")),
        pytest.raises(RembgNotInstalledError),
    ):
        runner.remove_background(Path("eileen.png"))


def test_stderr_on_success_is_logged(runner: RembgRunner, caplog: pytest.LogCaptureFixture) -> None:
    with (
        patch("renpyhelper.rembg.subprocess.run", return_value=_completed(0, "Downloading model")),
        caplog.at_level(logging.WARNING),
    ):
        runner.remove_background(Path("eileen.png"))
    assert "Downloading model" in caplog.text

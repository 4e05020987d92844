import json
from pathlib import Path

import pytest

from renpyhelper.constants import SETTINGS_FILE


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RENPY_HELPER_REMBG", raising=False)
    return tmp_path


@pytest.fixture
def write_settings(workdir: Path):
    """Write raw text or a JSON object to the settings file."""

    def _write(content: object) -> Path:
        path = workdir / SETTINGS_FILE
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write

"""Persistent settings store backed by a JSON file in the working directory."""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from renpyhelper.constants import SETTINGS_FILE
from renpyhelper.settings.user import (
    RembgSettings,
    Settings,
    default_settings,
    merge_rembg_settings,
    merge_settings,
)
from renpyhelper.utils.file import ensure_directory_exists

logger: Final = logging.getLogger(__name__)


class LoadStatus(Enum):
    """How the settings in memory were obtained."""

    MISSING = "missing"  # no settings file, defaults used
    LOADED = "loaded"  # file parsed and merged onto defaults
    DEGRADED = "degraded"  # file unreadable or malformed, defaults used


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading the settings file."""

    settings: Settings
    status: LoadStatus
    error: str | None = None

    @property
    def degraded(self) -> bool:
        """Whether defaults were used because the file could not be read."""
        return self.status is LoadStatus.DEGRADED


class SettingsManager:
    """Read and write the settings file.

    The store loads once on construction and keeps the result in memory.
    Every update is merged onto the current state and written back at once.
    Read and write failures are logged and never raised; the caller keeps
    working with defaults (on load) or the unsaved in-memory state (on save).

    Examples:
        manager = SettingsManager()
        flags = manager.get_rembg_settings().flags
        manager.update_rembg_settings({"outputDirectory": "./clean"})
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        """Initialize and load settings.

        Args:
            base_dir: Directory holding the settings file (default: cwd)
        """
        self.settings_file_path: Path = (base_dir or Path.cwd()) / SETTINGS_FILE
        self.load_result: LoadResult = self._load_settings()
        self._settings: Settings = self.load_result.settings.model_copy(deep=True)

    def _load_settings(self) -> LoadResult:
        path = self.settings_file_path
        if not path.exists():
            logger.debug("No settings file at %s, using defaults", path)
            return LoadResult(default_settings(), LoadStatus.MISSING)

        try:
            data: Any = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:  # unreadable file / invalid JSON
            return self._degraded(f"Error loading settings from {path}: {exc}")

        try:
            settings = merge_settings(default_settings(), data)
        except (ValidationError, ValueError) as exc:
            return self._degraded(f"Invalid settings in {path}:\n{exc}")

        logger.debug("Loaded settings from %s", path)
        return LoadResult(settings, LoadStatus.LOADED)

    @staticmethod
    def _degraded(message: str) -> LoadResult:
        logger.error(message)
        return LoadResult(default_settings(), LoadStatus.DEGRADED, message)

    def save_settings(self) -> bool:
        """Write the in-memory settings to disk.

        Returns:
            True if the file was written, False if writing failed
        """
        path = self.settings_file_path
        tmp = path.with_suffix(path.suffix + ".tmp")

        # Atomic write: the previous file survives a failed save
        try:
            with tmp.open("w", encoding="utf-8") as fh:
                fh.write(self._settings.to_json())
            os.replace(tmp, path)
        except OSError as exc:
            logger.error("Error saving settings to %s: %s", path, exc)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            return False
        logger.debug("Saved settings to %s", self.settings_file_path)
        return True

    def get_settings(self) -> Settings:
        """Return a copy of all settings."""
        return self._settings.model_copy(deep=True)

    def update_settings(self, new_settings: Mapping[str, Any] | Settings) -> Settings:
        """Merge a partial settings document onto the current state and save.

        Args:
            new_settings: Partial document, e.g. ``{"rembg": {"flags": ["-a"]}}``

        Returns:
            Copy of the settings after the update
        """
        try:
            merged = merge_settings(self._settings, new_settings)
        except (ValidationError, ValueError) as exc:
            logger.error("Ignoring invalid settings update: %s", exc)
            return self.get_settings()

        self._settings = merged
        self.save_settings()
        return self.get_settings()

    def get_rembg_settings(self) -> RembgSettings:
        """Return a copy of the rembg settings group."""
        return self._settings.rembg.model_copy(deep=True)

    def update_rembg_settings(
        self, rembg_settings: Mapping[str, Any] | RembgSettings
    ) -> RembgSettings:
        """Merge a partial rembg group onto the current state and save.

        Args:
            rembg_settings: Partial group, e.g. ``{"outputDirectory": "./out"}``

        Returns:
            Copy of the rembg settings after the update
        """
        try:
            merged = merge_rembg_settings(self._settings.rembg, rembg_settings)
        except (ValidationError, ValueError) as exc:
            logger.error("Ignoring invalid rembg settings update: %s", exc)
            return self.get_rembg_settings()

        self._settings = Settings(rembg=merged)
        self.save_settings()
        return self.get_rembg_settings()

    def ensure_output_directory_exists(self, directory: str | Path | None = None) -> Path:
        """Create the output directory if needed.

        Args:
            directory: Directory to create (default: configured output directory)

        Returns:
            The directory that was ensured
        """
        return ensure_directory_exists(Path(directory or self._settings.rembg.output_directory))

    def ensure_input_directory_exists(self, directory: str | Path | None = None) -> Path:
        """Create the input directory if needed.

        Args:
            directory: Directory to create (default: configured input directory)

        Returns:
            The directory that was ensured
        """
        return ensure_directory_exists(Path(directory or self._settings.rembg.input_directory))

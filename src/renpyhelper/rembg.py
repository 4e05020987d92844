"""Run the external rembg tool with the configured flags."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

from renpyhelper.constants import CLEAN_SUFFIX, DEFAULT_REMBG_EXECUTABLE, REMBG_EXECUTABLE_ENV
from renpyhelper.errors import RembgNotInstalledError, RembgProcessError
from renpyhelper.settings import SettingsManager

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)


def output_path_for(input_file: Path, output_dir: Path) -> Path:
    """Build the output path for a processed image.

    Args:
        input_file: Source image
        output_dir: Destination directory

    Returns:
        ``<output_dir>/<stem>_clean<suffix>``
    """
    return output_dir / f"{input_file.stem}{CLEAN_SUFFIX}{input_file.suffix}"


class RembgRunner:
    """Invoke rembg as a subprocess.

    Flags and the output directory come from the settings store; the
    executable can be overridden with the RENPY_HELPER_REMBG environment
    variable (or a .env file).
    """

    def __init__(self, settings: SettingsManager, executable: str | None = None) -> None:
        self.settings = settings
        self.executable = (
            executable or os.getenv(REMBG_EXECUTABLE_ENV) or DEFAULT_REMBG_EXECUTABLE
        )

    def is_installed(self) -> bool:
        """Check that ``rembg --help`` runs successfully."""
        try:
            result = subprocess.run(
                [self.executable, "--help"], capture_output=True, text=True, check=False
            )
        except OSError as exc:
            logger.debug("rembg check failed: %s", exc)
            return False
        return result.returncode == 0

    def build_command(self, input_file: Path, output_file: Path) -> list[str]:
        """Assemble the argument list for one image."""
        flags = self.settings.get_rembg_settings().flags
        return [self.executable, *flags, str(input_file), str(output_file)]

    def remove_background(self, input_file: Path) -> Path:
        """Remove the background of one image.

        Args:
            input_file: Image to process

        Returns:
            Path of the processed image

        Raises:
            RembgNotInstalledError: If the executable cannot be started
            RembgProcessError: If rembg exits with a non-zero status
        """
        output_dir = self.settings.ensure_output_directory_exists()
        output_file = output_path_for(input_file, output_dir)
        cmd = self.build_command(input_file, output_file)
        logger.debug("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise RembgNotInstalledError(self.executable) from exc

        if result.returncode != 0:
            raise RembgProcessError(result.returncode, result.stderr)
        if result.stderr:
            # rembg reports model downloads and progress on stderr
            logger.warning("rembg: %s", result.stderr.strip())

        return output_file

"""File utility functions."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

from renpyhelper.constants import IMAGE_EXTENSIONS

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> Path:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create

    Returns:
        The same path
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)
    return directory


def is_image_file(path: str | Path) -> bool:
    """Check whether a path has a known image extension."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def list_subdirectories(directory: Path) -> list[str]:
    """List the names of non-hidden subdirectories, sorted.

    Args:
        directory: Directory to scan

    Returns:
        Sorted directory names

    Raises:
        OSError: If the directory cannot be read
    """
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )


def search_image_paths(text: str = "") -> list[str]:
    """Suggest directories and image files matching a partially typed path.

    The text is split into a directory and a name fragment; entries of the
    directory whose name contains the fragment (case-insensitive) are
    returned. A trailing separator searches inside the typed directory.
    Directories come first and carry a trailing separator.

    Args:
        text: Path typed so far (empty means the current directory)

    Returns:
        Matching paths, or an empty list if the directory is missing
    """
    if not text:
        search_dir, fragment = ".", ""
    elif text.endswith(os.sep):
        search_dir, fragment = text, ""
    else:
        search_dir, fragment = os.path.dirname(text) or ".", os.path.basename(text)

    if not os.path.isdir(search_dir):
        return []

    fragment = fragment.lower()
    dirs: list[str] = []
    files: list[str] = []
    try:
        with os.scandir(search_dir) as entries:
            for entry in entries:
                if fragment not in entry.name.lower():
                    continue
                path = os.path.join(search_dir, entry.name)
                if entry.is_dir():
                    dirs.append(path + os.sep)
                elif is_image_file(entry.name):
                    files.append(path)
    except OSError as exc:
        logger.error("Error reading directory %s: %s", search_dir, exc)
        return []

    return sorted(dirs) + sorted(files)

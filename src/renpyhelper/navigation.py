"""Interactive directory browser and image picker."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

import typer

from renpyhelper.utils.file import is_image_file, list_subdirectories, search_image_paths

logger: Final = logging.getLogger(__name__)

UP: Final = ".."
SELECT: Final = "."

Choice = tuple[str, str]  # (label, value)


def directory_choices(current: Path) -> list[Choice]:
    """Build the menu for one directory.

    Args:
        current: Absolute directory being browsed

    Returns:
        Go-up entry (unless at the filesystem root), select entry, then
        sorted non-hidden subdirectories

    Raises:
        OSError: If the directory cannot be read
    """
    choices: list[Choice] = []
    if current.parent != current:
        choices.append(("../ (Go up one directory)", UP))
    choices.append(("./ (Select current directory)", SELECT))
    choices.extend((f"{name}/", name) for name in list_subdirectories(current))
    return choices


def _ask_choice(message: str, choices: list[Choice]) -> str:
    """Show numbered choices and read one by number or by value."""
    for index, (label, _) in enumerate(choices, start=1):
        typer.echo(f"  {index:>2}) {label}")

    values = [value for _, value in choices]
    while True:
        answer = str(typer.prompt(message, default=SELECT)).strip()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return values[int(answer) - 1]
        value = answer.rstrip("/" + os.sep) or answer
        if value in values:
            return value
        typer.secho(f"Invalid choice: {answer}", fg=typer.colors.RED, err=True)


def select_directory(start_dir: str | Path, message: str) -> Path:
    """Browse the filesystem until the user selects a directory.

    Unreadable or missing directories are logged and the browser moves
    up one level.

    Args:
        start_dir: Where browsing starts (relative to cwd if not absolute)
        message: Prompt text

    Returns:
        Absolute path of the selected directory
    """
    current = Path(start_dir).resolve()
    while True:
        typer.echo(f"\nCurrent directory: {current}")
        try:
            choices = directory_choices(current)
        except OSError as exc:
            logger.error("Error reading directory %s: %s", current, exc)
            if current.parent == current:
                raise
            current = current.parent
            continue

        if choices[-1][1] == SELECT:
            typer.echo("No subdirectories found in this location.")

        selected = _ask_choice(message, choices)
        if selected == UP:
            current = current.parent
        elif selected == SELECT:
            return current
        else:
            current = current / selected


def validate_image_path(text: str) -> str | None:
    """Check that text names an existing image file.

    Returns:
        An error message, or None if the path is acceptable
    """
    if not text.strip():
        return "Please enter a valid file path"
    path = Path(text)
    if not path.exists():
        return "File does not exist"
    if path.is_dir():
        return "Please select a file, not a directory"
    if not is_image_file(path):
        return "Please select an image file"
    return None


def _initial_query(start_dir: str | Path) -> str:
    start = str(start_dir)
    if start in ("", "."):
        return ""
    return start.rstrip(os.sep) + os.sep


def select_image_file(start_dir: str | Path = ".") -> Path:
    """Ask for an image file, suggesting matching paths.

    The user may type a suggestion number or a path. Directories and
    partial paths narrow the suggestions and ask again.

    Args:
        start_dir: Directory whose contents are suggested first

    Returns:
        Path of the chosen image
    """
    query = _initial_query(start_dir)
    while True:
        suggestions = search_image_paths(query)
        for index, suggestion in enumerate(suggestions, start=1):
            typer.echo(f"  {index:>2}) {suggestion}")
        if not suggestions:
            typer.echo("No matching images found.")

        answer = str(
            typer.prompt("Enter the path to the image file", default=query or None)
        ).strip()
        if answer.isdigit() and 1 <= int(answer) <= len(suggestions):
            answer = suggestions[int(answer) - 1]

        if answer and os.path.isdir(answer):
            query = answer if answer.endswith(os.sep) else answer + os.sep
            continue

        error = validate_image_path(answer)
        if error is None:
            return Path(answer)
        if error == "File does not exist" and search_image_paths(answer):
            query = answer
            continue
        typer.secho(error, fg=typer.colors.RED, err=True)

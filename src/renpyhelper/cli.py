"""Ren'Py helper CLI application.

This module provides the command-line interface: background removal for
sprites with rembg, and an interactive editor for the stored settings.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer

from renpyhelper import __version__
from renpyhelper.errors import RembgError
from renpyhelper.navigation import select_directory, select_image_file, validate_image_path
from renpyhelper.rembg import RembgRunner, output_path_for
from renpyhelper.settings import SettingsManager

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(
    help="CLI tool that offers helpful utilities for developing visual novels using Ren'Py",
    add_completion=False,
)
settings_app = typer.Typer(help="Update default settings for the CLI tool")
app.add_typer(settings_app, name="settings")

logger: Final = logging.getLogger(__name__)  # Will be "renpyhelper.cli"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
VERSION_OPTION = typer.Option(
    False, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version"
)
FILE_ARGUMENT = typer.Argument(None, help="Image to process (prompted for if omitted)")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = DEBUG_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    """Configure logging and show help when no command is given."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("rembg")
def rembg(file: Path | None = FILE_ARGUMENT) -> None:
    """Remove background from an image using rembg tool."""
    manager = SettingsManager()
    runner = RembgRunner(manager)

    if not runner.is_installed():
        typer.secho(
            "Error: rembg tool is not installed or not in PATH.", fg=typer.colors.RED, err=True
        )
        typer.echo("Please install rembg using: pip install rembg")
        raise typer.Exit(code=1)

    logger.debug(
        "Settings file %s (%s)", manager.settings_file_path, manager.load_result.status.value
    )
    rembg_settings = manager.get_rembg_settings()
    if file is None:
        file = select_image_file(rembg_settings.input_directory)
    else:
        error = validate_image_path(str(file))
        if error:
            typer.secho(error, fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.echo(f"Processing {file}...")
    typer.echo(
        f"Output will be saved as {output_path_for(file, Path(rembg_settings.output_directory))}"
    )

    try:
        output_file = runner.remove_background(file)
    except RembgError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.secho(
        f"Background removed successfully! Output saved to: {output_file}",
        fg=typer.colors.GREEN,
    )


# ───────────────────────── settings sub-commands ─────────────────────────────
@settings_app.callback(invoke_without_command=True)
def settings(ctx: typer.Context) -> None:
    """Interactively update the rembg settings."""
    if ctx.invoked_subcommand is not None:
        return

    manager = SettingsManager()
    current = manager.get_rembg_settings()

    typer.echo("\nCurrent rembg settings:")
    typer.echo(f"Flags: {current.flags_string}")
    typer.echo(f"Input directory: {current.input_directory}")
    typer.echo(f"Output directory: {current.output_directory}")

    while True:
        flags = str(
            typer.prompt("Enter rembg flags (space-separated)", default=current.flags_string)
        ).split()
        if flags:
            break
        typer.secho("Please enter at least one flag", fg=typer.colors.RED, err=True)

    typer.echo("\nSelect input directory:")
    input_directory = select_directory(current.input_directory, "Select input directory")

    typer.echo("\nSelect output directory:")
    output_directory = select_directory(current.output_directory, "Select output directory")

    updated = manager.update_rembg_settings(
        {
            "flags": flags,
            "inputDirectory": str(input_directory),
            "outputDirectory": str(output_directory),
        }
    )
    typer.secho("\nSettings updated successfully!", fg=typer.colors.GREEN)

    manager.ensure_input_directory_exists()
    manager.ensure_output_directory_exists()
    typer.echo(f'Input directory "{updated.input_directory}" is ready.')
    typer.echo(f'Output directory "{updated.output_directory}" is ready.')


@settings_app.command("show")
def show_settings() -> None:
    """Print the current settings as JSON."""
    typer.echo(SettingsManager().get_settings().to_json())


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)

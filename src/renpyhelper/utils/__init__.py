"""Common utility functions and helpers for the renpyhelper package."""

from renpyhelper.utils.file import (
    ensure_directory_exists,
    is_image_file,
    list_subdirectories,
    search_image_paths,
)

__all__ = [
    "ensure_directory_exists",
    "is_image_file",
    "list_subdirectories",
    "search_image_paths",
]

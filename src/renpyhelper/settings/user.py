"""User-configurable settings persisted in .renpy-helper-settings.json."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from renpyhelper.constants import (
    DEFAULT_INPUT_DIRECTORY,
    DEFAULT_OUTPUT_DIRECTORY,
    DEFAULT_REMBG_FLAGS,
)

# (attribute name, JSON key) for every field of the rembg group
_REMBG_FIELDS: Final = (
    ("flags", "flags"),
    ("input_directory", "inputDirectory"),
    ("output_directory", "outputDirectory"),
)


class RembgSettings(BaseModel):
    """Settings for the rembg background-removal tool.

    Attributes are snake_case in Python and camelCase on disk, so the file
    keeps its ``inputDirectory`` / ``outputDirectory`` keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    flags: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REMBG_FLAGS),
        description="Flags passed verbatim to rembg (e.g. -a -m isnet-general-use)",
    )
    input_directory: str = Field(
        DEFAULT_INPUT_DIRECTORY,
        alias="inputDirectory",
        description="Default starting point for file browsing",
    )
    output_directory: str = Field(
        DEFAULT_OUTPUT_DIRECTORY,
        alias="outputDirectory",
        description="Destination directory for processed images",
    )

    @property
    def flags_string(self) -> str:
        """Flags joined with spaces, as shown in prompts."""
        return " ".join(self.flags)


class Settings(BaseModel):
    """Complete settings document."""

    rembg: RembgSettings = Field(default_factory=RembgSettings)

    def to_json(self) -> str:
        """Serialize with on-disk keys and 2-space indentation."""
        return self.model_dump_json(by_alias=True, indent=2)


def default_settings() -> Settings:
    """Return a fresh default settings instance."""
    return Settings()


def _as_mapping(value: Mapping[str, Any] | BaseModel | None, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


def merge_rembg_settings(
    base: RembgSettings, overrides: Mapping[str, Any] | RembgSettings | None
) -> RembgSettings:
    """Override fields of ``base`` with the truthy fields of ``overrides``.

    Each field is replaced as a whole; an overriding ``flags`` list replaces
    the base list rather than extending it. Empty strings, empty lists and
    missing keys keep the base value. Keys may be given either as JSON keys
    (``inputDirectory``) or attribute names (``input_directory``).

    Args:
        base: Settings to start from (not modified)
        overrides: Possibly-partial group

    Returns:
        New validated RembgSettings

    Raises:
        ValueError: If overrides is not an object
        ValidationError: If a supplied field has the wrong type
    """
    patch = _as_mapping(overrides, "rembg settings")
    data = base.model_dump()
    for attr, key in _REMBG_FIELDS:
        value = patch.get(key) or patch.get(attr)
        if value:
            data[attr] = value
    return RembgSettings.model_validate(data)


def merge_settings(base: Settings, overrides: Mapping[str, Any] | Settings | None) -> Settings:
    """Merge a possibly-partial settings document onto ``base``.

    Args:
        base: Settings to start from (not modified)
        overrides: Parsed settings file or update payload

    Returns:
        New validated Settings
    """
    patch = _as_mapping(overrides, "settings")
    return Settings(rembg=merge_rembg_settings(base.rembg, patch.get("rembg")))

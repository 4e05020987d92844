"""Settings management.

This package provides:
- Settings / RembgSettings: the persisted settings document
- SettingsManager: load, merge, update and save the settings file
"""

from renpyhelper.settings.store import LoadResult, LoadStatus, SettingsManager
from renpyhelper.settings.user import (
    RembgSettings,
    Settings,
    default_settings,
    merge_rembg_settings,
    merge_settings,
)

__all__ = [
    "LoadResult",
    "LoadStatus",
    "RembgSettings",
    "Settings",
    "SettingsManager",
    "default_settings",
    "merge_rembg_settings",
    "merge_settings",
]

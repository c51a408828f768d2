"""Configuration module using Pydantic Settings.

Usage:
    from recordcopy.config import CopySettings, get_settings

    settings = CopySettings(snapshot_compress=True)
"""

from recordcopy.config.settings import CopySettings, get_settings

__all__ = [
    "CopySettings",
    "get_settings",
]

"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
serialization-backed copy paths.

Usage:
    from recordcopy.config import CopySettings

    # Load from environment variables (RECORDCOPY_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(snapshot_compress=True)
    token = to_snapshot_string(person, settings=settings)
"""

from __future__ import annotations

import pickle  # nosec B403 - protocol constant only
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for snapshot tokens and serialization-based cloning.

    Attributes:
        pickle_protocol: Pickle protocol used by clone_deep() and to_bytes().
        snapshot_compress: Compress snapshot JSON with zlib before base64.
        snapshot_compress_level: zlib level (0-9) when compression is on.
        snapshot_urlsafe: Use the URL-safe base64 alphabet for tokens.

    Environment Variables:
        RECORDCOPY_PICKLE_PROTOCOL
        RECORDCOPY_SNAPSHOT_COMPRESS
        RECORDCOPY_SNAPSHOT_COMPRESS_LEVEL
        RECORDCOPY_SNAPSHOT_URLSAFE
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDCOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    pickle_protocol: int = Field(default=pickle.HIGHEST_PROTOCOL, ge=2, le=pickle.HIGHEST_PROTOCOL)
    snapshot_compress: bool = False
    snapshot_compress_level: int = Field(default=6, ge=0, le=9)
    snapshot_urlsafe: bool = False


@lru_cache(maxsize=1)
def get_settings() -> CopySettings:
    """Process default settings, read once from the environment.

    Returns:
        Cached CopySettings instance.
    """
    return CopySettings()

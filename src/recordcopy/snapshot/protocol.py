"""Codec protocol for swappable snapshot encodings.

The codec layer turns property maps into opaque tokens, enabling:
- Tagged JSON (default)
- Other self-describing encodings (bring your own)

Usage:
    codec = TaggedJsonCodec()
    token = to_snapshot_string(person, codec=codec)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class StructuredCodec(Protocol):
    """Abstract codec interface. Implementations handle the actual encoding."""

    def encode(self, mapping: Mapping[Any, Any]) -> str:
        """Encode a map into a reversible, deterministic token."""
        ...

    def decode(self, token: str) -> dict[Any, Any]:
        """Decode a token produced by encode(). Raises DecodeError when malformed."""
        ...

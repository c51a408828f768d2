"""Snapshot tokens: property map projection composed with a codec.

Usage:
    token = to_snapshot_string(person)
    again = from_snapshot_string(token, Person)
    assert again == person
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from recordcopy.config import CopySettings
from recordcopy.snapshot.codec import TaggedJsonCodec
from recordcopy.snapshot.projection import from_property_map, to_property_map
from recordcopy.snapshot.protocol import StructuredCodec

T = TypeVar("T")


def to_snapshot_string(
    source: Any,
    ignore_names: Iterable[str] = (),
    *,
    codec: StructuredCodec | None = None,
    settings: CopySettings | None = None,
) -> str:
    """Encode the readable properties of source as a snapshot token.

    Args:
        source: Record to snapshot.
        ignore_names: Property names to leave out.
        codec: Codec to use (TaggedJsonCodec when None).
        settings: Settings for the default codec.

    Returns:
        Opaque, deterministic token.

    Raises:
        NotSerializableError: If a property value cannot be encoded.
    """
    codec = codec if codec is not None else TaggedJsonCodec(settings)
    return codec.encode(to_property_map(source, ignore_names))


def from_snapshot_string(
    token: str,
    target_type: type[T],
    *,
    codec: StructuredCodec | None = None,
    settings: CopySettings | None = None,
) -> T:
    """Rebuild a record of target_type from a snapshot token.

    Args:
        token: Token produced by to_snapshot_string().
        target_type: Record class to instantiate.
        codec: Codec to use (TaggedJsonCodec when None).
        settings: Settings for the default codec.

    Returns:
        New record; unknown keys in the token are ignored.

    Raises:
        DecodeError: If the token is malformed.
    """
    codec = codec if codec is not None else TaggedJsonCodec(settings)
    return from_property_map(codec.decode(token), target_type)

"""Property map projection and snapshot tokens."""

from recordcopy.snapshot.codec import TaggedJsonCodec, decode, encode
from recordcopy.snapshot.core import from_snapshot_string, to_snapshot_string
from recordcopy.snapshot.projection import adapt_value, from_property_map, to_property_map
from recordcopy.snapshot.protocol import StructuredCodec

__all__ = [
    # Projection
    "to_property_map",
    "from_property_map",
    "adapt_value",
    # Codec
    "StructuredCodec",
    "TaggedJsonCodec",
    "encode",
    "decode",
    # Snapshot tokens
    "to_snapshot_string",
    "from_snapshot_string",
]

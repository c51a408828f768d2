"""Serialization-based deep cloning."""

from recordcopy.serialization.clone import clone_deep, from_bytes, to_bytes

__all__ = [
    "clone_deep",
    "to_bytes",
    "from_bytes",
]

"""Tagged JSON codec implementing the StructuredCodec protocol.

Every value is written as a JSON scalar, a JSON array (lists), or a single-key
tagged object carrying enough type information to rebuild it without a schema:

    {"$map": [[key, value], ...]}            ordered mapping, any encodable keys
    {"$tuple": [...]}  {"$set": [...]}  {"$frozenset": [...]}
    {"$enum": "module:Qualname", "name": "MEMBER"}
    {"$record": "module:Qualname", "fields": {"$map": [...]}}
    {"$array": "d", "items": [...]}          array.array
    {"$ndarray": "<f8", "shape": [2, 3], "items": [...]}
    {"$bytes": "..."} {"$datetime": "..."} {"$decimal": "..."} ...

The JSON text is optionally zlib-compressed and then base64 encoded. Identical
maps always produce identical tokens.

Decoding never imports modules: enum and record types named in a token must be
registered with @record or belong to a module that is already imported.
"""

from __future__ import annotations

import array
import base64
import binascii
import datetime as dt
import decimal
import json
import logging
import types
import uuid
import zlib
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

import numpy

from recordcopy.config import CopySettings, get_settings
from recordcopy.core.errors import CopyError, DecodeError, NotSerializableError
from recordcopy.core.operations import copy_of_enum_value
from recordcopy.core.record import resolve_type, type_name_of
from recordcopy.snapshot.projection import from_property_map, to_property_map

logger = logging.getLogger(__name__)

_SEPARATORS = (",", ":")


def _dumps(node: Any) -> str:
    return json.dumps(node, separators=_SEPARATORS, ensure_ascii=True, allow_nan=True)


class TaggedJsonCodec:
    """Self-describing, deterministic snapshot codec.

    Args:
        settings: Compression and alphabet options (process defaults when None).
    """

    def __init__(self, settings: CopySettings | None = None) -> None:
        self._settings = settings if settings is not None else get_settings()
        self._decoders: dict[str, Callable[[dict[str, Any]], Any]] = {
            "$map": self._decode_map,
            "$tuple": lambda n: tuple(self._decode_items(n["$tuple"])),
            "$set": lambda n: set(self._decode_items(n["$set"])),
            "$frozenset": lambda n: frozenset(self._decode_items(n["$frozenset"])),
            "$bytes": lambda n: base64.b64decode(n["$bytes"], validate=True),
            "$bytearray": lambda n: bytearray(base64.b64decode(n["$bytearray"], validate=True)),
            "$complex": lambda n: complex(*n["$complex"]),
            "$datetime": lambda n: dt.datetime.fromisoformat(n["$datetime"]),
            "$date": lambda n: dt.date.fromisoformat(n["$date"]),
            "$time": lambda n: dt.time.fromisoformat(n["$time"]),
            "$timedelta": lambda n: dt.timedelta(*n["$timedelta"]),
            "$decimal": lambda n: decimal.Decimal(n["$decimal"]),
            "$uuid": lambda n: uuid.UUID(n["$uuid"]),
            "$array": lambda n: array.array(n["$array"], n["items"]),
            "$ndarray": self._decode_ndarray,
            "$numpy": lambda n: numpy.dtype(n["$numpy"]).type(self._decode(n["value"])),
            "$enum": self._decode_enum,
            "$record": self._decode_record,
        }

    # Encoding

    def encode(self, mapping: Mapping[Any, Any]) -> str:
        """Encode a map into a snapshot token.

        Args:
            mapping: Map to encode; values must be acyclic and serializable.

        Returns:
            Base64 token.

        Raises:
            NotSerializableError: If a value cannot be encoded or the graph has a cycle.
        """
        data = _dumps(self._encode_map(mapping, set())).encode("ascii")
        if self._settings.snapshot_compress:
            data = zlib.compress(data, self._settings.snapshot_compress_level)
        if self._settings.snapshot_urlsafe:
            return base64.urlsafe_b64encode(data).decode("ascii")
        return base64.b64encode(data).decode("ascii")

    def _encode_map(self, mapping: Mapping[Any, Any], active: set[int]) -> dict[str, Any]:
        return {
            "$map": [[self._encode(k, active), self._encode(v, active)] for k, v in mapping.items()]
        }

    def _encode_sorted(self, items: Any, active: set[int]) -> list[Any]:
        return sorted((self._encode(item, active) for item in items), key=_dumps)

    def _encode(self, value: Any, active: set[int]) -> Any:
        if value is None or isinstance(value, bool | str):
            return value
        if isinstance(value, Enum):
            return {"$enum": type_name_of(type(value)), "name": value.name}
        if isinstance(value, int | float) and not isinstance(value, numpy.generic):
            return value
        if isinstance(value, complex):
            return {"$complex": [value.real, value.imag]}
        if isinstance(value, bytes):
            return {"$bytes": base64.b64encode(value).decode("ascii")}
        if isinstance(value, bytearray):
            return {"$bytearray": base64.b64encode(value).decode("ascii")}
        if isinstance(value, dt.datetime):
            return {"$datetime": value.isoformat()}
        if isinstance(value, dt.date):
            return {"$date": value.isoformat()}
        if isinstance(value, dt.time):
            return {"$time": value.isoformat()}
        if isinstance(value, dt.timedelta):
            return {"$timedelta": [value.days, value.seconds, value.microseconds]}
        if isinstance(value, decimal.Decimal):
            return {"$decimal": str(value)}
        if isinstance(value, uuid.UUID):
            return {"$uuid": str(value)}
        if isinstance(value, numpy.generic):
            return {"$numpy": value.dtype.str, "value": self._encode(value.item(), active)}
        if isinstance(value, array.array):
            return {"$array": value.typecode, "items": value.tolist()}

        if id(value) in active:
            raise NotSerializableError(f"Reference cycle through {type(value).__name__}")
        active.add(id(value))
        try:
            return self._encode_container(value, active)
        finally:
            active.discard(id(value))

    def _encode_container(self, value: Any, active: set[int]) -> Any:
        if isinstance(value, Mapping):
            return self._encode_map(value, active)
        if isinstance(value, list):
            return [self._encode(item, active) for item in value]
        if isinstance(value, tuple):
            return {"$tuple": [self._encode(item, active) for item in value]}
        if isinstance(value, frozenset):
            return {"$frozenset": self._encode_sorted(value, active)}
        if isinstance(value, set):
            return {"$set": self._encode_sorted(value, active)}
        if isinstance(value, numpy.ndarray):
            return {
                "$ndarray": value.dtype.str,
                "shape": list(value.shape),
                "items": [self._encode(item, active) for item in value.ravel().tolist()],
            }
        if callable(value) or isinstance(value, types.ModuleType):
            raise NotSerializableError(f"Cannot encode {type(value).__name__} value")
        if not (hasattr(value, "__dict__") or hasattr(type(value), "__slots__")):
            raise NotSerializableError(f"Cannot encode {type(value).__name__} value")
        return {
            "$record": type_name_of(type(value)),
            "fields": self._encode_map(to_property_map(value), active),
        }

    # Decoding

    def decode(self, token: str) -> dict[Any, Any]:
        """Decode a snapshot token back into a map.

        Args:
            token: Token produced by encode(), with either base64 alphabet,
                compressed or not.

        Returns:
            The decoded map; nested records, enums and containers are rebuilt.

        Raises:
            DecodeError: If the token is malformed or names a type that is neither
                registered nor in an imported module. No partial map is produced.
        """
        try:
            data = base64.b64decode(token.replace("-", "+").replace("_", "/"), validate=True)
            if not data.startswith(b"{"):
                data = zlib.decompress(data)
            node = json.loads(data.decode("utf-8"))
        except (
            AttributeError,
            binascii.Error,
            zlib.error,
            UnicodeDecodeError,
            ValueError,
            RecursionError,
        ) as e:
            logger.debug("Rejected snapshot token: %s", e)
            raise DecodeError("Malformed snapshot token") from e
        if not isinstance(node, dict) or set(node) != {"$map"}:
            raise DecodeError("Snapshot token does not hold a map")
        try:
            return self._decode_map(node)
        except DecodeError:
            raise
        except (
            CopyError,
            AttributeError,
            LookupError,
            TypeError,
            ValueError,
            ArithmeticError,
            RecursionError,
        ) as e:
            logger.debug("Rejected snapshot token: %s", e)
            raise DecodeError(f"Malformed snapshot token: {e}") from e

    def _decode_items(self, items: list[Any]) -> list[Any]:
        if not isinstance(items, list):
            raise DecodeError(f"Expected a list, got {type(items).__name__}")
        return [self._decode(item) for item in items]

    def _decode(self, node: Any) -> Any:
        if node is None or isinstance(node, bool | int | float | str):
            return node
        if isinstance(node, list):
            return self._decode_items(node)
        if not isinstance(node, dict) or not node:
            raise DecodeError(f"Unexpected node {node!r}")
        tag = next(iter(node))
        decoder = self._decoders.get(tag)
        if decoder is None:
            raise DecodeError(f"Unknown tag {tag!r}")
        return decoder(node)

    def _decode_map(self, node: dict[str, Any]) -> dict[Any, Any]:
        return {self._decode(k): self._decode(v) for k, v in node["$map"]}

    def _decode_ndarray(self, node: dict[str, Any]) -> numpy.ndarray:
        dtype = numpy.dtype(node["$ndarray"])
        items = self._decode_items(node["items"])
        if dtype.kind == "O":
            flat = numpy.empty(len(items), dtype=object)
            for i, item in enumerate(items):
                flat[i] = item
        else:
            flat = numpy.array(items, dtype=dtype)
        return flat.reshape(node["shape"])

    def _decode_enum(self, node: dict[str, Any]) -> Enum:
        enum_type = resolve_type(node["$enum"], import_modules=False)
        member = copy_of_enum_value(node["name"], enum_type)
        if member is None:
            raise DecodeError(f"{node['$enum']!r} is not an enum type")
        return member

    def _decode_record(self, node: dict[str, Any]) -> Any:
        record_type = resolve_type(node["$record"], import_modules=False)
        return from_property_map(self._decode_map(node["fields"]), record_type)


def encode(mapping: Mapping[Any, Any], settings: CopySettings | None = None) -> str:
    """Encode a map with the default TaggedJsonCodec."""
    return TaggedJsonCodec(settings).encode(mapping)


def decode(token: str, settings: CopySettings | None = None) -> dict[Any, Any]:
    """Decode a token with the default TaggedJsonCodec."""
    return TaggedJsonCodec(settings).decode(token)

"""Projection of records to ordered property maps and back.

Usage:
    data = to_property_map(person)          # {"gender": Gender.MALE, "about": "", ...}
    again = from_property_map(data, Person)

Values in the map are the very objects held by the record (no copy). When a map
is turned back into a record, unknown keys are dropped and absent properties keep
their defaults, so maps written by older or newer record versions still load.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar, get_origin

from pydantic import TypeAdapter, ValidationError

from recordcopy.copier.fields import write_field
from recordcopy.copier.properties import read_property, write_property
from recordcopy.core.errors import TypeMismatchError
from recordcopy.core.operations import copy_of_enum_value
from recordcopy.core.record import (
    accepts_attributes,
    get_all_declared_fields,
    get_record_properties,
    ignore_set,
    is_pydantic,
    new_instance,
    unwrap_declared,
)
from recordcopy.core.types import Shared

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


@lru_cache(maxsize=256)
def _adapter(declared_type: type) -> TypeAdapter[Any]:
    return TypeAdapter(declared_type)


def adapt_value(value: Any, declared_type: Any) -> Any:
    """Adapt a map value to the declared type of the property receiving it.

    Enum members and member names resolve to the canonical member of the declared
    enum. Mappings given for a dataclass or Pydantic typed property are validated
    into that type. Anything else passes through unchanged.

    Args:
        value: Value read from the map.
        declared_type: Declared type of the receiving property, or None.

    Returns:
        The adapted value.

    Raises:
        TypeMismatchError: If the value cannot be adapted.
    """
    declared_type = unwrap_declared(declared_type)
    if (
        value is None
        or get_origin(declared_type) is not None
        or not isinstance(declared_type, type)
    ):
        return value
    if issubclass(declared_type, Enum):
        if isinstance(value, Enum | str):
            return copy_of_enum_value(value, declared_type)
        return value
    if isinstance(value, Mapping) and (
        dataclasses.is_dataclass(declared_type) or is_pydantic(declared_type)
    ):
        try:
            return _adapter(declared_type).validate_python(dict(value))
        except ValidationError as e:
            raise TypeMismatchError(f"Cannot build {declared_type.__name__} from map") from e
    return value


def to_property_map(source: Any, ignore_names: Iterable[str] = ()) -> dict[str, Shared[Any]]:
    """Read every readable property of source into an ordered map.

    Args:
        source: Record to project.
        ignore_names: Property names to leave out.

    Returns:
        Property name -> current value, in introspection order. None values are kept.

    Raises:
        AccessError: If a property reader cannot be invoked.
    """
    if source is None:
        raise TypeError("to_property_map() source must not be None")
    ignored = set(ignore_set(ignore_names))
    return {
        prop.name: read_property(prop, source)
        for prop in get_record_properties(source)
        if prop.readable and prop.name not in ignored
    }


def _is_free_attribute(cls: type, name: Any) -> bool:
    """Public attribute name not already claimed by the class (property, method, ...)."""
    return (
        isinstance(name, str)
        and name.isidentifier()
        and not name.startswith("_")
        and inspect.getattr_static(cls, name, _MISSING) is _MISSING
    )


def from_property_map(mapping: Mapping[str, Any], target_type: type[T]) -> T:
    """Build a new target_type instance from a property map.

    Writable properties go through their writers. Declared fields without a
    writer (frozen dataclasses and models, Final fields) are set directly on the
    fresh instance. Plain classes also take keys naming instance attributes that
    a freshly allocated instance does not have yet.

    Args:
        mapping: Property name -> value.
        target_type: Record class to instantiate.

    Returns:
        New instance with every matching property set.

    Raises:
        TypeMismatchError: If a value cannot be adapted to its property.
        AccessError: If a property writer cannot be invoked.
    """
    instance = new_instance(target_type)
    writable = {p.name: p for p in get_record_properties(instance) if p.writable}
    declared = {f.name: f for f in get_all_declared_fields(target_type)}
    open_shape = accepts_attributes(target_type)
    for key, value in mapping.items():
        prop = writable.get(key)
        if prop is not None:
            write_property(prop, instance, adapt_value(value, prop.declared_type))
        elif key in declared:
            field = declared[key]
            write_field(instance, key, adapt_value(value, field.declared_type), force=True)
        elif open_shape and _is_free_attribute(target_type, key):
            write_field(instance, key, value)
        else:
            logger.debug("Dropping unknown key %r for %s", key, target_type.__qualname__)
    return instance

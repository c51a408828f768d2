"""Accessor-based copying between records exposing properties.

Where copy_record() walks raw fields, these functions go through readable and
writable properties: dataclass/pydantic fields, Python `property` objects, or
whatever a PropertyEnumerable type reports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from recordcopy.core.errors import AccessError, NoSuchPropertyError, TypeMismatchError
from recordcopy.core.record import PropertyDescriptor, get_record_properties, ignore_set

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_property(prop: PropertyDescriptor, obj: Any) -> Any:
    """Invoke a property reader, reporting accessor failures as AccessError."""
    if prop.reader is None:
        raise NoSuchPropertyError(f"{type(obj).__name__}.{prop.name} is not readable")
    try:
        return prop.reader(obj)
    except (AttributeError, TypeError) as e:
        raise AccessError(f"Cannot read {type(obj).__name__}.{prop.name}") from e


def write_property(prop: PropertyDescriptor, obj: Any, value: Any) -> None:
    """Invoke a property writer, reporting accessor failures as AccessError."""
    if prop.writer is None:
        raise NoSuchPropertyError(f"{type(obj).__name__}.{prop.name} is not writable")
    try:
        prop.writer(obj, value)
    except ValidationError as e:
        raise TypeMismatchError(f"{type(obj).__name__}.{prop.name} rejected value") from e
    except (AttributeError, TypeError) as e:
        raise AccessError(f"Cannot write {type(obj).__name__}.{prop.name}") from e


def copy_properties(source: Any, target: T, ignore_names: Iterable[str] = ()) -> T:
    """Copy every writable target property that source can read.

    Target properties missing or unreadable on source are left untouched.

    Args:
        source: Record to read from.
        target: Record to write to.
        ignore_names: Property names never read or written.

    Returns:
        The target record.

    Raises:
        AccessError: If an accessor cannot be invoked.
    """
    if source is None or target is None:
        raise TypeError("copy_properties() requires a source and a target")
    ignored = set(ignore_set(ignore_names))
    readable = {p.name: p for p in get_record_properties(source) if p.readable}
    for prop in get_record_properties(target):
        if prop.name in ignored or not prop.writable:
            continue
        source_prop = readable.get(prop.name)
        if source_prop is None:
            logger.debug("No readable %s on %s", prop.name, type(source).__name__)
            continue
        write_property(prop, target, read_property(source_prop, source))
    return target


def copy_property(source: Any, target: Any, property_name: str) -> None:
    """Copy one named property from source to target.

    Args:
        source: Record to read from.
        target: Record to write to.
        property_name: Property to copy.

    Raises:
        NoSuchPropertyError: If source cannot read or target cannot write the property.
        AccessError: If an accessor cannot be invoked.
    """
    source_prop = next(
        (p for p in get_record_properties(source) if p.name == property_name and p.readable),
        None,
    )
    if source_prop is None:
        raise NoSuchPropertyError(
            f"{type(source).__name__} has no readable property {property_name!r}"
        )
    target_prop = next(
        (p for p in get_record_properties(target) if p.name == property_name and p.writable),
        None,
    )
    if target_prop is None:
        raise NoSuchPropertyError(
            f"{type(target).__name__} has no writable property {property_name!r}"
        )
    write_property(target_prop, target, read_property(source_prop, source))

"""Field-by-field record copying driven by type classification.

Usage:
    # New instance of the source's type
    clone = copy_record(person)

    # Into an existing destination, leaving some fields alone
    copy_record(person, existing, ignore_names=("gender",))

Copies are shallow beyond one level: maps, collections and generic objects end
up shared between source and destination; arrays get a fresh array whose
reference slots are shared; enums resolve to the destination's canonical member.
Use clone_deep() for an independent graph.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from recordcopy.core.errors import AccessError, NoSuchFieldError, TypeMismatchError
from recordcopy.core.record import (
    ClassType,
    FieldDescriptor,
    classify,
    classify_value,
    get_record_fields,
    ignore_set,
    new_instance,
    unwrap_declared,
)

logger = logging.getLogger(__name__)

S = TypeVar("S")
D = TypeVar("D")

_SCALAR_TYPES = (str, bytes, int, float, complex)
_SHAPED_ACTIONS = (ClassType.ARRAY, ClassType.ENUM)


def write_field(destination: Any, name: str, value: Any, *, force: bool = False) -> None:
    """Assign a field on destination, translating refusals into copy errors.

    Args:
        destination: Record to write.
        name: Field name.
        value: New value.
        force: Bypass frozen-instance guards (fresh instances only).

    Raises:
        AccessError: If the destination refuses the write.
        TypeMismatchError: If a validating destination rejects the value.
    """
    try:
        if force:
            object.__setattr__(destination, name, value)
        else:
            setattr(destination, name, value)
    except ValidationError as e:
        if any(err["type"].startswith("frozen") for err in e.errors()):
            raise AccessError(f"{type(destination).__name__}.{name} is read-only") from e
        raise TypeMismatchError(f"{type(destination).__name__}.{name} rejected value") from e
    except (AttributeError, TypeError) as e:
        raise AccessError(f"Cannot write {type(destination).__name__}.{name}") from e


def _check_slot(class_type: ClassType, field: FieldDescriptor, target: FieldDescriptor) -> None:
    if class_type not in _SHAPED_ACTIONS or target.declared_type is None:
        return
    target_type = classify(target.declared_type)
    if target_type not in (class_type, ClassType.DEFAULT):
        raise TypeMismatchError(
            f"Cannot copy {class_type.name} field {field.name!r} into "
            f"{target_type.name} slot of {target.owner.__name__ if target.owner else '?'}"
        )


def copy_field(
    field: FieldDescriptor,
    source: Any,
    destination: Any,
    destination_fields: dict[str, FieldDescriptor] | None = None,
) -> bool:
    """Copy one field from source to destination.

    Null and immutable source fields are skipped. Otherwise the field's declared
    type is classified and the matching copy strategy applied.

    Args:
        field: Source field to copy.
        source: Source record.
        destination: Destination record.
        destination_fields: Pre-computed destination fields by name.

    Returns:
        True if the field was skipped, False if it was written.

    Raises:
        NoSuchFieldError: If destination has no field of that name.
        TypeMismatchError: If the destination slot cannot hold the value.
        AccessError: If the destination refuses the write.
    """
    value = getattr(source, field.name, None)
    if value is None or field.immutable:
        logger.debug(
            "Skipping %s.%s (%s)",
            type(source).__name__,
            field.name,
            "immutable" if field.immutable else "None",
        )
        return True

    if destination_fields is None:
        destination_fields = {f.name: f for f in get_record_fields(destination)}
    target = destination_fields.get(field.name)
    if target is None:
        raise NoSuchFieldError(f"{type(destination).__name__} has no field {field.name!r}")

    if field.declared_type is not None:
        class_type = classify(field.declared_type)
    else:
        class_type = classify_value(value)
    _check_slot(class_type, field, target)

    strategy = class_type.get_strategy()
    write_field(destination, field.name, strategy(value, unwrap_declared(target.declared_type)))
    return False


def copy_record(source: S, destination: D | None = None, ignore_names: Iterable[str] = ()) -> D:
    """Copy every field of source onto destination.

    Immutable scalars (str, bytes, numbers) are returned as-is: they copy by
    value. Fields named in ignore_names, None-valued fields and immutable fields
    are skipped and keep whatever value destination already had.

    Args:
        source: Record to copy from.
        destination: Record to copy into. When None, a fresh instance of the
            source's type is created without running its initializer.
        ignore_names: Field names never read or written.

    Returns:
        The destination record.

    Raises:
        TypeError: If source is None.
        NoSuchFieldError: If destination lacks a copied field.
        TypeMismatchError: If a destination slot cannot hold the value.
        AccessError: If destination refuses a write.

    Note:
        A failure aborts the call; fields written before it are not rolled back.
    """
    if source is None:
        raise TypeError("copy_record() source must not be None")
    if isinstance(source, _SCALAR_TYPES):
        return source  # type: ignore[return-value]

    ignored = ignore_set(ignore_names)
    if destination is None:
        destination = new_instance(type(source))  # type: ignore[assignment]
        # fresh instances have no instance attributes yet
        destination_fields = {f.name: f for f in get_record_fields(source, ignored)}
    else:
        destination_fields = {f.name: f for f in get_record_fields(destination)}
    for field in get_record_fields(source, ignored):
        copy_field(field, source, destination, destination_fields)
    return destination  # type: ignore[return-value]


def copy_properties_with_reflection(source: S, ignore_names: Iterable[str] = ()) -> S:
    """Create a new instance of source's type holding the same field values.

    Unlike copy_record(), every field is copied verbatim: None values and
    immutable fields included, no classification applied.

    Args:
        source: Record to copy.
        ignore_names: Field names left at their default on the new instance.

    Returns:
        New record of the same type.
    """
    if source is None:
        raise TypeError("copy_properties_with_reflection() source must not be None")
    destination = new_instance(type(source))
    for field in get_record_fields(source, ignore_set(ignore_names)):
        write_field(destination, field.name, getattr(source, field.name, None), force=True)
    return destination


def copy_property_with_reflection(source: S, destination: D, field_name: str) -> D:
    """Copy a single named field value from source to destination.

    Args:
        source: Record to read.
        destination: Record to write.
        field_name: Field to copy.

    Returns:
        The destination record.

    Raises:
        NoSuchFieldError: If either side lacks the field.
        AccessError: If destination refuses the write.
    """
    for side, obj in (("source", source), ("destination", destination)):
        if field_name not in {f.name for f in get_record_fields(obj)}:
            raise NoSuchFieldError(f"{side} {type(obj).__name__} has no field {field_name!r}")
    write_field(destination, field_name, getattr(source, field_name, None))
    return destination

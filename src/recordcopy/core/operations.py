"""Pure functions for duplicating field values.

These are stateless functions implementing the copy action of each ClassType:
shallow reference copy, array duplication and canonical enum resolution.
"""

from __future__ import annotations

import array
from enum import Enum
from typing import Any, TypeVar, cast

import numpy

from recordcopy.core.errors import TypeMismatchError

T = TypeVar("T")


# Duplicators


def copy_of_array(value: Any) -> Any:
    """Duplicate a fixed-size array.

    Arrays of primitive element kinds are copied by value. Object arrays get a
    new array whose slots reference the same elements as the source; elements
    themselves are not cloned.

    Args:
        value: array.array or numpy.ndarray to duplicate.

    Returns:
        New array with the same type code/dtype, shape and element order, or None
        if value is not an array.
    """
    if isinstance(value, array.array):
        return array.array(value.typecode, value)
    if isinstance(value, numpy.ndarray):
        # object dtype copies slot references, other dtypes copy element values
        return value.copy(order="K")
    return None


def copy_of_enum_value(value: Enum | str, declared_type: Any) -> Enum | None:
    """Resolve the canonical member of declared_type sharing value's name.

    Args:
        value: Enum member (any enum type) or member name.
        declared_type: Enum class to resolve the member in.

    Returns:
        The shared member of declared_type, or None if declared_type is not an Enum.

    Raises:
        TypeMismatchError: If declared_type has no member of that name.
    """
    if not (isinstance(declared_type, type) and issubclass(declared_type, Enum)):
        return None
    name = value.name if isinstance(value, Enum) else value
    try:
        return declared_type.__members__[name]
    except (KeyError, TypeError) as e:
        raise TypeMismatchError(f"{declared_type.__name__} has no member named {name!r}") from e


# Copy strategies, one per ClassType group


def copy_by_reference(value: T, declared_type: Any) -> T:
    """Shallow copy: the value itself is assigned.

    Args:
        value: Source value.
        declared_type: Declared type of the destination slot (ignored).

    Returns:
        The same value.
    """
    return value


def copy_array_strategy(value: Any, declared_type: Any) -> Any:
    """Array copy: a fresh array, shallow per reference element.

    Raises:
        TypeMismatchError: If value is not an array.
    """
    duplicate = copy_of_array(value)
    if duplicate is None:
        raise TypeMismatchError(f"Expected an array, got {type(value).__name__}")
    return duplicate


def copy_enum_strategy(value: Any, declared_type: Any) -> Enum:
    """Enum copy: the canonical member of declared_type with the same name.

    Raises:
        TypeMismatchError: If value is not an enum member or cannot be resolved.
    """
    if not isinstance(value, Enum):
        raise TypeMismatchError(f"Expected an enum member, got {type(value).__name__}")
    if not (isinstance(declared_type, type) and issubclass(declared_type, Enum)):
        declared_type = type(value)
    return cast(Enum, copy_of_enum_value(value, declared_type))

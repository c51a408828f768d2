"""Type classification: maps a declared type to the ClassType driving its copy action."""

from __future__ import annotations

import array
import inspect
import sys
import types
from collections.abc import Collection, Mapping
from enum import Enum
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    NewType,
    ParamSpec,
    Protocol,
    TypeAliasType,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

import numpy

from recordcopy.core.record.models import ClassType

_PRIMITIVE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    type(None),
    numpy.generic,
)
_ARRAY_TYPES: tuple[type, ...] = (array.array, numpy.ndarray)
_SYNTHETIC_TYPES: tuple[type, ...] = (TypeVar, NewType, ParamSpec)


def _is_interface(cls: type) -> bool:
    return Protocol in cls.__bases__ or inspect.isabstract(cls)


def _is_anonymous(cls: type) -> bool:
    """Class that cannot be found again through its module and qualified name."""
    target: Any = sys.modules.get(cls.__module__)
    for part in cls.__qualname__.split("."):
        target = getattr(target, part, None)
        if target is None:
            return True
    return target is not cls


def unwrap_declared(declared_type: Any) -> Any:
    """Strip Final, ClassVar, Optional and type alias wrappers from a declared type."""
    if isinstance(declared_type, TypeAliasType):
        return unwrap_declared(declared_type.__value__)
    origin = get_origin(declared_type)
    if origin in (Final, ClassVar):
        args = get_args(declared_type)
        return unwrap_declared(args[0]) if args else None
    if origin in (Union, types.UnionType):
        members = [a for a in get_args(declared_type) if a is not type(None)]
        if len(members) == 1:
            return unwrap_declared(members[0])
    return declared_type


def classify(declared_type: Any) -> ClassType:
    """Classify a declared type.

    Args:
        declared_type: Type hint or class; None when the member is undeclared.

    Returns:
        The ClassType category of the type.
    """
    if declared_type is None or declared_type is Any:
        return ClassType.DEFAULT

    declared_type = unwrap_declared(declared_type)
    origin = get_origin(declared_type)
    # type aliases (npt.NDArray[...], `type X = ...`) classify as their value
    if isinstance(origin, TypeAliasType):
        return classify(origin.__value__)
    if declared_type is None or declared_type is Any or origin in (Union, types.UnionType):
        return ClassType.DEFAULT
    if origin is Annotated:
        return ClassType.ANNOTATION
    if isinstance(declared_type, _SYNTHETIC_TYPES):
        return ClassType.SYNTHETIC

    cls = origin if origin is not None else declared_type
    if not isinstance(cls, type):
        return ClassType.DEFAULT
    if issubclass(cls, _ARRAY_TYPES):
        return ClassType.ARRAY
    if issubclass(cls, Enum):
        return ClassType.ENUM
    if issubclass(cls, _PRIMITIVE_TYPES):
        return ClassType.PRIMITIVE
    if issubclass(cls, Mapping):
        return ClassType.MAP
    if issubclass(cls, Collection):
        return ClassType.COLLECTION
    if _is_interface(cls):
        return ClassType.INTERFACE
    if "<locals>" in cls.__qualname__:
        return ClassType.LOCAL
    if _is_anonymous(cls):
        return ClassType.ANONYMOUS
    if "." in cls.__qualname__:
        return ClassType.MEMBER
    return ClassType.DEFAULT


def classify_value(value: Any) -> ClassType:
    """Classify the runtime type of a value."""
    return classify(type(value))

"""Record models: descriptors, type categories, and capability protocols.

Capability protocols are optional interfaces a record type can implement to
describe its own shape instead of relying on introspection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

type CopyStrategy = Callable[[Any, Any], Any]
"""Copy action applied to a field value: (value, declared_type) -> new value."""


class ClassType(Enum):
    """Category of a declared type; decides how a field value is copied."""

    PRIMITIVE = auto()  # bool, int, float, str, bytes, ...
    ARRAY = auto()  # array.array, numpy.ndarray
    ENUM = auto()
    MAP = auto()
    COLLECTION = auto()
    INTERFACE = auto()  # Protocol or abstract base class
    ANNOTATION = auto()  # typing.Annotated[...]
    ANONYMOUS = auto()  # built with type(), not importable by name
    LOCAL = auto()  # defined inside a function
    MEMBER = auto()  # nested in another class
    SYNTHETIC = auto()  # TypeVar, NewType, ParamSpec
    DEFAULT = auto()

    def get_strategy(self) -> CopyStrategy:
        """Get the copy function for this category.

        Returns:
            Pure function implementing the copy action.
        """
        # Late import to avoid circular dependency
        from recordcopy.core import operations

        if self is ClassType.ARRAY:
            return operations.copy_array_strategy
        if self is ClassType.ENUM:
            return operations.copy_enum_strategy
        return operations.copy_by_reference


@dataclass(slots=True, frozen=True)
class FieldDescriptor:
    """A named field of a record type.

    Attributes:
        name: Attribute name.
        declared_type: Resolved type hint, or None when the field is undeclared.
        immutable: True for frozen, Final or otherwise read-only fields.
        owner: Class that declares the field.
    """

    name: str
    declared_type: Any = None
    immutable: bool = False
    owner: type | None = None


@dataclass(slots=True, frozen=True)
class PropertyDescriptor:
    """A named accessor pair of a record type.

    Attributes:
        name: Property name.
        reader: Callable returning the value for an instance, None if write-only.
        writer: Callable storing a value on an instance, None if read-only.
        declared_type: Resolved type hint, or None when unknown.
    """

    name: str
    reader: Callable[[Any], Any] | None = None
    writer: Callable[[Any, Any], None] | None = None
    declared_type: Any = None

    @property
    def readable(self) -> bool:
        return self.reader is not None

    @property
    def writable(self) -> bool:
        return self.writer is not None


@dataclass(slots=True, frozen=True)
class RecordTypeMeta:
    """Metadata for registered record types."""

    type_name: str
    factory: Callable[[], Any] | None = None


@runtime_checkable
class Cloneable(Protocol):
    """Record type that lists its own copyable fields."""

    @classmethod
    def __record_fields__(cls) -> Iterable[FieldDescriptor]: ...


@runtime_checkable
class PropertyEnumerable(Protocol):
    """Record type that lists its own readable/writable properties."""

    @classmethod
    def __record_properties__(cls) -> Iterable[PropertyDescriptor]: ...

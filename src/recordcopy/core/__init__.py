"""Core functionalities: stateless record models, introspection and duplicators.

Architecture Note:
    core/ contains pure, stateless building blocks with no runtime state mutation
    beyond class registration at import time. The copy paths live in copier/,
    snapshot/ and serialization/.
"""

from recordcopy.core.errors import (
    AccessError,
    CopyError,
    DecodeError,
    NoSuchFieldError,
    NoSuchPropertyError,
    NotSerializableError,
    TypeMismatchError,
)
from recordcopy.core.operations import copy_of_array, copy_of_enum_value
from recordcopy.core.record import (
    ClassType,
    Cloneable,
    FieldDescriptor,
    PropertyDescriptor,
    PropertyEnumerable,
    RecordRegistry,
    classify,
    classify_value,
    get_all_declared_field_names,
    get_all_declared_fields,
    get_property_descriptors,
    get_record_fields,
    get_record_properties,
    get_registry,
    new_instance,
    record,
    resolve_type,
    type_name_of,
)
from recordcopy.core.types import Shared

__all__ = [
    # Types
    "Shared",
    # Errors
    "CopyError",
    "AccessError",
    "NoSuchFieldError",
    "NoSuchPropertyError",
    "NotSerializableError",
    "TypeMismatchError",
    "DecodeError",
    # Record
    "record",
    "get_registry",
    "RecordRegistry",
    "new_instance",
    "resolve_type",
    "type_name_of",
    "ClassType",
    "FieldDescriptor",
    "PropertyDescriptor",
    "Cloneable",
    "PropertyEnumerable",
    "classify",
    "classify_value",
    "get_all_declared_fields",
    "get_all_declared_field_names",
    "get_record_fields",
    "get_property_descriptors",
    "get_record_properties",
    # Duplicators
    "copy_of_array",
    "copy_of_enum_value",
]

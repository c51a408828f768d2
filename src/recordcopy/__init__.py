"""recordcopy: classification-driven copying, snapshots and deep clones of records.

Usage:
    from recordcopy import copy_record, to_snapshot_string, from_snapshot_string, clone_deep

    @dataclass
    class Person:
        gender: Gender | None = None
        name: str | None = None
        tags: list[str] = field(default_factory=list)

    twin = copy_record(person)                    # shallow: twin.tags is person.tags
    token = to_snapshot_string(person)            # opaque, deterministic
    again = from_snapshot_string(token, Person)   # == person
    independent = clone_deep(person)              # nothing shared
"""

import logging

__version__ = "0.1.0"

# Configuration
from recordcopy.config import CopySettings, get_settings

# Copiers
from recordcopy.copier import (
    copy_field,
    copy_properties,
    copy_properties_with_reflection,
    copy_property,
    copy_property_with_reflection,
    copy_record,
)

# Core primitives
from recordcopy.core import (
    AccessError,
    ClassType,
    Cloneable,
    CopyError,
    DecodeError,
    FieldDescriptor,
    NoSuchFieldError,
    NoSuchPropertyError,
    NotSerializableError,
    PropertyDescriptor,
    PropertyEnumerable,
    Shared,
    TypeMismatchError,
    classify,
    copy_of_array,
    copy_of_enum_value,
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

# Deep clone
from recordcopy.serialization import clone_deep, from_bytes, to_bytes

# Snapshots
from recordcopy.snapshot import (
    StructuredCodec,
    TaggedJsonCodec,
    decode,
    encode,
    from_property_map,
    from_snapshot_string,
    to_property_map,
    to_snapshot_string,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core
    "record",
    "get_registry",
    "new_instance",
    "resolve_type",
    "type_name_of",
    "classify",
    "ClassType",
    "FieldDescriptor",
    "PropertyDescriptor",
    "Cloneable",
    "PropertyEnumerable",
    "Shared",
    "get_all_declared_fields",
    "get_all_declared_field_names",
    "get_record_fields",
    "get_property_descriptors",
    "get_record_properties",
    "copy_of_array",
    "copy_of_enum_value",
    # Errors
    "CopyError",
    "AccessError",
    "NoSuchFieldError",
    "NoSuchPropertyError",
    "NotSerializableError",
    "TypeMismatchError",
    "DecodeError",
    # Copiers
    "copy_record",
    "copy_field",
    "copy_properties_with_reflection",
    "copy_property_with_reflection",
    "copy_properties",
    "copy_property",
    # Snapshots
    "to_property_map",
    "from_property_map",
    "StructuredCodec",
    "TaggedJsonCodec",
    "encode",
    "decode",
    "to_snapshot_string",
    "from_snapshot_string",
    # Deep clone
    "clone_deep",
    "to_bytes",
    "from_bytes",
    # Configuration
    "CopySettings",
    "get_settings",
]

"""Record functionality: models, registry, introspection, and classification."""

from recordcopy.core.record.classify import classify, classify_value, unwrap_declared
from recordcopy.core.record.core import (
    RecordRegistry,
    get_registry,
    new_instance,
    record,
    resolve_type,
    type_name_of,
)
from recordcopy.core.record.introspection import (
    accepts_attributes,
    get_all_declared_field_names,
    get_all_declared_fields,
    get_property_descriptors,
    get_record_fields,
    get_record_properties,
    ignore_set,
    is_pydantic,
)
from recordcopy.core.record.models import (
    ClassType,
    Cloneable,
    FieldDescriptor,
    PropertyDescriptor,
    PropertyEnumerable,
    RecordTypeMeta,
)

__all__ = [
    # Models
    "ClassType",
    "FieldDescriptor",
    "PropertyDescriptor",
    "RecordTypeMeta",
    "Cloneable",
    "PropertyEnumerable",
    # Registry
    "record",
    "get_registry",
    "RecordRegistry",
    "new_instance",
    "resolve_type",
    "type_name_of",
    # Introspection
    "accepts_attributes",
    "get_all_declared_fields",
    "get_all_declared_field_names",
    "get_record_fields",
    "get_property_descriptors",
    "get_record_properties",
    "is_pydantic",
    "ignore_set",
    # Classification
    "classify",
    "classify_value",
    "unwrap_declared",
]

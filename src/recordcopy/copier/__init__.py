"""Field- and property-level copiers."""

from recordcopy.copier.fields import (
    copy_field,
    copy_properties_with_reflection,
    copy_property_with_reflection,
    copy_record,
)
from recordcopy.copier.properties import copy_properties, copy_property

__all__ = [
    # Field copier
    "copy_record",
    "copy_field",
    "copy_properties_with_reflection",
    "copy_property_with_reflection",
    # Property-path copier
    "copy_properties",
    "copy_property",
]

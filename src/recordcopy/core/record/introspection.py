"""Field and property introspection for records of any supported shape.

Supported shapes, in lookup order:
    - classes implementing Cloneable / PropertyEnumerable
    - standard-library dataclasses
    - Pydantic models
    - plain classes (annotations along the MRO, __slots__, instance attributes)
"""

from __future__ import annotations

import dataclasses
import inspect
import operator
from collections.abc import Callable, Iterable
from typing import Any, ClassVar, Final, get_origin, get_type_hints

from recordcopy.core.record.models import (
    Cloneable,
    FieldDescriptor,
    PropertyDescriptor,
    PropertyEnumerable,
)


def is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    if not isinstance(cls, type):
        return False
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def ignore_set(names: Iterable[str] | str | None) -> tuple[str, ...]:
    """Normalize ignore names to an ordered, de-duplicated tuple.

    A single string is one name, not a sequence of characters.
    """
    if names is None:
        return ()
    if isinstance(names, str):
        return (names,)
    return tuple(dict.fromkeys(names))


def is_synthetic(name: str) -> bool:
    """Dunder and framework-internal names are never treated as fields."""
    return (name.startswith("__") and name.endswith("__")) or name.startswith(
        ("__pydantic", "_abc_")
    )


def _is_final(hint: Any) -> bool:
    return hint is Final or get_origin(hint) is Final


def _is_classvar(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or get_origin(hint) is ClassVar


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved hints of cls, falling back to raw annotations when resolution fails.

    Unresolvable string annotations are kept as strings; callers treat them as
    undeclared.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError, AttributeError):
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def _declared(hint: Any) -> Any:
    return None if isinstance(hint, str) else hint


def _slot_names(klass: type) -> tuple[str, ...]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def _owner(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass) or name in _slot_names(klass):
            return klass
    return cls


def _dataclass_fields(cls: type, hints: dict[str, Any]) -> list[FieldDescriptor]:
    params = getattr(cls, "__dataclass_params__", None)
    frozen = bool(params is not None and params.frozen)
    result = []
    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        hint = hints.get(f.name, f.type)
        result.append(
            FieldDescriptor(
                name=f.name,
                declared_type=_declared(hint),
                immutable=frozen or _is_final(hint) or bool(f.metadata.get("final", False)),
                owner=_owner(cls, f.name),
            )
        )
    return result


def _pydantic_fields(cls: type) -> list[FieldDescriptor]:
    frozen = bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return [
        FieldDescriptor(
            name=name,
            declared_type=info.annotation,
            immutable=frozen or bool(info.frozen),
            owner=_owner(cls, name),
        )
        for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
    ]


def _plain_fields(cls: type, hints: dict[str, Any]) -> list[FieldDescriptor]:
    found: dict[str, FieldDescriptor] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        names = list(inspect.get_annotations(klass)) + list(_slot_names(klass))
        for name in names:
            hint = hints.get(name)
            if is_synthetic(name) or _is_classvar(hint):
                continue
            found[name] = FieldDescriptor(
                name=name,
                declared_type=_declared(hint),
                immutable=_is_final(hint),
                owner=klass,
            )
    return list(found.values())


def get_all_declared_fields(
    cls: type, ignore_names: Iterable[str] = ()
) -> tuple[FieldDescriptor, ...]:
    """Get every field declared by cls and its ancestors.

    Ancestor fields come first. Synthetic members (dunder names, ClassVars,
    framework internals) are excluded.

    Args:
        cls: Record class to inspect.
        ignore_names: Field names to leave out.

    Returns:
        Field descriptors in declaration order.
    """
    if issubclass(cls, Cloneable):
        fields = list(cls.__record_fields__())
    elif dataclasses.is_dataclass(cls):
        fields = _dataclass_fields(cls, _type_hints(cls))
    elif is_pydantic(cls):
        fields = _pydantic_fields(cls)
    else:
        fields = _plain_fields(cls, _type_hints(cls))
    ignored = set(ignore_set(ignore_names))
    return tuple(f for f in fields if f.name not in ignored and not is_synthetic(f.name))


def accepts_attributes(cls: type) -> bool:
    """Check if instances of cls take arbitrary public attributes.

    True for plain classes with an instance __dict__. Pydantic models, slotted
    classes and types describing their own shape through Cloneable or
    PropertyEnumerable do not.
    """
    if is_pydantic(cls) or issubclass(cls, Cloneable) or issubclass(cls, PropertyEnumerable):
        return False
    return any(
        "__slots__" not in vars(klass) or "__dict__" in _slot_names(klass)
        for klass in cls.__mro__
        if klass is not object
    )


def get_all_declared_field_names(cls: type, ignore_names: Iterable[str] = ()) -> tuple[str, ...]:
    """Names of get_all_declared_fields(cls, ignore_names)."""
    return tuple(f.name for f in get_all_declared_fields(cls, ignore_names))


def get_record_fields(obj: Any, ignore_names: Iterable[str] = ()) -> tuple[FieldDescriptor, ...]:
    """Get the fields of an instance: declared fields plus undeclared attributes.

    Plain classes often assign attributes only in __init__; those show up here
    with declared_type None.

    Args:
        obj: Record instance to inspect.
        ignore_names: Field names to leave out.

    Returns:
        Field descriptors, declared fields first.
    """
    ignored = set(ignore_set(ignore_names))
    cls = type(obj)
    fields = list(get_all_declared_fields(cls, ignored))
    known = {f.name for f in fields} | ignored
    if not is_pydantic(cls):
        for name in getattr(obj, "__dict__", {}):
            if name not in known and not is_synthetic(name):
                fields.append(FieldDescriptor(name=name, owner=cls))
    return tuple(fields)


def _setter(name: str) -> Callable[[Any, Any], None]:
    def write(obj: Any, value: Any) -> None:
        setattr(obj, name, value)

    return write


def _return_hint(fget: Callable[..., Any] | None) -> Any:
    if fget is None:
        return None
    try:
        return get_type_hints(fget).get("return")
    except (NameError, TypeError, AttributeError):
        return None


def _class_properties(cls: type) -> dict[str, PropertyDescriptor]:
    props: dict[str, PropertyDescriptor] = {}
    for field in get_all_declared_fields(cls):
        if field.name.startswith("_"):
            continue
        props[field.name] = PropertyDescriptor(
            name=field.name,
            reader=operator.attrgetter(field.name),
            writer=None if field.immutable else _setter(field.name),
            declared_type=field.declared_type,
        )
    for klass in reversed(cls.__mro__):
        # BaseModel's own properties (model_extra, ...) are framework state
        if klass.__module__.startswith("pydantic."):
            continue
        for name, attr in vars(klass).items():
            if not isinstance(attr, property) or name.startswith("_"):
                continue
            props[name] = PropertyDescriptor(
                name=name,
                reader=operator.attrgetter(name) if attr.fget is not None else None,
                writer=_setter(name) if attr.fset is not None else None,
                declared_type=_return_hint(attr.fget),
            )
    if is_pydantic(cls):
        for name, info in cls.model_computed_fields.items():  # type: ignore[attr-defined]
            props.setdefault(
                name,
                PropertyDescriptor(
                    name=name, reader=operator.attrgetter(name), declared_type=info.return_type
                ),
            )
    return props


def get_property_descriptors(cls: type) -> tuple[PropertyDescriptor, ...]:
    """Get the readable and writable properties of a record type.

    Fields are readable and, unless immutable, writable. Python properties are
    readable with a getter and writable with a setter. Names starting with an
    underscore are not properties.

    Args:
        cls: Record class to inspect.

    Returns:
        Property descriptors in declaration order.
    """
    if issubclass(cls, PropertyEnumerable):
        return tuple(cls.__record_properties__())
    return tuple(_class_properties(cls).values())


def get_record_properties(obj: Any) -> tuple[PropertyDescriptor, ...]:
    """Get the properties of an instance, including undeclared public attributes."""
    cls = type(obj)
    props = {p.name: p for p in get_property_descriptors(cls)}
    if not issubclass(cls, PropertyEnumerable):
        for field in get_record_fields(obj):
            if field.name not in props and not field.name.startswith("_"):
                props[field.name] = PropertyDescriptor(
                    name=field.name,
                    reader=operator.attrgetter(field.name),
                    writer=_setter(field.name),
                )
    return tuple(props.values())

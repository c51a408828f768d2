"""Record registry, decorator, and object creation.

Usage:
    @record
    @dataclass
    class Position:
        x: float
        y: float

    # With an explicit zero-argument factory:
    @record(factory=lambda: Account(owner="nobody"))
    class Account:
        def __init__(self, owner: str) -> None:
            self.owner = owner
"""

from __future__ import annotations

import dataclasses
import importlib
import inspect
import logging
import sys
import types
from collections.abc import Callable
from typing import Any, Union, get_args, get_origin, overload

from recordcopy.core.record.introspection import get_all_declared_fields, is_pydantic
from recordcopy.core.record.models import RecordTypeMeta

logger = logging.getLogger(__name__)


def type_name_of(cls: type) -> str:
    """Build the importable name of a class.

    Args:
        cls: Class to name.

    Returns:
        "module:qualname" string understood by resolve_type().
    """
    return f"{cls.__module__}:{cls.__qualname__}"


class RecordRegistry:
    """Process-local registry of record types and their factories.

    Types are registered at class-definition time; copy operations only read it.
    """

    def __init__(self) -> None:
        """Initialize empty record registry."""
        self._by_type: dict[type, RecordTypeMeta] = {}
        self._by_name: dict[str, type] = {}

    def register(self, cls: type, factory: Callable[[], Any] | None = None) -> RecordTypeMeta:
        """Register a record type and return its metadata.

        Args:
            cls: Record class to register.
            factory: Optional zero-argument callable producing a fresh instance.

        Returns:
            Record metadata including the type name.

        Raises:
            RuntimeError: If another class is already registered under the same name.
        """
        existing_meta = self._by_type.get(cls)
        if existing_meta is not None and (factory is None or factory is existing_meta.factory):
            return existing_meta

        type_name = type_name_of(cls)
        existing = self._by_name.get(type_name)
        if existing is not None and existing is not cls:
            raise RuntimeError(f"Record name collision: {cls} and {existing} share {type_name}")

        meta = RecordTypeMeta(type_name=type_name, factory=factory)
        self._by_type[cls] = meta
        self._by_name[type_name] = cls
        return meta

    def get_meta(self, cls: type) -> RecordTypeMeta | None:
        """Get metadata for a registered record type.

        Args:
            cls: Record class to look up.

        Returns:
            Record metadata if registered, None otherwise.
        """
        return self._by_type.get(cls)

    def get_type(self, type_name: str) -> type | None:
        """Get a registered record type by its name.

        Args:
            type_name: "module:qualname" name to look up.

        Returns:
            Record class if found, None otherwise.
        """
        return self._by_name.get(type_name)

    def is_registered(self, cls: type) -> bool:
        """Check if a type is registered as a record.

        Args:
            cls: Class to check.

        Returns:
            True if class is registered, False otherwise.
        """
        return cls in self._by_type


# Module-level registry instance
_registry = RecordRegistry()


def get_registry() -> RecordRegistry:
    """Access the global record registry.

    Returns:
        The process-local RecordRegistry instance.
    """
    return _registry


@overload
def record(cls: type) -> type: ...


@overload
def record(
    cls: None = None, *, factory: Callable[[], Any] | None = None
) -> Callable[[type], type]: ...


def record(
    cls: type | None = None, *, factory: Callable[[], Any] | None = None
) -> type | Callable[[type], type]:
    """Register a class as a record type.

    Supports three forms:
        @record                       # bare decorator
        @record()                     # parenthesized, no args
        @record(factory=make_thing)   # factory used by new_instance()

    Registration makes local or dynamically built classes resolvable by name when
    decoding snapshots, and lets a type supply its own construction logic.

    Args:
        cls: The class to register, or None if called with arguments.
        factory: Optional zero-argument callable returning a fresh instance.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If the decorated object is not a class.
    """

    def decorator(c: type) -> type:
        if not isinstance(c, type):
            raise TypeError(f"@record expects a class, got {c!r}")
        _registry.register(c, factory=factory)
        return c

    if cls is None:
        return decorator
    return decorator(cls)


def resolve_type(type_name: str, *, import_modules: bool = True) -> type:
    """Resolve a "module:qualname" name to a class.

    Registered types win; otherwise the module is looked up (and imported, if
    allowed) and the qualified name walked attribute by attribute.

    Args:
        type_name: Name produced by type_name_of().
        import_modules: Import the module when it is not loaded yet. Pass False
            for names coming from untrusted input.

    Returns:
        The resolved class.

    Raises:
        LookupError: If the name is malformed or does not resolve to a class.
    """
    registered = _registry.get_type(type_name)
    if registered is not None:
        return registered

    module_name, sep, qualname = type_name.partition(":")
    if not sep or not module_name or not qualname or "<locals>" in qualname:
        raise LookupError(f"Cannot resolve type name {type_name!r}")
    try:
        if import_modules:
            target: Any = importlib.import_module(module_name)
        else:
            target = sys.modules[module_name]
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError, KeyError) as e:
        raise LookupError(f"Cannot resolve type name {type_name!r}") from e
    if not isinstance(target, type):
        raise LookupError(f"{type_name!r} does not name a class")
    return target


def _zero_value(declared_type: Any) -> Any:
    """Zero value for a declared type: False, 0, 0.0, 0j, else None."""
    if get_origin(declared_type) in (Union, types.UnionType) and type(None) in get_args(
        declared_type
    ):
        return None
    for kind, zero in ((bool, False), (int, 0), (float, 0.0), (complex, 0j)):
        if declared_type is kind:
            return zero
    return None


def _has_class_default(cls: type, name: str) -> bool:
    attr = inspect.getattr_static(cls, name, dataclasses.MISSING)
    return attr is not dataclasses.MISSING and not isinstance(attr, types.MemberDescriptorType)


def _allocate(cls: type) -> Any:
    """Allocate an instance without running __init__ and fill declared fields."""
    if is_pydantic(cls):
        zeros = {
            name: _zero_value(info.annotation)
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
            if info.is_required()
        }
        return cls.model_construct(**zeros)  # type: ignore[attr-defined]

    instance = cls.__new__(cls)
    if dataclasses.is_dataclass(cls):
        hints = {f.name: f.declared_type for f in get_all_declared_fields(cls)}
        for f in dataclasses.fields(cls):
            if f.default is not dataclasses.MISSING:
                value = f.default
            elif f.default_factory is not dataclasses.MISSING:
                value = f.default_factory()
            else:
                value = _zero_value(hints.get(f.name))
            object.__setattr__(instance, f.name, value)
        return instance

    for field in get_all_declared_fields(cls):
        if not _has_class_default(cls, field.name):
            object.__setattr__(instance, field.name, _zero_value(field.declared_type))
    return instance


def new_instance[T](cls: type[T]) -> T:
    """Create a fresh instance of a record type without calling its initializer.

    A factory registered through @record takes precedence. Otherwise the instance
    is allocated directly and every declared field is set to its declared default,
    or to a zero value when it has none.

    Args:
        cls: Record class to instantiate.

    Returns:
        New instance of cls.

    Raises:
        TypeError: If cls is not a class or cannot be allocated without arguments.
    """
    if not isinstance(cls, type):
        raise TypeError(f"new_instance expects a class, got {cls!r}")
    meta = _registry.get_meta(cls)
    if meta is not None and meta.factory is not None:
        return meta.factory()  # type: ignore[no-any-return]
    logger.debug("Allocating %s without initializer", cls.__qualname__)
    return _allocate(cls)  # type: ignore[no-any-return]

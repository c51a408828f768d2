"""Error taxonomy shared by every copy path.

Every error derives from CopyError, and additionally from the builtin exception
a caller would naturally catch for that failure (AttributeError for missing
members, TypeError for shape problems, ValueError for malformed tokens).
"""

from __future__ import annotations


class CopyError(Exception):
    """Base class for all copy failures."""

    pass


class AccessError(CopyError):
    """Raised when a member exists but cannot be read or written."""

    pass


class NoSuchFieldError(CopyError, AttributeError):
    """Raised when a named field is absent on the source or destination."""

    pass


class NoSuchPropertyError(CopyError, AttributeError):
    """Raised when a named property is absent (or unusable) on one side."""

    pass


class NotSerializableError(CopyError, TypeError):
    """Raised when a node of the object graph cannot be serialized."""

    pass


class TypeMismatchError(CopyError, TypeError):
    """Raised when the destination slot cannot hold the classified value."""

    pass


class DecodeError(CopyError, ValueError):
    """Raised when a snapshot token or byte payload is malformed."""

    pass

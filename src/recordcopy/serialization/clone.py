"""Deep copies through a full pickle round trip.

Unlike copy_record(), nothing is shared with the source: every nested record,
array and collection element reachable from it is duplicated.

Usage:
    independent = clone_deep(employee)
    independent.person.name = "changed"   # employee.person is untouched
"""

from __future__ import annotations

import pickle  # nosec B403 - round-trips in-process objects only
from typing import Any, TypeVar

from recordcopy.config import CopySettings, get_settings
from recordcopy.core.errors import DecodeError, NotSerializableError

T = TypeVar("T")


def to_bytes(obj: Any, settings: CopySettings | None = None) -> bytes:
    """Serialize the whole object graph reachable from obj.

    Args:
        obj: Root of the graph.
        settings: Pickle protocol selection (process defaults when None).

    Returns:
        Pickled bytes.

    Raises:
        NotSerializableError: If any reachable node cannot be pickled.
    """
    protocol = (settings if settings is not None else get_settings()).pickle_protocol
    try:
        return pickle.dumps(obj, protocol=protocol)
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        raise NotSerializableError(f"Cannot serialize {type(obj).__name__}: {e}") from e


def from_bytes(data: bytes) -> Any:
    """Rebuild an object graph from to_bytes() output.

    Args:
        data: Pickled bytes produced by to_bytes().

    Returns:
        Freshly allocated object graph.

    Raises:
        DecodeError: If data is not a valid payload.
    """
    try:
        return pickle.loads(data)  # nosec B301 - payloads come from to_bytes() in-process
    except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, TypeError) as e:
        raise DecodeError(f"Cannot deserialize payload: {e}") from e


def clone_deep(source: T, settings: CopySettings | None = None) -> T:
    """Duplicate source and everything reachable from it.

    Args:
        source: Root of the graph to duplicate.
        settings: Pickle protocol selection (process defaults when None).

    Returns:
        Independent copy equal to source by value.

    Raises:
        NotSerializableError: If any reachable node cannot be pickled.
    """
    return from_bytes(to_bytes(source, settings))  # type: ignore[no-any-return]

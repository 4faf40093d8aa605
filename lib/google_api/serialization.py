"""
Request serialization for body (POST) requests.

Request objects are converted into JSON compatible structures with the
following rules:
    - only public attributes are serialized (dataclass fields with
      ``metadata={"json": False}`` are skipped)
    - attributes (and dict items) with None value are omitted
    - a value referencing an object which is already being serialized
      (reference loop) is skipped instead of raising
    - enums are serialized by value
"""

import dataclasses
import datetime
import logging
from enum import Enum
from typing import Any, Dict, Iterator, Set, Tuple

from lib import utils

logger = logging.getLogger(__name__)

_SKIP = object()


def _iterPublicAttrs(obj: Any) -> Iterator[Tuple[str, Any]]:
    if dataclasses.is_dataclass(obj):
        for field in dataclasses.fields(obj):
            # Fields marked with metadata={"json": False} are sent in query string only
            if not field.name.startswith("_") and field.metadata.get("json", True):
                yield field.name, getattr(obj, field.name, None)
        return

    names = []
    if hasattr(obj, "__dict__"):
        names.extend(vars(obj).keys())
    for cls in type(obj).__mro__[:-1]:
        slots = getattr(cls, "__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in names)

    for name in names:
        if not name.startswith("_"):
            yield name, getattr(obj, name, None)


def toJsonable(value: Any, _stack: Set[int] | None = None) -> Any:
    """Convert value into JSON compatible structure, dood!

    Returns module private ``_SKIP`` marker for values closing a reference loop,
    callers drop such values the same way as None.
    """
    if _stack is None:
        _stack = set()

    if value is None or isinstance(value, (bool, int, float, str)):
        # Enum subclasses of str/int are handled here as well
        return value.value if isinstance(value, Enum) else value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")

    valueId = id(value)
    if valueId in _stack:
        logger.debug(f"Reference loop detected for {type(value).__name__}, skipping")
        return _SKIP

    _stack.add(valueId)
    try:
        if isinstance(value, dict):
            ret: Dict[str, Any] = {}
            for k, v in value.items():
                converted = toJsonable(v, _stack)
                if converted is None or converted is _SKIP:
                    continue
                ret[str(k.value if isinstance(k, Enum) else k)] = converted
            return ret

        if isinstance(value, (list, tuple, set, frozenset)):
            return [item for item in (toJsonable(v, _stack) for v in value) if item is not _SKIP]

        ret = {}
        for name, attrValue in _iterPublicAttrs(value):
            converted = toJsonable(attrValue, _stack)
            if converted is None or converted is _SKIP:
                continue
            ret[name] = converted
        return ret
    finally:
        _stack.discard(valueId)


def serializeRequest(request: Any) -> bytes:
    """Serialize request into UTF-8 encoded JSON body."""
    data = toJsonable(request)
    if data is _SKIP:
        data = None
    return utils.jsonDumps(data).encode("utf-8")

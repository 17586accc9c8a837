"""Convert between plain Python values and property list trees."""

import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from plistxml.exceptions import PlistTypeError
from plistxml.types import (
    UINT64_MAX,
    Array,
    Boolean,
    Data,
    Date,
    Dict,
    Key,
    PlistNode,
    Real,
    String,
    UnsignedInt,
)

_logger = logging.getLogger("plistxml.convert")


def from_python(value: Any) -> PlistNode:
    """Build a tree from a Python value.

    Supported values are ``bool``, non-negative ``int``, ``float``, ``str``,
    ``bytes``, ``datetime``/``date``, lists, tuples, dicts with string keys,
    enums and Pydantic models. Existing nodes are returned unchanged.

    Raises:
        PlistTypeError: If the value (or anything inside it) has no
            property list representation

    Example:
        >>> tree = from_python({"name": "Alice", "tags": ["a", "b"]})
        >>> [child.type for child in tree]
        ['key', 'string', 'key', 'array']
    """
    if isinstance(value, PlistNode):
        return value

    elif isinstance(value, BaseModel):
        # Optional fields left unset have no representation
        return _mapping_to_dict(value.model_dump(exclude_none=True))

    elif isinstance(value, Enum):
        return from_python(value.value)

    elif isinstance(value, bool):
        return Boolean(value)

    elif isinstance(value, int):
        if value < 0 or value > UINT64_MAX:
            raise PlistTypeError(f"Integer {value} is outside the unsigned 64-bit range")
        return UnsignedInt(value)

    elif isinstance(value, float):
        return Real(value)

    elif isinstance(value, str):
        return String(value)

    elif isinstance(value, (bytes, bytearray)):
        return Data(bytes(value))

    elif isinstance(value, datetime):
        return Date.from_datetime(value)

    elif isinstance(value, date):
        return Date.from_datetime(datetime(value.year, value.month, value.day, tzinfo=timezone.utc))

    elif isinstance(value, dict):
        return _mapping_to_dict(value)

    elif isinstance(value, (list, tuple)):
        return Array([from_python(item) for item in value])

    raise PlistTypeError(f"Cannot represent {type(value).__name__} in a property list")


def _mapping_to_dict(mapping: dict) -> Dict:
    node = Dict()
    for key, item in mapping.items():
        if not isinstance(key, str):
            raise PlistTypeError(f"Dictionary keys must be str, got {type(key).__name__}")
        node.append(Key(key))
        node.append(from_python(item))
    return node


def to_python(node: PlistNode) -> Any:
    """Convert a tree to plain Python values.

    Dates become aware UTC datetimes, keys become ``str`` and a trailing key
    without a value maps to ``None``. Dictionary entries whose key is not a
    ``Key`` or ``String`` node are skipped. Containers are filled from an
    explicit stack, so any nesting depth converts.
    """
    if not isinstance(node, PlistNode):
        raise PlistTypeError(f"Expected PlistNode, got {type(node)}")

    stack: list[tuple[PlistNode, Any]] = []
    result = _convert_node(node, stack)
    while stack:
        container, target = stack.pop()
        if isinstance(container, Array):
            target.extend(_convert_node(child, stack) for child in container)
            continue
        for key, item in container.items():
            if not isinstance(key, (Key, String)):
                _logger.debug("Skipping dictionary entry keyed by <%s>", key.type)
                continue
            target[key.value] = None if item is None else _convert_node(item, stack)
    return result


def _convert_node(node: PlistNode, stack: list[tuple[PlistNode, Any]]) -> Any:
    """Convert a leaf, or queue a container and return its empty result."""
    if isinstance(node, (Boolean, UnsignedInt, Real, String, Key, Data)):
        return node.value

    elif isinstance(node, Date):
        return node.to_datetime()

    elif isinstance(node, (Array, Dict)):
        target = [] if isinstance(node, Array) else {}
        stack.append((node, target))
        return target

    raise PlistTypeError(f"Expected PlistNode, got {type(node)}")


def plist_to_pydantic(node: PlistNode, model_class: type[BaseModel]) -> BaseModel:
    """Validate a dictionary tree against a Pydantic model.

    Args:
        node: Root of the tree, must be a ``Dict``
        model_class: Pydantic model class to validate against

    Returns:
        Instance of model_class with data from the tree

    Raises:
        ValidationError: If the data doesn't match the model schema
        PlistTypeError: If the tree is not a dictionary
    """
    if not (isinstance(model_class, type) and issubclass(model_class, BaseModel)):
        raise TypeError(f"Expected Pydantic BaseModel class, got {model_class}")

    data = to_python(node)
    if not isinstance(data, dict):
        raise PlistTypeError(f"Expected a dict at the root, got {node.type}")
    return model_class(**data)

"""JSON value model shared by the differ, masker and renderer."""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any


class JsonKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> JsonKind:
    """
    Classify a parsed JSON value.

    ``bool`` is checked before numbers since it subclasses ``int``.

    Raises:
        TypeError: if the value is not part of the JSON model
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def deep_copy(value: Any) -> Any:
    """Create a private, mutable copy of a JSON tree."""
    return copy.deepcopy(value)

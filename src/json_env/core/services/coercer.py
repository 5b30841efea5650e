from __future__ import annotations

"""
Value Coercion Service.

Converts JSON values into their environment-variable string form. Strings
lose their quotes; every other kind keeps its JSON text, so structured
values stay inspectable by the child process.
"""

import json
import math
from enum import Enum
from typing import Any, Callable, Dict


class JsonKind(Enum):
    """The closed set of JSON value kinds."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


def classify(value: Any) -> JsonKind:
    """
    Determine the JSON kind of a parsed value.

    bool is tested before numbers because it subclasses int.

    Raises:
        TypeError: If the value is not a JSON value.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def to_json_text(value: Any) -> str:
    """Serialize a value as compact JSON (no spaces, UTF-8 preserved)."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _render_number(value: Any) -> str:
    if isinstance(value, float) and not math.isfinite(value):
        raise TypeError(f"Not a JSON number: {value!r}")
    return to_json_text(value)


_RENDERERS: Dict[JsonKind, Callable[[Any], str]] = {
    JsonKind.STRING: str,
    JsonKind.NUMBER: _render_number,
    JsonKind.BOOLEAN: lambda v: "true" if v else "false",
    JsonKind.NULL: lambda _v: "null",
    JsonKind.ARRAY: to_json_text,
    JsonKind.OBJECT: to_json_text,
}


def coerce(value: Any) -> str:
    """
    Convert a JSON value to its environment string.

    Examples:
        "foo" -> foo, 1.5 -> 1.5, true -> true, null -> null,
        [1, "a"] -> [1,"a"], {"a": 1} -> {"a":1}

    Args:
        value: Parsed JSON value.

    Returns:
        str: Environment representation.
    """
    return _RENDERERS[classify(value)](value)

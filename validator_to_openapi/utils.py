"""
Utility functions for the OpenAPI schema generator.
"""

from __future__ import annotations

import datetime
import decimal
import enum
from typing import Any, Callable


class _Undefined:
    """Marker for a value that is absent, as opposed to ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

# Minimal canonical input per declared OpenAPI type, used to probe transform
# functions. A deliberate approximation: one sample value per type.
PROBE_FACTORIES: dict[str, Callable[[], Any]] = {
    "integer": int,
    "number": int,
    "string": str,
    "boolean": bool,
    "object": dict,
    "null": lambda: None,
    "array": list,
}


def probe_value(type_name: Any) -> Any:
    """Return a fresh probe value for a declared type, or UNDEFINED."""
    factory = PROBE_FACTORIES.get(type_name) if isinstance(type_name, str) else None
    if factory is None:
        return UNDEFINED
    return factory()


def runtime_type(value: Any) -> str:
    """Map a Python value to the name of its OpenAPI runtime type.

    Examples:
        True -> "boolean"
        3 -> "number"
        "a" -> "string"
        None -> "null"
        UNDEFINED -> "undefined"

    Args:
        value: Any Python value

    Returns:
        One of "boolean", "number", "string", "null", "object", "array", "undefined"
    """
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, enum.Enum):
        return runtime_type(value.value)
    # bool must come before int: bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, decimal.Decimal)):
        return "number"
    if isinstance(value, (str, datetime.date)):
        return "string"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"

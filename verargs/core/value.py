"""In-memory value model shared by schemas and recovered arguments."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Union

Value = Union[None, bool, int, float, str, List["Value"], Dict[str, "Value"]]

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ValueKind(str, Enum):
    """Runtime tag of a value."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"
    OBJECT = "object"


def kind_of(value: Any) -> Optional[ValueKind]:
    """Return the tag of ``value``; ``None`` when it is outside the value model."""
    if value is None:
        return ValueKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.OBJECT
    return None


class PropertyType(str, Enum):
    """Declared type of a schema property."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Any) -> "PropertyType":
        if not isinstance(raw, str):
            return cls.UNKNOWN
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    def accepts(self, kind: Optional[ValueKind]) -> bool:
        """Whether a value tagged ``kind`` already has this declared type."""
        if self is PropertyType.UNKNOWN:
            return True
        return kind in _ACCEPTED_KINDS[self]


_ACCEPTED_KINDS = {
    PropertyType.STRING: {ValueKind.STRING},
    PropertyType.INTEGER: {ValueKind.INT},
    PropertyType.NUMBER: {ValueKind.INT, ValueKind.FLOAT},
    PropertyType.BOOLEAN: {ValueKind.BOOL},
    PropertyType.ARRAY: {ValueKind.LIST},
    PropertyType.OBJECT: {ValueKind.OBJECT},
}


def is_boolean_literal(text: str) -> bool:
    return text.lower() in ("true", "false")


def is_integer_literal(text: str) -> bool:
    return _INTEGER_RE.fullmatch(text) is not None


def is_number_literal(text: str) -> bool:
    return _NUMBER_RE.fullmatch(text) is not None


def strip_quotes(text: str) -> str:
    """Remove one layer of surrounding double quotes."""
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text

"""Schema-driven conversion of raw strings into typed values."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from verargs.core.schema import ParameterSchema
from verargs.core.value import (
    PropertyType,
    Value,
    is_boolean_literal,
    is_integer_literal,
    is_number_literal,
    kind_of,
    strip_quotes,
)

from .scanner import scan_pairs

Declared = Union[PropertyType, ParameterSchema, str, None]

# array nesting levels converted before the remainder is kept as text
MAX_NESTING = 32


def auto_detect(text: str) -> Value:
    """Infer a scalar: boolean, then integer, then float, then the string itself."""
    if is_boolean_literal(text):
        return text.lower() == "true"
    if is_integer_literal(text):
        return int(text)
    if is_number_literal(text):
        return float(text)
    return text


def _declared_type(declared: Declared) -> Optional[PropertyType]:
    """None when no type is declared; UNKNOWN when one is declared but not recognised."""
    if isinstance(declared, PropertyType):
        return declared
    raw = declared.type if isinstance(declared, ParameterSchema) else declared
    return None if raw is None else PropertyType.parse(raw)


def _strip_brackets(text: str, opener: str, closer: str) -> str:
    if text.startswith(opener) and text.endswith(closer) and len(text) >= 2:
        return text[1:-1]
    return text


def _split_top_level(text: str) -> List[str]:
    """Split on commas that are not nested inside brackets, braces or quotes."""
    parts: List[str] = []
    depth = 0
    in_quotes = False
    current: List[str] = []
    for ch in text:
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes:
            if ch in "[{":
                depth += 1
            elif ch in "]}" and depth > 0:
                depth -= 1
            elif ch == "," and depth == 0:
                parts.append("".join(current))
                current = []
                continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def _detect_element(text: str, depth: int) -> Value:
    item = strip_quotes(text.strip())
    # deeper nesting stays a string
    if depth >= MAX_NESTING:
        return item
    if item.startswith("[") and item.endswith("]"):
        return parse_array(item, depth)
    if item.startswith("{") and item.endswith("}"):
        return parse_object(item)
    return auto_detect(item)


def parse_array(text: str, depth: int = 0) -> List[Value]:
    inner = _strip_brackets(text.strip(), "[", "]")
    if not inner.strip():
        return []
    return [_detect_element(part, depth + 1) for part in _split_top_level(inner)]


def parse_object(text: str) -> Dict[str, Value]:
    inner = _strip_brackets(text.strip(), "{", "}")
    result: Dict[str, Value] = {}
    for key, value in scan_pairs(inner):
        result[strip_quotes(key.strip())] = auto_detect(strip_quotes(value.strip()))
    return result


def coerce_value(raw: str, declared: Declared = None) -> Value:
    """
    Convert ``raw`` to the declared type.

    Never raises: anything that does not convert comes back as the trimmed,
    quote-stripped string. Without a declared type the value is auto-detected;
    a declared type that is not recognised keeps the string.
    """
    text = strip_quotes((raw or "").strip())
    if not text.strip():
        return text

    ptype = _declared_type(declared)
    if ptype is PropertyType.STRING:
        return text
    if ptype is PropertyType.INTEGER:
        return int(text) if is_integer_literal(text) else text
    if ptype is PropertyType.NUMBER:
        return float(text) if is_number_literal(text) else text
    if ptype is PropertyType.BOOLEAN:
        return text.lower() == "true" if is_boolean_literal(text) else text
    if ptype is PropertyType.ARRAY:
        return parse_array(text)
    if ptype is PropertyType.OBJECT:
        return parse_object(text)
    if ptype is None:
        return auto_detect(text)
    return text


def fix_value(value: Any, schema: Optional[ParameterSchema]) -> Any:
    """Repair an already-decoded value: only strings of the wrong type are converted."""
    if value is None or schema is None:
        return value
    ptype = schema.property_type
    if ptype is PropertyType.UNKNOWN or ptype.accepts(kind_of(value)):
        return value
    if isinstance(value, str):
        return coerce_value(value, ptype)
    return value

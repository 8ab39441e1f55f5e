"""Placeholder values for required fields the model left out."""

from __future__ import annotations

from typing import Optional

from verargs.core.schema import ParameterSchema
from verargs.core.value import PropertyType, Value

DEFAULT_PLACEHOLDER = "默认值"

# (name cues, placeholder), first cue found in the lowercased field name wins
_STRING_HINTS = (
    (("text", "content"), "默认文本内容"),
    (("desc",), "默认描述"),
    (("name",), "默认名称"),
    (("id",), "default_id"),
    (("url",), "https://example.com"),
)


def default_string(field_name: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    lowered = field_name.lower()
    for cues, text in _STRING_HINTS:
        if any(cue in lowered for cue in cues):
            return text
    return placeholder


def default_value(field_name: str, schema: Optional[ParameterSchema], placeholder: str = DEFAULT_PLACEHOLDER) -> Value:
    """Synthesize a value of the declared type; untyped fields get the placeholder."""
    ptype = schema.property_type if schema is not None else PropertyType.UNKNOWN
    if ptype is PropertyType.STRING:
        return default_string(field_name, placeholder)
    if ptype is PropertyType.INTEGER:
        return 0
    if ptype is PropertyType.NUMBER:
        return 0.0
    if ptype is PropertyType.BOOLEAN:
        return False
    if ptype is PropertyType.ARRAY:
        return []
    if ptype is PropertyType.OBJECT:
        return {}
    return placeholder

"""Parameter repair: tolerant extraction and schema-guided fixing."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from loguru import logger as log

from verargs.core.schema import ParameterSchema
from verargs.core.value import strip_quotes

from .cleaner import clean_json
from .coercer import coerce_value, fix_value
from .matcher import KeyMatcher
from .scanner import scan_pairs


class ArgumentsBuilder:
    """Accumulates a candidate mapping; ``build`` hands out an independent copy."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial or {})

    def put(self, key: str, value: Any) -> "ArgumentsBuilder":
        self._values[key] = value
        return self

    def setdefault_missing(self, key: str, value: Any) -> bool:
        """Set ``key`` when absent or null; returns whether it was filled."""
        if self._values.get(key) is None:
            self._values[key] = value
            return True
        return False

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def build(self) -> Dict[str, Any]:
        return dict(self._values)


def object_body(text: str) -> str:
    """Content between the first ``{`` and the last ``}``, or the whole text."""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first + 1 : last]
    return text


def extract_pairs(text: str) -> Iterator[Tuple[str, str]]:
    """Trimmed, quote-stripped ``(key, value)`` pairs salvaged from ``text``."""
    for key, value in scan_pairs(object_body(clean_json(text or ""))):
        yield strip_quotes(key.strip()), strip_quotes(value.strip())


class ParameterFixer:
    """Repairs candidate arguments against a tool's parameter schema."""

    def __init__(self, matcher: Optional[KeyMatcher] = None, logger=None):
        self.matcher = matcher or KeyMatcher()
        self.log = logger or log

    def _resolve_key(self, key: str, schema: ParameterSchema) -> Optional[str]:
        if key in schema.properties:
            return key
        return self.matcher.match(key, schema.property_names)

    def fix_parameters(self, arguments: Mapping[str, Any], schema: ParameterSchema, tool_name: str = "tool") -> Dict[str, Any]:
        """Map keys onto declared names and convert mistyped string values."""
        if not schema.properties:
            return dict(arguments)

        builder = ArgumentsBuilder()
        for key, value in arguments.items():
            matched = self._resolve_key(key, schema)
            if matched is None:
                builder.put(key, value)
                continue
            if matched != key:
                self.log.debug("Mapped parameter [{}] to [{}] for tool [{}]", key, matched, tool_name)
            builder.put(matched, fix_value(value, schema.property_schema(matched)))
        return builder.build()

    def extract(self, raw: str, schema: ParameterSchema, tool_name: str = "tool") -> Dict[str, Any]:
        """
        Salvage a flat mapping from text that is not JSON at all.

        Never raises on malformed input; the result may be empty. Keys with no
        declared counterpart are kept under their scanned name with an
        auto-detected value.
        """
        builder = ArgumentsBuilder()
        for key, value in extract_pairs(raw):
            matched = self._resolve_key(key, schema)
            if matched is not None:
                converted = coerce_value(value, schema.property_schema(matched))
                builder.put(matched, converted)
                self.log.debug("Extracted parameter [{}] -> [{}] = [{}]", key, matched, converted)
            else:
                converted = coerce_value(value)
                builder.put(key, converted)
                self.log.debug("Extracted unknown parameter [{}] = [{}]", key, converted)
        self.log.debug("Intelligent fix extracted {} parameters for tool [{}]", len(builder), tool_name)
        return builder.build()

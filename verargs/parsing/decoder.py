"""Strict JSON decoding into the value model."""

from __future__ import annotations

import json
from typing import Any, Dict

from verargs.core.exceptions import ParseError
from verargs.core.value import Value


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Non-standard JSON constant: {name}")


def decode_json(text: str) -> Value:
    """Decode ``text`` as standard JSON; any deviation raises ``ParseError``."""
    if not isinstance(text, str):
        raise ParseError(f"Expected a string, got {type(text).__name__}")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(exc.msg, exc.pos) from exc
    except RecursionError as exc:
        raise ParseError("JSON nesting too deep") from exc


def decode_object(text: str) -> Dict[str, Value]:
    """Like :func:`decode_json` but the top-level value must be an object."""
    value = decode_json(text)
    if not isinstance(value, dict):
        raise ParseError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def encode_json(value: Value) -> str:
    return json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))

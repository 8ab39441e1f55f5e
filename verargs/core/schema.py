"""Tool parameter schema models."""

from __future__ import annotations

import json
from typing import Any, Dict, FrozenSet, List, Optional, Type

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigException
from .value import PropertyType


class ParameterSchema(BaseModel):
    """
    JSON-Schema-like description of a tool's parameters.

    Only ``type``, ``properties``, ``items`` and ``required`` drive recovery;
    everything else a schema carries is ignored. Malformed fragments are
    normalized instead of rejected, a model-supplied schema is rarely tidy.
    """

    type: Optional[str] = None
    description: str = ""
    properties: Dict[str, ParameterSchema] = Field(default_factory=dict)
    items: Optional[ParameterSchema] = None
    required: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _collapse_union(cls, data: Any) -> Any:
        # Optional[X] from pydantic renders as anyOf [X, null]: keep the first concrete member
        if not isinstance(data, dict) or data.get("type") is not None:
            return data
        members = data.get("anyOf") or data.get("oneOf")
        if not isinstance(members, list):
            return data
        chosen = next(
            (m for m in members if isinstance(m, dict) and m.get("type") not in (None, "null")),
            None,
        )
        if chosen is None:
            return data
        outer = {k: v for k, v in data.items() if k not in ("anyOf", "oneOf", "type")}
        return {**chosen, **outer}

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Optional[str]:
        # ["string", "null"] style unions keep their first concrete member
        if isinstance(v, (list, tuple)):
            v = next((t for t in v if isinstance(t, str) and t != "null"), None)
        return v if isinstance(v, str) else None

    @field_validator("description", mode="before")
    @classmethod
    def _normalize_description(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("properties", mode="before")
    @classmethod
    def _normalize_properties(cls, v: Any) -> Dict[str, Any]:
        if not isinstance(v, dict):
            return {}
        return {str(name): (spec if isinstance(spec, (dict, ParameterSchema)) else {}) for name, spec in v.items()}

    @field_validator("items", mode="before")
    @classmethod
    def _normalize_items(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, ParameterSchema)) else None

    @field_validator("required", mode="before")
    @classmethod
    def _normalize_required(cls, v: Any) -> List[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [name for name in v if isinstance(name, str)]

    @property
    def property_type(self) -> PropertyType:
        return PropertyType.parse(self.type)

    @property
    def property_names(self) -> List[str]:
        return list(self.properties.keys())

    def property_schema(self, name: str) -> Optional["ParameterSchema"]:
        return self.properties.get(name)

    @classmethod
    def from_value(cls, obj: Any) -> "ParameterSchema":
        """Build a schema from a dict, a JSON string or an existing instance."""
        if isinstance(obj, ParameterSchema):
            return obj
        if obj is None:
            return cls()
        if isinstance(obj, str):
            try:
                obj = json.loads(obj)
            except json.JSONDecodeError as exc:
                raise ConfigException(f"Schema is not valid JSON: {exc}") from exc
        if not isinstance(obj, dict):
            raise ConfigException(f"Schema must be an object, got {type(obj).__name__}")
        try:
            return cls.model_validate(obj)
        except ValidationError as exc:
            raise ConfigException(f"Invalid schema: {exc}") from exc


ParameterSchema.model_rebuild()


def _inline_refs(node: Any, defs: Dict[str, Any], active: FrozenSet[str] = frozenset()) -> Any:
    """Replace local ``#/$defs/Name`` references with the definitions they point to."""
    if isinstance(node, list):
        return [_inline_refs(item, defs, active) for item in node]
    if not isinstance(node, dict):
        return node
    ref = node.get("$ref")
    if isinstance(ref, str) and ref.startswith("#/$defs/"):
        rest = {k: v for k, v in node.items() if k != "$ref"}
        name = ref[len("#/$defs/"):]
        target = defs.get(name)
        # a model that contains itself is cut off at the first repeat
        if name in active or not isinstance(target, dict):
            return _inline_refs(rest, defs, active)
        return _inline_refs({**target, **rest}, defs, active | {name})
    return {k: _inline_refs(v, defs, active) for k, v in node.items()}


class ToolInfo(BaseModel):
    """Identity and parameter schema of a callable tool."""

    name: str = "tool"
    description: str = ""
    parameters: ParameterSchema = Field(default_factory=ParameterSchema)

    @classmethod
    def from_openai_tool(cls, tool: Dict[str, Any]) -> "ToolInfo":
        """
        Accept either the OpenAI envelope ``{"type": "function", "function": {...}}``
        or the bare function dict.
        """
        fn = tool.get("function", tool) if isinstance(tool, dict) else None
        if not isinstance(fn, dict):
            raise ConfigException("OpenAI tool definition must be an object")
        return cls(
            name=fn.get("name") or "tool",
            description=fn.get("description") or "",
            parameters=ParameterSchema.from_value(fn.get("parameters")),
        )

    @classmethod
    def from_args_model(cls, name: str, args_model: Type[BaseModel], description: str = "") -> "ToolInfo":
        schema = args_model.model_json_schema()
        defs = schema.pop("$defs", {})
        schema.pop("title", None)
        schema = _inline_refs(schema, defs)
        return cls(
            name=name,
            description=description or (args_model.__doc__ or "").strip(),
            parameters=ParameterSchema.from_value(schema),
        )

    @classmethod
    def coerce(cls, tool: Any) -> "ToolInfo":
        """Normalize whatever the caller passed as a tool into a ``ToolInfo``."""
        if isinstance(tool, ToolInfo):
            return tool
        if isinstance(tool, ParameterSchema):
            return cls(parameters=tool)
        if isinstance(tool, dict):
            if "function" in tool or ("parameters" in tool and "name" in tool):
                return cls.from_openai_tool(tool)
            return cls(parameters=ParameterSchema.from_value(tool))
        raise ConfigException(f"Unsupported tool definition: {type(tool).__name__}")

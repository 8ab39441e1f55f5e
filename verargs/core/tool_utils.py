"""Shared helpers for tool argument parsing."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from .exceptions import ToolException
from .schema import ToolInfo
from verargs.parsing.parser import SmartArgumentsParser


def parse_tool_args(
    tool_name: str,
    args_model: Type[BaseModel],
    raw: Optional[str],
    parser: Any = None,
) -> Dict[str, Any]:
    """
    Recover raw tool arguments into a dict using the args model's JSON schema.

    Raises ExhaustedError when no recovery strategy yields usable arguments.
    """
    parser = parser or SmartArgumentsParser()
    info = ToolInfo.from_args_model(tool_name, args_model)
    return parser.parse_arguments(raw, info).arguments


def validate_with_model(tool_name: str, args_model: Type[BaseModel], arguments: Dict[str, Any]) -> BaseModel:
    """
    Validate recovered arguments against the tool's args model (lax mode).
    """
    try:
        return args_model.model_validate(arguments)
    except ValidationError as e:
        error_msgs = []
        for err in e.errors():
            loc = ".".join(str(l) for l in err["loc"])
            error_msgs.append(f"{loc}: {err['msg']}")
        raise ToolException(f"[{tool_name}] ValidationError: {'; '.join(error_msgs)}") from e

"""VerArgs: resilient recovery of LLM tool-call arguments."""

from .core import ExhaustedError, ParameterSchema, ParserConfig, ToolInfo
from .core.tool_utils import parse_tool_args
from .parsing import ParseResult, RecoveryTier, SmartArgumentsParser, parse_arguments

__version__ = "0.1.0"

__all__ = [
    "ExhaustedError",
    "ParameterSchema",
    "ParserConfig",
    "ToolInfo",
    "ParseResult",
    "RecoveryTier",
    "SmartArgumentsParser",
    "parse_arguments",
    "parse_tool_args",
]

from .config import ParserConfig
from .exceptions import ConfigException, ExhaustedError, ParseError, ToolException, VerArgsException
from .schema import ParameterSchema, ToolInfo
from .value import PropertyType, Value, ValueKind, kind_of

__all__ = [
    "ParserConfig",
    "VerArgsException",
    "ConfigException",
    "ParseError",
    "ToolException",
    "ExhaustedError",
    "ParameterSchema",
    "ToolInfo",
    "PropertyType",
    "Value",
    "ValueKind",
    "kind_of",
]

"""异常体系"""

from typing import Any, Optional


class VerArgsException(Exception):
    """VerArgs基础异常类"""
    pass


class ConfigException(VerArgsException):
    """配置相关异常"""
    pass


class ParseError(VerArgsException):
    """严格JSON解析失败"""

    def __init__(self, message: str, position: Optional[int] = None):
        self.message = message
        self.position = position
        super().__init__(message if position is None else f"{message} (at char {position})")


class ToolException(VerArgsException):
    """工具相关异常"""
    pass


class ExhaustedError(ToolException):
    """所有恢复策略都失败后抛出，携带工具名与原始参数便于排查。"""

    def __init__(self, tool_name: str, raw_arguments: Optional[str], schema: Any = None, message: Optional[str] = None):
        self.tool_name = tool_name
        self.raw_arguments = raw_arguments
        self.schema = schema
        self.message = message or "Failed to parse arguments after all attempts"
        super().__init__(f"[{tool_name}] ExhaustedError: {self.message}")

"""参数校验：必填字段与类型检查。"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from loguru import logger as log

from verargs.core.schema import ParameterSchema
from verargs.core.value import (
    PropertyType,
    ValueKind,
    is_boolean_literal,
    is_integer_literal,
    is_number_literal,
    kind_of,
)

# 带引号的标量：字符串内容本身可解析为目标类型时视为合法
_QUOTED_SCALAR_CHECKS = {
    PropertyType.INTEGER: is_integer_literal,
    PropertyType.NUMBER: is_number_literal,
    PropertyType.BOOLEAN: is_boolean_literal,
}


def is_valid_type(value: Any, schema: Optional[ParameterSchema]) -> bool:
    """检查值是否符合属性声明的类型，null 交给必填检查处理。"""
    if value is None or schema is None:
        return True
    ptype = schema.property_type
    kind = kind_of(value)
    if ptype.accepts(kind):
        return True
    check = _QUOTED_SCALAR_CHECKS.get(ptype)
    return kind is ValueKind.STRING and check is not None and check(value)


class ParameterValidator:
    """参数验证器，所有方法都不会抛出异常。"""

    def __init__(self, logger=None):
        self.log = logger or log

    def validate(self, arguments: Mapping[str, Any], schema: ParameterSchema, tool_name: str = "tool") -> bool:
        try:
            if not self.check_required(arguments, schema, tool_name):
                self.log.debug("Required fields validation failed for tool [{}]", tool_name)
                return False
            if not self.check_types(arguments, schema, tool_name):
                self.log.debug("Parameter types validation failed for tool [{}]", tool_name)
                return False
        except Exception as exc:  # schema or mapping of an unexpected shape
            self.log.warning("Parameter validation error for tool [{}]: {}", tool_name, exc)
            return False
        self.log.debug("Parameter validation passed for tool [{}]", tool_name)
        return True

    def check_required(self, arguments: Mapping[str, Any], schema: ParameterSchema, tool_name: str = "tool") -> bool:
        """每个必填字段都存在、非 null，字符串去空白后非空。"""
        try:
            for field in schema.required:
                if field not in arguments:
                    self.log.debug("Missing required field [{}] in tool [{}]", field, tool_name)
                    return False
                value = arguments[field]
                if value is None:
                    self.log.debug("Required field [{}] is null in tool [{}]", field, tool_name)
                    return False
                if isinstance(value, str) and not value.strip():
                    self.log.debug("Required field [{}] is blank in tool [{}]", field, tool_name)
                    return False
            return True
        except Exception as exc:
            self.log.warning("Required fields check error for tool [{}]: {}", tool_name, exc)
            return False

    def check_types(self, arguments: Mapping[str, Any], schema: ParameterSchema, tool_name: str = "tool") -> bool:
        """已声明的参数必须类型匹配，未声明的参数允许存在。"""
        try:
            for name, value in arguments.items():
                prop = schema.property_schema(name)
                if prop is None:
                    self.log.debug("Unknown parameter [{}] in tool [{}]", name, tool_name)
                    continue
                if not is_valid_type(value, prop):
                    self.log.debug(
                        "Invalid type for parameter [{}] in tool [{}], expected [{}], got [{}]",
                        name,
                        tool_name,
                        prop.type,
                        type(value).__name__,
                    )
                    return False
            return True
        except Exception as exc:
            self.log.warning("Parameter types check error for tool [{}]: {}", tool_name, exc)
            return False

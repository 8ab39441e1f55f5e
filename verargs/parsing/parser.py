"""智能参数解析器：多级恢复策略，逐级校验。"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger as log
from pydantic import BaseModel, Field

from verargs.core.config import ParserConfig
from verargs.core.exceptions import ExhaustedError, ParseError
from verargs.core.schema import ParameterSchema, ToolInfo

from .cleaner import clean_json
from .decoder import decode_object
from .defaults import default_value
from .fixer import ArgumentsBuilder, ParameterFixer
from .matcher import KeyMatcher
from .validator import ParameterValidator


class RecoveryTier(str, Enum):
    """产出结果的恢复阶段。"""

    DIRECT = "direct"
    CLEANED = "cleaned"
    FIXED = "fixed"
    EXTRACTED = "extracted"
    PARTIAL = "partial"


class ParseResult(BaseModel):
    """解析结果；degraded 表示必填字段由默认值补齐。"""

    arguments: Dict[str, Any] = Field(default_factory=dict)
    tier: RecoveryTier
    degraded: bool = False


class SmartArgumentsParser:
    """
    将模型返回的工具参数文本恢复为符合 schema 的参数字典。

    依次尝试：直接解析 -> 清理后解析（失败则按 schema 修复）-> 容错提取 ->
    补齐必填字段。每一级都经过校验，首个通过的结果即返回；全部失败时抛出
    ExhaustedError。解析器本身无状态，可在多个调用方之间共享。
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        validator: Optional[ParameterValidator] = None,
        fixer: Optional[ParameterFixer] = None,
        logger=None,
    ):
        self.config = config or ParserConfig()
        self.log = logger or log
        self.validator = validator or ParameterValidator(logger=self.log)
        self.fixer = fixer or ParameterFixer(KeyMatcher(self.config.frozen_synonyms()), logger=self.log)

    def parse_arguments(self, raw_arguments: Optional[str], tool: Any) -> ParseResult:
        """
        解析工具参数。

        :param raw_arguments: 模型返回的参数文本，名义上是 JSON。
        :param tool: ToolInfo、OpenAI 工具定义或参数 schema 字典。
        :raises ExhaustedError: 所有恢复策略都失败。
        """
        info = ToolInfo.coerce(tool)
        schema = info.parameters
        name = info.name
        raw = raw_arguments if raw_arguments is not None else ""
        self.log.debug("Starting smart parsing for tool [{}] with arguments: {}", name, raw)

        # 第一次尝试：直接解析
        try:
            args = decode_object(raw)
            if self.validator.validate(args, schema, name):
                self.log.debug("Direct parsing successful for tool [{}]", name)
                return ParseResult(arguments=args, tier=RecoveryTier.DIRECT)
            self.log.debug("Direct parsing result validation failed for tool [{}]", name)
        except ParseError as exc:
            self.log.debug("Direct parsing failed for tool [{}]: {}", name, exc)

        # 第二次尝试：清理后解析，校验失败时按 schema 修复
        try:
            args = decode_object(clean_json(raw))
            if self.validator.validate(args, schema, name):
                self.log.debug("Cleaned parsing successful for tool [{}]", name)
                return ParseResult(arguments=args, tier=RecoveryTier.CLEANED)
            fixed = self.fixer.fix_parameters(args, schema, name)
            if self.validator.validate(fixed, schema, name):
                self.log.debug("Parameter fixing successful for tool [{}]", name)
                return ParseResult(arguments=fixed, tier=RecoveryTier.FIXED)
            self.log.debug("Parameter fixing validation failed for tool [{}]", name)
        except ParseError as exc:
            self.log.debug("Cleaned parsing failed for tool [{}]: {}", name, exc)

        # 第三次尝试：容错提取，基于原始文本
        extracted = self.fixer.extract(raw, schema, name)
        if extracted:
            if self.validator.validate(extracted, schema, name):
                self.log.debug("Intelligent fix successful for tool [{}]", name)
                return ParseResult(arguments=extracted, tier=RecoveryTier.EXTRACTED)
            self.log.debug("Intelligent fix validation failed for tool [{}], attempting partial fix", name)

            # 第四次尝试：补齐必填字段，只检查必填
            if self.config.enable_partial_fill:
                partial = self.ensure_required_fields(extracted, schema, name)
                if self.validator.check_required(partial, schema, name):
                    self.log.warning("Using partially fixed arguments for tool [{}]", name)
                    return ParseResult(arguments=partial, tier=RecoveryTier.PARTIAL, degraded=True)

        self.log.error("All parsing attempts failed for tool [{}] with arguments: {}", name, raw)
        raise ExhaustedError(
            name,
            raw_arguments,
            schema=schema,
            message="Failed to parse arguments after all attempts",
        )

    def ensure_required_fields(self, arguments: Dict[str, Any], schema: ParameterSchema, tool_name: str = "tool") -> Dict[str, Any]:
        """为缺失或为 null 的必填字段生成默认值，返回新字典。"""
        builder = ArgumentsBuilder(arguments)
        for field in schema.required:
            value = default_value(field, schema.property_schema(field), self.config.default_placeholder)
            if builder.setdefault_missing(field, value):
                self.log.debug("Added default value for required field [{}] in tool [{}]", field, tool_name)
        return builder.build()


# 便捷函数
def parse_arguments(raw_arguments: Optional[str], tool: Any, config: Optional[ParserConfig] = None) -> Dict[str, Any]:
    """使用默认配置解析，只返回参数字典。"""
    return SmartArgumentsParser(config=config).parse_arguments(raw_arguments, tool).arguments

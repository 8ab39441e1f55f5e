"""配置管理"""

import os
from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field


class ParserConfig(BaseModel):
    """VerArgs解析器配置类"""

    # 系统配置
    debug: bool = False
    log_level: str = "INFO"

    # 恢复策略配置
    enable_partial_fill: bool = True
    default_placeholder: str = "默认值"
    synonyms: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """从环境变量创建配置"""
        return cls(
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            enable_partial_fill=os.getenv("PARTIAL_FILL", "true").lower() == "true",
            default_placeholder=os.getenv("DEFAULT_PLACEHOLDER", "默认值"),
        )

    @property
    def effective_log_level(self) -> str:
        """debug 开启时强制 DEBUG，否则使用 log_level。"""
        return "DEBUG" if self.debug else self.log_level.upper()

    def frozen_synonyms(self) -> Mapping[str, str]:
        """只读的同义词表，键统一为小写。"""
        return MappingProxyType({alias.strip().lower(): name for alias, name in self.synonyms.items()})

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return self.model_dump()

"""演示：恢复模型返回的各种畸形工具参数。

Usage:
    PYTHONPATH=. python examples/parse_demo.py
"""

import sys

import dotenv
from loguru import logger

from verargs import ExhaustedError, ParserConfig, SmartArgumentsParser, ToolInfo

dotenv.load_dotenv()

config = ParserConfig.from_env()
logger.remove()
logger.add(sys.stderr, level=config.effective_log_level)

tool = ToolInfo.from_openai_tool(
    {
        "type": "function",
        "function": {
            "name": "create_user",
            "description": "创建用户",
            "parameters": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "姓名"},
                    "age": {"type": "integer", "description": "年龄"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["name", "age"],
            },
        },
    }
)

samples = [
    '{"name":"张三","age":25}',
    '{"name"："张三"，"age"：25，}',
    '{"Name": "张三", "agee": "25"}',
    "name: 张三, age: 25",
    "name: 张三",
    "completely broken json",
]

parser = SmartArgumentsParser(config=config)
for raw in samples:
    try:
        result = parser.parse_arguments(raw, tool)
        print(f"{raw!r:40} -> [{result.tier.value}{' degraded' if result.degraded else ''}] {result.arguments}")
    except ExhaustedError as exc:
        print(f"{raw!r:40} -> {exc}")

from __future__ import annotations

import pytest

from verargs.core.schema import ToolInfo


@pytest.fixture
def person_tool() -> ToolInfo:
    return ToolInfo.from_openai_tool(
        {
            "type": "function",
            "function": {
                "name": "test_tool",
                "description": "测试工具",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "description": "姓名"},
                        "age": {"type": "integer", "description": "年龄"},
                    },
                    "required": ["name", "age"],
                },
            },
        }
    )

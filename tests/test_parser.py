from __future__ import annotations

import pytest

from verargs.core.config import ParserConfig
from verargs.core.exceptions import ExhaustedError
from verargs.parsing.parser import ParseResult, RecoveryTier, SmartArgumentsParser, parse_arguments


@pytest.fixture
def parser() -> SmartArgumentsParser:
    return SmartArgumentsParser()


def test_direct_parse(parser, person_tool) -> None:
    result = parser.parse_arguments('{"name":"张三","age":25}', person_tool)
    assert result.tier is RecoveryTier.DIRECT
    assert result.arguments == {"name": "张三", "age": 25}
    assert not result.degraded


def test_clean_parse_full_width_punctuation(parser, person_tool) -> None:
    result = parser.parse_arguments('{"name"："张三"，"age"：25}', person_tool)
    assert result.tier is RecoveryTier.CLEANED
    assert result.arguments == {"name": "张三", "age": 25}


def test_clean_parse_trailing_comma(parser, person_tool) -> None:
    result = parser.parse_arguments('{"name": "张三", "age": 25,}', person_tool)
    assert result.tier is RecoveryTier.CLEANED


def test_quoted_scalar_is_accepted_as_is(parser, person_tool) -> None:
    result = parser.parse_arguments('{"name":"张三","age":"25"}', person_tool)
    assert result.tier is RecoveryTier.DIRECT
    assert result.arguments["age"] == "25"


def test_fix_parameters_maps_keys_and_types(parser, person_tool) -> None:
    result = parser.parse_arguments('{"Name": "张三", "agee": "25"}', person_tool)
    assert result.tier is RecoveryTier.FIXED
    assert result.arguments == {"name": "张三", "age": 25}


def test_tolerant_extraction(parser, person_tool) -> None:
    result = parser.parse_arguments("name: 张三, age: 25", person_tool)
    assert result.tier is RecoveryTier.EXTRACTED
    assert result.arguments == {"name": "张三", "age": 25}
    assert isinstance(result.arguments["age"], int)


def test_tolerant_extraction_inside_prose(parser, person_tool) -> None:
    raw = "好的，参数如下：{name: '张三'，age: 30} 请查收"
    result = parser.parse_arguments(raw, person_tool)
    assert result.tier is RecoveryTier.EXTRACTED
    assert result.arguments == {"name": "'张三'", "age": 30}


def test_unknown_keys_survive_extraction(parser, person_tool) -> None:
    result = parser.parse_arguments("name: 张三, age: 25, weather: true", person_tool)
    assert result.arguments == {"name": "张三", "age": 25, "weather": True}


def test_all_tiers_fail(parser, person_tool) -> None:
    with pytest.raises(ExhaustedError) as exc_info:
        parser.parse_arguments("completely broken json", person_tool)
    err = exc_info.value
    assert err.tool_name == "test_tool"
    assert err.raw_arguments == "completely broken json"
    assert err.schema.required == ["name", "age"]
    assert "test_tool" in str(err)


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_blank_input_is_exhausted(parser, person_tool, raw) -> None:
    with pytest.raises(ExhaustedError):
        parser.parse_arguments(raw, person_tool)


def test_partial_fill_adds_missing_required(parser, person_tool) -> None:
    result = parser.parse_arguments("name: 张三", person_tool)
    assert result.tier is RecoveryTier.PARTIAL
    assert result.degraded
    assert result.arguments == {"name": "张三", "age": 0}


def test_partial_fill_uses_name_cues() -> None:
    tool = {
        "name": "create_page",
        "parameters": {
            "properties": {
                "title": {"type": "string"},
                "content": {"type": "string"},
                "page_id": {"type": "string"},
                "link_url": {"type": "string"},
                "author_name": {"type": "string"},
                "summary_desc": {"type": "string"},
                "ratio": {"type": "number"},
                "public": {"type": "boolean"},
                "labels": {"type": "array"},
                "extra": {"type": "object"},
                "undeclared_type": {},
            },
            "required": [
                "title",
                "content",
                "page_id",
                "link_url",
                "author_name",
                "summary_desc",
                "ratio",
                "public",
                "labels",
                "extra",
                "undeclared_type",
                "not_in_properties",
            ],
        },
    }
    result = SmartArgumentsParser().parse_arguments("title: 首页", tool)
    assert result.degraded
    assert result.arguments == {
        "title": "首页",
        "content": "默认文本内容",
        "page_id": "default_id",
        "link_url": "https://example.com",
        "author_name": "默认名称",
        "summary_desc": "默认描述",
        "ratio": 0.0,
        "public": False,
        "labels": [],
        "extra": {},
        "undeclared_type": "默认值",
        "not_in_properties": "默认值",
    }


def test_partial_fill_does_not_repair_blank_strings(parser, person_tool) -> None:
    with pytest.raises(ExhaustedError):
        parser.parse_arguments('name: "", age: 3', person_tool)


def test_partial_fill_can_be_disabled(person_tool) -> None:
    parser = SmartArgumentsParser(config=ParserConfig(enable_partial_fill=False))
    with pytest.raises(ExhaustedError):
        parser.parse_arguments("name: 张三", person_tool)


def test_configured_placeholder() -> None:
    parser = SmartArgumentsParser(config=ParserConfig(default_placeholder="N/A"))
    tool = {"properties": {"a": {"type": "string"}, "b": {}}, "required": ["a", "b"]}
    assert parser.parse_arguments("a: x", tool).arguments == {"a": "x", "b": "N/A"}


def test_synonyms_from_config(person_tool) -> None:
    parser = SmartArgumentsParser(config=ParserConfig(synonyms={"xingming": "name", "nianling": "age"}))
    result = parser.parse_arguments("xingming: 张三, nianling: 25", person_tool)
    assert result.tier is RecoveryTier.EXTRACTED
    assert result.arguments == {"name": "张三", "age": 25}


def test_valid_direct_decode_never_reaches_extractor(parser, person_tool, monkeypatch) -> None:
    def _fail(*args, **kwargs):
        raise AssertionError("extractor must not run")

    monkeypatch.setattr(parser.fixer, "extract", _fail)
    monkeypatch.setattr(parser.fixer, "fix_parameters", _fail)
    assert parser.parse_arguments('{"name":"张三","age":25}', person_tool).tier is RecoveryTier.DIRECT


def test_extractor_reads_original_text(parser, person_tool, monkeypatch) -> None:
    seen = []
    original = parser.fixer.extract

    def _spy(raw, schema, tool_name="tool"):
        seen.append(raw)
        return original(raw, schema, tool_name)

    monkeypatch.setattr(parser.fixer, "extract", _spy)
    raw = "name：  张三，\n age： 25"
    parser.parse_arguments(raw, person_tool)
    assert seen == [raw]


def test_partial_fill_checks_required_fields_only(parser, person_tool) -> None:
    # no tier can type "old" as an integer, but the required fields are all present
    result = parser.parse_arguments('{"name": "张三", "age": "old",}', person_tool)
    assert result.tier is RecoveryTier.PARTIAL
    assert result.arguments == {"name": "张三", "age": "old"}


def test_non_object_json_falls_through(parser) -> None:
    tool = {"properties": {"a": {"type": "integer"}}, "required": ["a"]}
    with pytest.raises(ExhaustedError):
        parser.parse_arguments("[1, 2, 3]", tool)


def test_schema_without_properties_accepts_any_object(parser) -> None:
    assert parser.parse_arguments('{"x": 1}', {}).arguments == {"x": 1}
    assert parser.parse_arguments("x: 1", {}).arguments == {"x": 1}


def test_required_fields_guaranteed_on_success(parser, person_tool) -> None:
    for raw in ['{"name":"张三","age":25}', "name: 张三", "age: 3", "nmae: 李四"]:
        result = parser.parse_arguments(raw, person_tool)
        for field in ("name", "age"):
            value = result.arguments[field]
            assert value is not None
            assert not (isinstance(value, str) and not value.strip())


def test_injected_logger_receives_warnings(person_tool) -> None:
    messages = []

    class Sink:
        def debug(self, msg, *args):
            messages.append(("debug", msg.format(*args)))

        def warning(self, msg, *args):
            messages.append(("warning", msg.format(*args)))

        def error(self, msg, *args):
            messages.append(("error", msg.format(*args)))

    parser = SmartArgumentsParser(logger=Sink())
    parser.parse_arguments("name: 张三", person_tool)
    assert ("warning", "Using partially fixed arguments for tool [test_tool]") in messages


def test_convenience_function(person_tool) -> None:
    assert parse_arguments("name: 张三, age: 25", person_tool) == {"name": "张三", "age": 25}


def test_result_model() -> None:
    result = ParseResult(arguments={"a": 1}, tier=RecoveryTier.DIRECT)
    assert result.model_dump()["tier"] == RecoveryTier.DIRECT
    assert not result.degraded


def test_deeply_nested_array_through_extraction(parser) -> None:
    tool = {"properties": {"tags": {"type": "array"}}, "required": ["tags"]}
    result = parser.parse_arguments("tags: " + "[" * 5000 + "1" + "]" * 5000, tool)
    assert result.tier is RecoveryTier.EXTRACTED
    assert isinstance(result.arguments["tags"], list)


def test_deeply_nested_json_string_through_fixing(parser) -> None:
    tool = {"properties": {"tags": {"type": "array"}}, "required": ["tags"]}
    raw = '{"tags": "' + "[" * 5000 + "]" * 5000 + '"}'
    result = parser.parse_arguments(raw, tool)
    assert result.tier is RecoveryTier.FIXED
    assert isinstance(result.arguments["tags"], list)


def test_deeply_nested_json_is_recovered_or_exhausted(parser) -> None:
    tool = {"properties": {"tags": {"type": "array"}}, "required": ["tags"]}
    raw = '{"tags": ' + "[" * 100000 + "]" * 100000 + "}"
    try:
        result = parser.parse_arguments(raw, tool)
    except ExhaustedError:
        return
    assert isinstance(result.arguments["tags"], list)


def test_very_long_malformed_input(parser, person_tool) -> None:
    raw = "name: 张三, age: 25, " + "x" * 200000 + ", zzzz: " + "y" * 200000
    result = parser.parse_arguments(raw, person_tool)
    assert result.arguments["name"] == "张三"
    assert result.arguments["age"] == 25

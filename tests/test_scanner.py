from __future__ import annotations

from verargs.parsing.fixer import extract_pairs, object_body
from verargs.parsing.scanner import scan_pairs


def test_scan_unquoted_pairs() -> None:
    assert list(scan_pairs("name: 张三, age: 25")) == [("name", "张三"), ("age", "25")]


def test_scan_quoted_pairs() -> None:
    assert list(scan_pairs('"city": "北京", "days" : 3')) == [("city", "北京"), ("days", "3")]


def test_scan_value_stops_at_brace_and_newline() -> None:
    assert list(scan_pairs("a: 1}\nb: two words\nc:3")) == [("a", "1"), ("b", "two words"), ("c", "3")]


def test_scan_value_may_contain_colons() -> None:
    assert list(scan_pairs("url: http://x.y/z")) == [("url", "http://x.y/z")]


def test_scan_without_pairs_yields_nothing() -> None:
    assert list(scan_pairs("completely broken json")) == []
    assert list(scan_pairs("")) == []
    assert list(scan_pairs(":::")) == []


def test_scan_blank_value_keeps_the_key() -> None:
    pairs = list(scan_pairs("a: , b: 2"))
    assert [(k, v.strip()) for k, v in pairs] == [("a", ""), ("b", "2")]


def test_scan_skips_key_without_separator() -> None:
    assert list(scan_pairs("noise words here key: v")) == [("key", "v")]


def test_scan_handles_long_adversarial_input() -> None:
    text = "a" * 20000 + " " + '"' * 20000
    assert list(scan_pairs(text)) == []


def test_object_body_uses_outer_braces() -> None:
    assert object_body('prefix {"a": {"b": 1}} suffix') == '"a": {"b": 1}'
    assert object_body("no braces") == "no braces"
    assert object_body("} reversed {") == "} reversed {"


def test_extract_pairs_normalizes_first() -> None:
    assert list(extract_pairs('{"name"："张三"，"age"：25}')) == [("name", "张三"), ("age", "25")]


def test_scan_comma_glued_to_next_key_stays_in_the_key() -> None:
    # the key token only excludes quotes, blanks and colons
    assert list(scan_pairs("a: 1,b: 2")) == [("a", "1"), (",b", "2")]

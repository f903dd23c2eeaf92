"""Tests for ruleval.parsing — rule string grammar."""

import pytest

from ruleval.errors import RuleDefinitionError
from ruleval.parsing import RuleDescriptor, parse, parse_rules


class TestParse:
    def test_single_rule(self) -> None:
        assert parse("required") == [RuleDescriptor("required")]

    def test_pipeline(self) -> None:
        assert parse("required|string|size:11") == [
            RuleDescriptor("required"),
            RuleDescriptor("string"),
            RuleDescriptor("size", ("11",)),
        ]

    def test_multiple_args(self) -> None:
        assert parse("between:0,120") == [RuleDescriptor("between", ("0", "120"))]

    def test_whitespace_trimmed(self) -> None:
        assert parse(" in : male , female | string ") == [
            RuleDescriptor("in", ("male", "female")),
            RuleDescriptor("string"),
        ]

    def test_inner_whitespace_kept(self) -> None:
        assert parse("in:New York,Los Angeles") == [RuleDescriptor("in", ("New York", "Los Angeles"))]

    def test_escaped_pipe(self) -> None:
        assert parse("regex:^(a\\|b)$") == [RuleDescriptor("regex", ("^(a|b)$",))]

    def test_escaped_comma(self) -> None:
        assert parse("in:a\\,b,c") == [RuleDescriptor("in", ("a,b", "c"))]

    def test_escaped_colon_in_name(self) -> None:
        assert parse("odd\\:name") == [RuleDescriptor("odd:name")]

    def test_colons_after_first_stay_in_args(self) -> None:
        assert parse("regex:^\\d{2}:\\d{2}$") == [RuleDescriptor("regex", ("^\\d{2}:\\d{2}$",))]

    def test_empty_segments_dropped(self) -> None:
        assert parse("required||string|") == [RuleDescriptor("required"), RuleDescriptor("string")]

    def test_blank_segment_dropped(self) -> None:
        assert parse("required|   |string") == [RuleDescriptor("required"), RuleDescriptor("string")]

    def test_empty_string(self) -> None:
        assert parse("") == []

    def test_colon_without_args(self) -> None:
        assert parse("size:") == [RuleDescriptor("size")]

    def test_order_preserved(self) -> None:
        names = [d.name for d in parse("c|a|b")]
        assert names == ["c", "a", "b"]


class TestRuleDescriptor:
    def test_str_without_args(self) -> None:
        assert str(RuleDescriptor("required")) == "required"

    def test_str_with_args(self) -> None:
        assert str(RuleDescriptor("between", ("0", "120"))) == "between:0,120"

    def test_frozen(self) -> None:
        descriptor = RuleDescriptor("required")
        with pytest.raises(AttributeError):
            descriptor.name = "string"  # type: ignore[misc]


class TestParseRules:
    def test_flat(self) -> None:
        assert parse_rules({"name": "required|string"}) == {
            "name": [RuleDescriptor("required"), RuleDescriptor("string")],
        }

    def test_nested(self) -> None:
        parsed = parse_rules({"address": {"zip": "digits:5"}})
        assert parsed == {"address": {"zip": [RuleDescriptor("digits", ("5",))]}}

    def test_invalid_spec_raises(self) -> None:
        with pytest.raises(RuleDefinitionError, match="age"):
            parse_rules({"age": 18})

    def test_definition_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            parse_rules({"tags": ["required"]})

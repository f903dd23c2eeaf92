"""Tests for ruleval.errors — exception hierarchy and error messages."""

from ruleval.errors import (
    ConfigurationError,
    RuleDefinitionError,
    RulevalError,
    UnknownRuleError,
)


class TestHierarchy:
    def test_configuration_error_is_ruleval_error(self) -> None:
        assert issubclass(ConfigurationError, RulevalError)

    def test_rule_definition_error_is_type_error(self) -> None:
        assert issubclass(RuleDefinitionError, RulevalError)
        assert issubclass(RuleDefinitionError, TypeError)

    def test_unknown_rule_is_lookup_error(self) -> None:
        assert issubclass(UnknownRuleError, RulevalError)
        assert issubclass(UnknownRuleError, LookupError)


class TestUnknownRuleError:
    def test_fields(self) -> None:
        err = UnknownRuleError(rule="integr", field="age")
        assert err.rule == "integr"
        assert err.field == "age"

    def test_str_with_field(self) -> None:
        assert str(UnknownRuleError(rule="integr", field="age")) == "Unknown rule 'integr' on field 'age'"

    def test_str_without_field(self) -> None:
        assert str(UnknownRuleError(rule="integr")) == "Unknown rule 'integr'"

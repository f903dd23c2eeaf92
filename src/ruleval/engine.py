"""Validation engine — applies a rule set to a record.

Usage::

    from ruleval import Validator

    validator = Validator()
    result = validator.validate(
        {"name": "Peter", "age": 24},
        {"name": "required|string", "age": "integer|between:0,120"},
    )
    if not result:
        print(result.rejects[0].field, result.rejects[0].rule)

Per field, every rule of its rule string runs in order. Presence rules
(``required``, ``required_with``, ...) always run; value rules only run
when the field is in the record. Nested rule sets recurse into the
matching nested record.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from ruleval.config import ValidatorConfig
from ruleval.errors import UnknownRuleError
from ruleval.parsing import ParsedRules, RuleDescriptor, parse_rules
from ruleval.registry import Registry, run
from ruleval.result import Reject, ValidationResult, invalid_input

logger = logging.getLogger("ruleval.engine")


class Validator:
    """Validates records against rule sets.

    Each instance owns its registry and configuration; construct one per
    configuration instead of sharing a global::

        strict = Validator(ValidatorConfig(strict=True))
        lenient = Validator()
        lenient.add("is_even", lambda record, value: value % 2 == 0)
    """

    __slots__ = ("_config", "registry")

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        registry: Registry | None = None,
    ) -> None:
        self._config = config or ValidatorConfig()
        self.registry = registry or Registry.default()

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    def set_config(self, options: Mapping[str, Any] | None = None, **overrides: Any) -> ValidatorConfig:
        """Merge *options* and keyword *overrides* into the configuration.

        Unrecognised option names are logged and ignored::

            validator.set_config(resume_on_failed=True)
            validator.set_config({"resumeOnFailed": True})
        """
        merged = {**(options or {}), **overrides}
        self._config, ignored = self._config.merge(merged)
        for name in ignored:
            logger.warning("Ignoring unknown validator option %r", name)
        return self._config

    def add(self, name: str, entry: Any) -> bool:
        """Register a custom value rule. See ``Registry.add``."""
        return self.registry.add(name, entry)

    def validate(self, record: Mapping[str, Any] | str | bytes, rules: Mapping[str, Any]) -> ValidationResult:
        """Validate *record* against *rules*.

        *record* may be a JSON document; one that does not decode to an
        object yields a single ``invalid_input`` reject and no rule runs.
        Raises ``RuleDefinitionError`` for malformed rule sets and, in
        strict mode, ``UnknownRuleError`` for unregistered rule names.
        """
        if isinstance(record, (str, bytes)):
            try:
                record = json.loads(record)
            except (ValueError, RecursionError) as exc:
                return invalid_input(f"Invalid JSON string: {exc}", record)
            if not isinstance(record, Mapping):
                return invalid_input(f"Expected a JSON object, got {type(record).__name__}", record)

        parsed = parse_rules(rules)
        rejects: list[Reject] = []
        self._check(record, parsed, rejects, ())
        return ValidationResult.from_rejects(rejects)

    # -- internals --------------------------------------------------------

    def _check(
        self,
        record: Mapping[str, Any],
        rules: ParsedRules,
        rejects: list[Reject],
        path: tuple[str, ...],
    ) -> bool:
        """Walk *rules* over *record*, appending to *rejects*.

        Returns False when validation must stop (fail-fast and a reject
        was recorded).
        """
        for field_name, spec in rules.items():
            if isinstance(spec, dict):
                if field_name not in record:
                    continue
                nested = record[field_name]
                if not isinstance(nested, Mapping):
                    nested = {}
                if not self._check(nested, spec, rejects, (*path, field_name)):
                    return False
                continue

            for descriptor in spec:
                if not self._check_rule(record, field_name, descriptor):
                    rejects.append(Reject(field=field_name, rule=descriptor.name, record=record, path=path))
                    logger.debug("Rejected %s by rule %r", ".".join((*path, field_name)), str(descriptor))
                    if not self._config.resume_on_failed:
                        return False
        return True

    def _check_rule(self, record: Mapping[str, Any], field_name: str, descriptor: RuleDescriptor) -> bool:
        resolved = self.registry.resolve(descriptor.name)
        if resolved is None:
            if self._config.strict:
                raise UnknownRuleError(rule=descriptor.name, field=field_name)
            logger.debug("Skipping unknown rule %r on field %r", descriptor.name, field_name)
            return True

        group, entry = resolved
        if group == "requires":
            return run(entry, descriptor.name, record, field_name, descriptor.args, strict=self._config.strict)
        if field_name not in record:
            return True
        return run(
            entry, descriptor.name, record, record[field_name], descriptor.args, strict=self._config.strict
        )


def validate(
    record: Mapping[str, Any] | str | bytes,
    rules: Mapping[str, Any],
    **options: Any,
) -> ValidationResult:
    """Validate with a fresh ``Validator`` holding only the built-in rules.

    Keyword *options* are applied with ``set_config``::

        result = validate(form, {"email": "required|email"}, resume_on_failed=True)
    """
    validator = Validator()
    if options:
        validator.set_config(options)
    return validator.validate(record, rules)

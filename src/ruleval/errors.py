"""Ruleval exception hierarchy.

Rule violations are never raised: they come back as ``Reject`` entries on
the ``ValidationResult``. The exceptions here cover misuse of the library
itself (bad configuration, malformed rule sets, unknown rules in strict mode).
"""

from dataclasses import dataclass


class RulevalError(Exception):
    """Base for all ruleval-specific errors."""


class ConfigurationError(RulevalError):
    """Raised when a validator configuration value is invalid."""


class RuleDefinitionError(RulevalError, TypeError):
    """Raised when a rule set entry is neither a rule string nor a nested rule set."""


@dataclass(frozen=True, slots=True)
class UnknownRuleError(RulevalError, LookupError):
    """A rule string names a rule that is registered nowhere.

    Only raised when the validator runs with ``strict=True``; otherwise
    unknown rules are skipped.
    """

    rule: str
    field: str = ""

    def __str__(self) -> str:
        if self.field:
            return f"Unknown rule {self.rule!r} on field {self.field!r}"
        return f"Unknown rule {self.rule!r}"

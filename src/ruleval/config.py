"""Validator configuration.

ValidatorConfig is a frozen dataclass — each ``Validator`` holds its own
instance and swaps it for an updated copy in ``set_config()``.
"""

from dataclasses import dataclass, fields, replace
from typing import Any

from ruleval.errors import ConfigurationError

# camelCase spellings accepted by set_config() for rule files written
# against the JavaScript API
ALIASES: dict[str, str] = {
    "resumeOnFailed": "resume_on_failed",
}


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Validator configuration. Immutable after creation.

    Override what you need::

        config = ValidatorConfig(resume_on_failed=True)
    """

    # Collect every reject instead of stopping at the first one
    resume_on_failed: bool = False

    # Raise UnknownRuleError for rule names missing from the registry
    strict: bool = False

    def merge(self, options: dict[str, Any]) -> tuple["ValidatorConfig", list[str]]:
        """Return a copy with recognised *options* applied.

        Also returns the option names that were not recognised so the
        caller can report them.
        """
        known = {f.name for f in fields(self)}
        updates: dict[str, Any] = {}
        ignored: list[str] = []
        for key, value in options.items():
            name = ALIASES.get(key, key)
            if name not in known:
                ignored.append(key)
                continue
            if not isinstance(value, bool):
                msg = f"{key} must be a bool, got {type(value).__name__}"
                raise ConfigurationError(msg)
            updates[name] = value
        return replace(self, **updates), ignored

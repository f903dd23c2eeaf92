"""Validator registry — the rules a ``Validator`` can resolve by name.

Two tables, consulted in this order:

``requires``
    Presence rules, called as ``rule(record, field, *args)``. They run
    whether or not the field is in the record.

``validators``
    Value rules, only run when the field is present. Each entry is either
    a ``Predicate`` called as ``rule(record, value, *args)`` or a
    ``Pattern`` searched against the stringified value.

Custom rules::

    registry = Registry.default()
    registry.add("is_even", lambda record, value: value % 2 == 0)
    registry.add("hex", re.compile(r"^[0-9a-f]+$"))
"""

import inspect
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from ruleval.utils import to_text

logger = logging.getLogger("ruleval.registry")

# Leading positional parameters every predicate receives before its rule args
_FIXED_PARAMS = 2


@dataclass(frozen=True, slots=True)
class Predicate:
    """A callable rule with an explicit argument count.

    ``max_args=None`` means the rule takes any number of arguments
    beyond ``min_args``.
    """

    fn: Callable[..., Any]
    min_args: int = 0
    max_args: int | None = None

    @classmethod
    def of(
        cls,
        fn: Callable[..., Any],
        *,
        min_args: int | None = None,
        max_args: int | None = None,
    ) -> "Predicate":
        """Wrap *fn*, reading any arity not given from its signature."""
        inferred_min, inferred_max = _arity(fn)
        return cls(
            fn=fn,
            min_args=inferred_min if min_args is None else min_args,
            max_args=inferred_max if max_args is None else max_args,
        )

    def accepts(self, count: int) -> bool:
        if count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args

    def __call__(self, record: Mapping[str, Any], subject: Any, *args: str) -> bool:
        return bool(self.fn(record, subject, *args))


@dataclass(frozen=True, slots=True)
class Pattern:
    """A regular-expression rule, searched against the stringified value."""

    regex: re.Pattern[str]

    def __call__(self, record: Mapping[str, Any], subject: Any, *args: str) -> bool:
        return self.regex.search(to_text(subject)) is not None


type Entry = Predicate | Pattern


def _arity(fn: Callable[..., Any]) -> tuple[int, int | None]:
    """(min, max) rule-argument counts for *fn*, excluding record and value."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 0, None

    required = 0
    total = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return max(required - _FIXED_PARAMS, 0), None
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            total += 1
            if param.default is inspect.Parameter.empty:
                required += 1
    return max(required - _FIXED_PARAMS, 0), max(total - _FIXED_PARAMS, 0)


def as_entry(entry: Any) -> Entry | None:
    """Coerce *entry* into a registry entry, or None if it cannot be one."""
    if isinstance(entry, (Predicate, Pattern)):
        return entry
    if isinstance(entry, re.Pattern):
        return Pattern(entry)
    if callable(entry):
        return Predicate.of(entry)
    return None


class Registry:
    """Name → rule tables for one ``Validator``.

    Entries are only ever added or replaced; the last registration for a
    name wins.
    """

    __slots__ = ("requires", "validators")

    def __init__(
        self,
        requires: Mapping[str, Predicate] | None = None,
        validators: Mapping[str, Entry] | None = None,
    ) -> None:
        self.requires: dict[str, Predicate] = dict(requires or {})
        self.validators: dict[str, Entry] = dict(validators or {})

    @classmethod
    def default(cls) -> "Registry":
        """A fresh registry holding the built-in rules."""
        from ruleval.rules.presence import REQUIRES
        from ruleval.rules.values import VALIDATORS

        return cls(requires=REQUIRES, validators=VALIDATORS)

    def copy(self) -> "Registry":
        return Registry(requires=self.requires, validators=self.validators)

    def add(self, name: str, entry: Any) -> bool:
        """Register (or replace) the value rule *name*.

        *entry* may be a ``Predicate``, a ``Pattern``, a compiled regex or
        any callable taking ``(record, value, *args)``. Anything else is
        logged and dropped; returns whether the rule was registered.
        """
        coerced = as_entry(entry)
        if coerced is None:
            logger.error(
                "Invalid validator %r: expected a function or a regular expression, got %s",
                name,
                type(entry).__name__,
            )
            return False
        self.validators[name] = coerced
        return True

    def add_require(self, name: str, entry: Any) -> bool:
        """Register (or replace) the presence rule *name*.

        Presence rules are called as ``(record, field, *args)`` and so must
        be callables; patterns are rejected.
        """
        coerced = as_entry(entry)
        if not isinstance(coerced, Predicate):
            logger.error(
                "Invalid presence rule %r: expected a function, got %s",
                name,
                type(entry).__name__,
            )
            return False
        self.requires[name] = coerced
        return True

    def resolve(self, name: str) -> tuple[Literal["requires", "validators"], Entry] | None:
        """Look *name* up, presence rules first."""
        if name in self.requires:
            return "requires", self.requires[name]
        if name in self.validators:
            return "validators", self.validators[name]
        return None

    def __contains__(self, name: object) -> bool:
        return name in self.requires or name in self.validators


def run(
    entry: Entry,
    name: str,
    record: Mapping[str, Any],
    subject: Any,
    args: tuple[str, ...],
    *,
    strict: bool = False,
) -> bool:
    """Evaluate one rule.

    *subject* is the field name for presence rules and the field value for
    value rules. A predicate given too few arguments fails. Surplus
    arguments are dropped, or fail the rule when *strict* is set.
    """
    match entry:
        case Pattern():
            return entry(record, subject)
        case Predicate() if len(args) < entry.min_args or (strict and not entry.accepts(len(args))):
            logger.warning(
                "Rule %r takes %s argument(s), got %d; treating as failed",
                name,
                _describe_arity(entry),
                len(args),
            )
            return False
        case Predicate() if not entry.accepts(len(args)):
            logger.debug("Dropping surplus arguments %r to rule %r", args[entry.max_args :], name)
            return entry(record, subject, *args[: entry.max_args])
        case _:
            return entry(record, subject, *args)


def _describe_arity(entry: Predicate) -> str:
    if entry.max_args is None:
        return f"at least {entry.min_args}"
    if entry.max_args == entry.min_args:
        return str(entry.min_args)
    return f"{entry.min_args}-{entry.max_args}"

"""Rule string parsing.

Turns ``"required|between:0,120"`` into an ordered list of descriptors::

    [RuleDescriptor("required"), RuleDescriptor("between", ("0", "120"))]

Separators can be written literally by escaping them: ``\\|``, ``\\:``
and ``\\,``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ruleval.errors import RuleDefinitionError
from ruleval.utils import split, trim


@dataclass(frozen=True, slots=True)
class RuleDescriptor:
    """One ``name[:args]`` segment of a rule string."""

    name: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}:{','.join(self.args)}"


def parse(rule_string: str) -> list[RuleDescriptor]:
    """Parse a rule string into descriptors, in source order.

    Empty segments (``"a||b"``, a trailing ``|``) are dropped. Whitespace
    around names and arguments is stripped; whitespace inside is kept.
    """
    descriptors: list[RuleDescriptor] = []
    for segment in split(rule_string, "|", "\\|"):
        parts = split(segment, ":", "\\:")
        if not parts:
            continue
        name = trim(parts[0])
        if not name:
            continue
        args: tuple[str, ...] = ()
        if len(parts) > 1:
            # Unescaped colons after the first belong to the arguments
            params = ":".join(parts[1:])
            args = tuple(trim(arg) for arg in split(params, ",", "\\,"))
        descriptors.append(RuleDescriptor(name=name, args=args))
    return descriptors


type ParsedRules = dict[str, list[RuleDescriptor] | ParsedRules]


def parse_rules(rules: Mapping[str, Any]) -> ParsedRules:
    """Parse every rule string of a (possibly nested) rule set up front.

    Raises ``RuleDefinitionError`` for entries that are neither a rule
    string nor a nested rule set.
    """
    parsed: ParsedRules = {}
    for field_name, spec in rules.items():
        if isinstance(spec, str):
            parsed[field_name] = parse(spec)
        elif isinstance(spec, Mapping):
            parsed[field_name] = parse_rules(spec)
        else:
            msg = (
                f"Rules for field {field_name!r} must be a rule string or a "
                f"nested rule set, got {type(spec).__name__}"
            )
            raise RuleDefinitionError(msg)
    return parsed

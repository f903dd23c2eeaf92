"""Built-in presence rules.

Each rule has the signature::

    def rule(record: Mapping[str, Any], field: str, *args: str) -> bool

and answers whether the presence constraint holds, not whether the field
is there: ``required_with:phone`` passes for a missing field as long as
``phone`` is missing too.
"""

from collections.abc import Mapping
from typing import Any

from ruleval.files import FileList
from ruleval.registry import Predicate
from ruleval.utils import to_text

type Record = Mapping[str, Any]


def is_filled(value: Any) -> bool:
    """True when *value* counts as provided.

    ``None``, blank strings and empty collections are missing; ``0`` and
    ``False`` are values like any other.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, Mapping, FileList)):
        return len(value) > 0
    return True


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(record: Record, field: str) -> bool:
    """The field must be present and not blank."""
    return is_filled(record.get(field))


def required_if(record: Record, field: str, *pairs: str) -> bool:
    """``required_if:other,value,...`` — required when every *other* equals its *value*.

    Pairs are combined with AND. Companion values are compared in their
    stringified form since rule arguments are always strings.
    """
    if not pairs or len(pairs) % 2:
        return False
    for other, expected in zip(pairs[::2], pairs[1::2], strict=True):
        value = record.get(other)
        if not is_filled(value) or to_text(value) != expected:
            return True
    return required(record, field)


# ---------------------------------------------------------------------------
# Companion fields
# ---------------------------------------------------------------------------


def required_with(record: Record, field: str, *others: str) -> bool:
    """Required if any of *others* is present."""
    if any(other in record for other in others):
        return required(record, field)
    return True


def required_with_all(record: Record, field: str, *others: str) -> bool:
    """Required only if all of *others* are present."""
    if all(other in record for other in others):
        return required(record, field)
    return True


def required_without(record: Record, field: str, *others: str) -> bool:
    """Required if any of *others* is missing."""
    if any(other not in record for other in others):
        return required(record, field)
    return True


def required_without_all(record: Record, field: str, *others: str) -> bool:
    """Required only if all of *others* are missing."""
    if all(other not in record for other in others):
        return required(record, field)
    return True


REQUIRES: dict[str, Predicate] = {
    "required": Predicate.of(required),
    "required_if": Predicate.of(required_if, min_args=2),
    "required_with": Predicate.of(required_with, min_args=1),
    "required_with_all": Predicate.of(required_with_all, min_args=1),
    "required_without": Predicate.of(required_without, min_args=1),
    "required_without_all": Predicate.of(required_without_all, min_args=1),
}

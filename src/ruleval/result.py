"""Validation result — immutable outcome of validating one record."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Status(Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Reject:
    """One failed (field, rule) pair.

    ``record`` is the mapping the field was looked up in — the nested
    record for fields inside a nested rule set. ``path`` holds the names
    of the enclosing fields, outermost first.
    """

    field: str
    rule: str
    record: Any = dataclasses.field(default=None, compare=False, repr=False)
    path: tuple[str, ...] = ()
    detail: str = ""

    @property
    def location(self) -> str:
        """Dotted field path, e.g. ``"address.zip"``."""
        return ".".join((*self.path, self.field))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"field": self.location, "rule": self.rule}
        if self.detail:
            data["detail"] = self.detail
        return data


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a record against a rule set.

    The result is falsy when validation failed::

        result = validator.validate(record, rules)
        if not result:
            for reject in result.rejects:
                print(reject.location, reject.rule)

    Under fail-fast (the default) ``rejects`` holds at most one entry;
    with ``resume_on_failed=True`` it lists every failure in evaluation
    order.
    """

    status: Status
    rejects: tuple[Reject, ...] = ()

    @classmethod
    def from_rejects(cls, rejects: list[Reject]) -> "ValidationResult":
        return cls(status=Status.FAILED if rejects else Status.SUCCESS, rejects=tuple(rejects))

    @property
    def is_valid(self) -> bool:
        return self.status is Status.SUCCESS

    def __bool__(self) -> bool:
        return self.is_valid

    def errors(self) -> dict[str, list[str]]:
        """Failed rule names grouped by dotted field path."""
        grouped: dict[str, list[str]] = {}
        for reject in self.rejects:
            grouped.setdefault(reject.location, []).append(reject.rule)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form: ``{"status": ..., "rejects": [...]}``."""
        return {
            "status": self.status.value,
            "rejects": [reject.to_dict() for reject in self.rejects],
        }


def invalid_input(detail: str, raw: Any = None) -> ValidationResult:
    """Result for input that could not be read as a record."""
    return ValidationResult(
        status=Status.FAILED,
        rejects=(Reject(field="", rule="invalid_input", record=raw, detail=detail),),
    )
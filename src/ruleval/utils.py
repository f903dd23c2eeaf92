"""Stateless helpers shared by the parser, the registry and the built-in rules."""

import math
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any

from ruleval.files import File, FileList


class ValueKind(Enum):
    """Shape of a field value, used to route size-style comparisons."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"
    FILELIST = "filelist"
    REGEXP = "regexp"
    FUNCTION = "function"
    NULL = "null"


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def split(text: str | None, separator: str, escape: str) -> list[str]:
    """Split *text* on *separator*, keeping separators written as *escape*.

    ``escape`` is the escaped spelling of the separator, so::

        split("a\\|b|c", "|", "\\|")  -> ["a|b", "c"]
    """
    if not text:
        return []
    result: list[str] = []
    for i, chunk in enumerate(text.split(escape)):
        parts = chunk.split(separator)
        if i > 0:
            # The escape sat between the previous part and this one
            result[-1] += separator + parts[0]
            parts = parts[1:]
        result.extend(parts)
    return result


def trim(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip()


def to_text(value: Any) -> str:
    """Render *value* the way pattern rules see it.

    Booleans and ``None`` use their JSON spelling and integral floats drop
    the trailing ``.0`` so ``accepted`` and ``boolean`` treat decoded JSON
    and form strings alike.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_text(item) for item in value)
    if isinstance(value, File):
        return value.name
    return str(value)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def type_of(value: Any) -> ValueKind:
    """Classify *value* into a ``ValueKind``.

    ``bool`` is checked before numbers since it subclasses ``int``.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, FileList):
        return ValueKind.FILELIST
    if isinstance(value, re.Pattern):
        return ValueKind.REGEXP
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, File):
        return ValueKind.FILE
    if callable(value):
        return ValueKind.FUNCTION
    return ValueKind.OBJECT


def in_array(items: Sequence[Any], value: Any) -> bool:
    """Membership by exact equality: no coercion between str, int and bool."""
    return any(type(item) is type(value) and item == value for item in items)


def is_finite_number(value: Any) -> bool:
    return type_of(value) is ValueKind.NUMBER and math.isfinite(value)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_DATE_LAYOUTS = (
    "%Y",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_date(value: Any) -> datetime | None:
    """Parse *value* into a naive datetime, or return None.

    Accepts ISO 8601, RFC 2822 and a handful of common layouts. Aware
    results are converted to naive UTC so any two parsed dates compare.
    """
    if isinstance(value, datetime):
        return _naive(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            for layout in _DATE_LAYOUTS:
                try:
                    parsed = datetime.strptime(text, layout)
                except ValueError:
                    continue
                break
    return None if parsed is None else _naive(parsed)


def _naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(UTC).replace(tzinfo=None)


_DATE_TOKENS: tuple[tuple[str, Callable[[datetime], int]], ...] = (
    ("M+", lambda d: d.month),
    ("d+", lambda d: d.day),
    ("h+", lambda d: d.hour),
    ("m+", lambda d: d.minute),
    ("s+", lambda d: d.second),
    ("q+", lambda d: (d.month + 2) // 3),
    ("S", lambda d: d.microsecond // 1000),
)


def date_format(moment: datetime, pattern: str) -> str:
    """Render *moment* through a small token language.

    ``y+`` year (right-truncated to the token length), ``M+`` month,
    ``d+`` day, ``h+`` hour (0-23), ``m+`` minute, ``s+`` second,
    ``q+`` quarter, ``S`` milliseconds. Multi-letter tokens are zero-padded
    to their length. Only the first run of each token is replaced::

        date_format(datetime(2015, 3, 7, 9, 5), "yyyy-MM-dd hh:mm")
        -> "2015-03-07 09:05"
    """
    match = re.search(r"y+", pattern)
    if match:
        year = str(moment.year)
        width = len(match.group())
        pattern = pattern[: match.start()] + year[-width:] + pattern[match.end() :]

    for token, getter in _DATE_TOKENS:
        match = re.search(token, pattern)
        if not match:
            continue
        run = match.group()
        number = getter(moment)
        rendered = str(number) if len(run) == 1 else str(number).zfill(len(run))
        pattern = pattern[: match.start()] + rendered + pattern[match.end() :]
    return pattern

"""Built-in value rules.

Predicates have the signature::

    def rule(record: Mapping[str, Any], value: Any, *args: str) -> bool

Rule arguments arrive as strings straight from the rule string, so
numeric bounds are converted here. Patterns are searched against the
stringified value (see ``ruleval.utils.to_text``).
"""

import ipaddress
import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from ruleval.files import File, kilobytes
from ruleval.registry import Entry, Pattern, Predicate
from ruleval.utils import ValueKind, date_format, in_array, is_finite_number, parse_date, to_text, type_of

type Record = Mapping[str, Any]


def _number(arg: str) -> float | None:
    try:
        result = float(arg)
    except ValueError:
        return None
    return None if math.isnan(result) else result


# ---------------------------------------------------------------------------
# Sizes
# ---------------------------------------------------------------------------


def _measure(value: Any, text_check: Callable[[str], bool], number_check: Callable[[float], bool]) -> bool:
    """Dispatch a size comparison on the shape of *value*.

    Strings use *text_check*; numbers and file sizes in kilobytes use
    *number_check*. A file list passes when it is non-empty and every file
    in it passes.
    """
    match type_of(value):
        case ValueKind.STRING:
            return text_check(value)
        case ValueKind.NUMBER:
            return number_check(value)
        case ValueKind.FILE:
            return number_check(kilobytes(value))
        case ValueKind.FILELIST:
            if not len(value):
                return False
            return all(number_check(kilobytes(item)) for item in value if isinstance(item, File))
        case _:
            return False


def between(record: Record, value: Any, low: str, high: str) -> bool:
    """``between:min,max`` — inclusive on both ends."""
    low_n, high_n = _number(low), _number(high)
    return _measure(
        value,
        lambda text: low <= text <= high,
        lambda n: low_n is not None and high_n is not None and low_n <= n <= high_n,
    )


def min_(record: Record, value: Any, bound: str) -> bool:
    """``min:value``"""
    bound_n = _number(bound)
    return _measure(value, lambda text: text >= bound, lambda n: bound_n is not None and n >= bound_n)


def max_(record: Record, value: Any, bound: str) -> bool:
    """``max:value``"""
    bound_n = _number(bound)
    return _measure(value, lambda text: text <= bound, lambda n: bound_n is not None and n <= bound_n)


def size(record: Record, value: Any, expected: str) -> bool:
    """``size:value`` — character count for strings, the value itself for
    numbers, kilobytes for files.
    """
    expected_n = _number(expected)
    if expected_n is None:
        return False
    return _measure(value, lambda text: len(text) == expected_n, lambda n: n == expected_n)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def array(record: Record, value: Any) -> bool:
    return type_of(value) is ValueKind.ARRAY


def string(record: Record, value: Any) -> bool:
    return type_of(value) is ValueKind.STRING


def numeric(record: Record, value: Any) -> bool:
    return is_finite_number(value)


def integer(record: Record, value: Any) -> bool:
    if not is_finite_number(value):
        return False
    return isinstance(value, int) or value.is_integer()


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def date(record: Record, value: Any) -> bool:
    return parse_date(value) is not None


def after(record: Record, value: Any, moment: str) -> bool:
    """``after:date`` — strictly later than *moment*."""
    parsed, limit = parse_date(value), parse_date(moment)
    if parsed is None or limit is None:
        return False
    return parsed > limit


def before(record: Record, value: Any, moment: str) -> bool:
    """``before:date`` — strictly earlier than *moment*."""
    parsed, limit = parse_date(value), parse_date(moment)
    if parsed is None or limit is None:
        return False
    return parsed < limit


def date_format_(record: Record, value: Any, pattern: str) -> bool:
    """``date_format:format`` — *value* renders back to itself through *pattern*.

    This is a round trip, not a parser: ``2015-3-7`` does not match
    ``yyyy-MM-dd`` because it renders as ``2015-03-07``.
    """
    if not isinstance(value, str):
        return False
    parsed = parse_date(value)
    if parsed is None:
        return False
    return date_format(parsed, pattern) == value


# ---------------------------------------------------------------------------
# Comparison with other fields
# ---------------------------------------------------------------------------


def different(record: Record, value: Any, other: str) -> bool:
    """``different:field``"""
    return value != record.get(other)


def same(record: Record, value: Any, other: str) -> bool:
    """``same:field``"""
    return value == record.get(other)


# ---------------------------------------------------------------------------
# Digits
# ---------------------------------------------------------------------------

_COUNT_RE = re.compile(r"[0-9]+")


def _is_count(arg: str) -> bool:
    return _COUNT_RE.fullmatch(arg) is not None


def digits(record: Record, value: Any, count: str) -> bool:
    """``digits:n`` — exactly *n* digits."""
    if not _is_count(count):
        return False
    return re.fullmatch(rf"[0-9]{{{count}}}", to_text(value)) is not None


def digits_between(record: Record, value: Any, low: str, high: str) -> bool:
    """``digits_between:min,max``"""
    if not (_is_count(low) and _is_count(high)) or int(low) > int(high):
        return False
    return re.fullmatch(rf"[0-9]{{{low},{high}}}", to_text(value)) is not None


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def in_(record: Record, value: Any, *choices: str) -> bool:
    """``in:foo,bar,...``"""
    return in_array(choices, value)


def not_in(record: Record, value: Any, *choices: str) -> bool:
    """``not_in:foo,bar,...``"""
    return not in_array(choices, value)


def mimes(record: Record, value: Any, *extensions: str) -> bool:
    """``mimes:jpg,png,...`` — the file name's extension is one of *extensions*."""
    name = value.name if isinstance(value, File) else to_text(value)
    _, dot, extension = name.rpartition(".")
    if not dot:
        return False
    return in_array(extensions, extension)


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------


def ip(record: Record, value: Any) -> bool:
    """IPv4 or IPv6 address (IPv6 may carry a ``%zone``)."""
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def regex(record: Record, value: Any, *parts: str) -> bool:
    """``regex:pattern`` — *pattern* is searched, anchor it to match fully.

    Unescaped commas split the pattern into several arguments; they are
    joined back so ``regex:^[0-9]{2,4}$`` works as written.
    """
    return re.search(",".join(parts), to_text(value)) is not None


_EMAIL_RE = re.compile(r"\w[-\w.+]*@([A-Za-z0-9][-A-Za-z0-9]+\.)+[A-Za-z]{2,14}")

# Scheme optional; IPv4 or domain host; optional port and path
_URL_RE = re.compile(
    r"^((https|http|ftp|rtsp|mms)?://)?"
    r"(([0-9a-z_!~*'().&=+$%-]+: )?[0-9a-z_!~*'().&=+$%-]+@)?"
    r"(([0-9]{1,3}\.){3}[0-9]{1,3}|([0-9a-z_!~*'()-]+\.)*([0-9a-z][0-9a-z-]{0,61})?[0-9a-z]\.[a-z]{2,6})"
    r"(:[0-9]{1,4})?"
    r"((/?)|(/[0-9a-z_!~*'().;?:@&=+$,%#-]+)+/?)$",
    re.IGNORECASE,
)


VALIDATORS: dict[str, Entry] = {
    "accepted": Pattern(re.compile(r"^(yes|on|1|true)$", re.IGNORECASE)),
    "after": Predicate.of(after),
    "alpha": Pattern(re.compile(r"^[A-Za-z]+$")),
    "alpha_dash": Pattern(re.compile(r"^[0-9A-Za-z_-]+$")),
    "alpha_num": Pattern(re.compile(r"^[0-9A-Za-z]+$")),
    "array": Predicate.of(array),
    "before": Predicate.of(before),
    "between": Predicate.of(between),
    "boolean": Pattern(re.compile(r"""^(true|false|1|0|"1"|"0"|'1'|'0')$""", re.IGNORECASE)),
    "date": Predicate.of(date),
    "date_format": Predicate.of(date_format_),
    "different": Predicate.of(different),
    "digits": Predicate.of(digits),
    "digits_between": Predicate.of(digits_between),
    "email": Pattern(_EMAIL_RE),
    "in": Predicate.of(in_, min_args=1),
    "integer": Predicate.of(integer),
    "ip": Predicate.of(ip),
    "max": Predicate.of(max_),
    "mimes": Predicate.of(mimes, min_args=1),
    "min": Predicate.of(min_),
    "not_in": Predicate.of(not_in, min_args=1),
    "numeric": Predicate.of(numeric),
    "regex": Predicate.of(regex, min_args=1),
    "same": Predicate.of(same),
    "size": Predicate.of(size),
    "string": Predicate.of(string),
    "url": Pattern(_URL_RE),
}

"""
Scalar and enumeration coercion used by the field mapper.

Every converter raises :py:class:`ValueError` or :py:class:`TypeError` when
the wire value cannot be represented by the requested type; deciding what a
failure means for the surrounding model is up to :py:mod:`vimeo_serde.mapper`.
Enumerations are the exception: :py:func:`coerce_enum` never fails.
"""

import collections.abc
import copy
import datetime
import decimal
import enum
import logging
import math
import typing

from .types import JSONValue
from .utils import Absent

logger = logging.getLogger(__name__)

E = typing.TypeVar("E", bound=enum.Enum)


def coerce_enum(enum_type: typing.Type[E], raw: typing.Any) -> typing.Optional[E]:
    """
    Converts a raw wire value into a member of ``enum_type`` by value.

    :param Type[Enum] enum_type: the enumeration.
    :param Any raw: the raw value, usually a string.
    :return: the matching member, or None if ``raw`` matches none of them.
    """
    if isinstance(raw, enum_type):
        return raw
    try:
        return enum_type(raw)
    except (ValueError, TypeError):
        return None


def coerce_enum_list(
    enum_type: typing.Type[E], raws: typing.Iterable[typing.Any]
) -> typing.List[E]:
    """
    Converts each of ``raws`` with :py:func:`coerce_enum`, silently dropping
    the values that are not known to ``enum_type``. The order of the surviving
    items is preserved.
    """
    result: typing.List[E] = []
    for raw in raws:
        member = coerce_enum(enum_type, raw)
        if member is None:
            logger.debug("dropping unknown %s value %r", enum_type.__name__, raw)
            continue
        result.append(member)
    return result


def parse_timestamp(value: str) -> datetime.datetime:
    """
    Parses an ISO-8601 timestamp. ``Z`` designates UTC, and a timestamp without
    any offset is taken as UTC as well, so the result is always timezone-aware.
    """
    s = value.strip()
    if s[-1:] in ("Z", "z"):
        s = s[:-1] + "+00:00"
    result = datetime.datetime.fromisoformat(s)
    if result.tzinfo is None:
        result = result.replace(tzinfo=datetime.timezone.utc)
    return result


def _to_decimal(value: typing.Any) -> decimal.Decimal:
    if isinstance(value, bool):
        raise TypeError(f"{value!r} is not a number")
    if isinstance(value, (int, float, decimal.Decimal)):
        d = decimal.Decimal(str(value))
    elif isinstance(value, str):
        try:
            d = decimal.Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ValueError(f"{value!r} is not a numeric string")
    else:
        raise TypeError(f"{value!r} is not a number")
    if not d.is_finite():
        raise ValueError(f"{value!r} is not a finite number")
    return d


def _to_int(value: typing.Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    d = _to_decimal(value)
    if d != d.to_integral_value():
        raise ValueError(f"{value!r} is not an integer")
    return int(d)


def _to_float(value: typing.Any) -> float:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{value!r} is not a finite number")
        return value
    return float(_to_decimal(value))


def _to_bool(value: typing.Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("true", "1"):
            return True
        elif v in ("false", "0"):
            return False
    elif isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"{value!r} is not a boolean")


def _to_str(value: typing.Any) -> str:
    if isinstance(value, str):
        return value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"{value!r} is not a string")


def _to_datetime(value: typing.Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{value!r} is not a timestamp string")
    return parse_timestamp(value)


def _to_date(value: typing.Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    elif isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{value!r} is not a date string")
    try:
        return datetime.date.fromisoformat(value.strip())
    except ValueError:
        return parse_timestamp(value).date()


SCALAR_CONVERTERS: typing.Mapping[type, typing.Callable[[typing.Any], typing.Any]] = {
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    decimal.Decimal: _to_decimal,
    str: _to_str,
    datetime.datetime: _to_datetime,
    datetime.date: _to_date,
}


def unwrap_optional(typ: typing.Any) -> typing.Any:
    """
    Returns ``X`` for ``Optional[X]``, otherwise ``typ`` itself.
    """
    if typing.get_origin(typ) is typing.Union:
        args = [a for a in typing.get_args(typ) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return typ


def sequence_item_type(typ: typing.Any) -> typing.Optional[typing.Any]:
    """
    Returns ``X`` for ``List[X]`` or ``Sequence[X]``, otherwise None.
    """
    origin = typing.get_origin(typ)
    if origin not in (list, tuple, collections.abc.Sequence):
        return None
    args = typing.get_args(typ)
    if not args:
        return typing.Any
    return args[0]


def is_opaque_type(typ: typing.Any) -> bool:
    return typ in (typing.Any, object, dict, list) or typing.get_origin(typ) in (
        dict,
        collections.abc.Mapping,
    )


def convert(typ: typing.Any, value: JSONValue) -> typing.Any:
    """
    Converts ``value`` into ``typ``.

    :param Any typ: the declared type of an attribute.
    :param JSONValue value: the wire value. ``None`` is passed through.
    :return: the converted value, or :py:data:`Absent` for a value unknown to
             an enumeration type.
    :raises ValueError: if ``value`` is malformed.
    :raises TypeError: if ``value`` is of a type that cannot be converted.
    """
    if value is None:
        return None

    typ = unwrap_optional(typ)
    if is_opaque_type(typ):
        if typ is dict and not isinstance(value, collections.abc.Mapping):
            raise TypeError(f"{value!r} is not an object")
        if typ is list and (
            isinstance(value, str) or not isinstance(value, collections.abc.Sequence)
        ):
            raise TypeError(f"{value!r} is not an array")
        return copy.deepcopy(value)

    item_type = sequence_item_type(typ)
    if item_type is not None:
        if isinstance(value, str) or not isinstance(value, collections.abc.Sequence):
            raise TypeError(f"{value!r} is not an array")
        if isinstance(item_type, type) and issubclass(item_type, enum.Enum):
            return coerce_enum_list(item_type, value)
        return [convert(item_type, v) for v in value]

    if isinstance(typ, type) and issubclass(typ, enum.Enum):
        member = coerce_enum(typ, value)
        if member is None:
            logger.debug("unknown %s value %r", typ.__name__, value)
            return Absent
        return member

    try:
        converter = SCALAR_CONVERTERS[typ]
    except KeyError:
        raise TypeError(f"unsupported attribute type {typ!r}")
    return converter(value)


def is_supported_type(typ: typing.Any) -> bool:
    typ = unwrap_optional(typ)
    if is_opaque_type(typ):
        return True
    item_type = sequence_item_type(typ)
    if item_type is not None:
        return is_supported_type(item_type)
    if isinstance(typ, type) and issubclass(typ, enum.Enum):
        return True
    return typ in SCALAR_CONVERTERS
